"""HTTP request boundary for the Terminal Terrors backend."""
