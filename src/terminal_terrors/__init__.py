"""Terminal Terrors game backend: accounts, save data, and online presence."""

__version__ = "1.0.0"
