"""Configuration, security primitives, and shared error kinds."""
