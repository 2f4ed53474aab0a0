"""Object graph construction from settings."""
