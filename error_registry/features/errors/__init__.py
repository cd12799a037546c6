"""Error codes feature."""
