"""Error translations feature."""
