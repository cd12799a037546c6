"""Error code registry API with offset and keyset pagination."""

__version__ = "1.0.0"
