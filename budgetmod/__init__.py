"""Budget collection: rate-based transfers from source to destination accounts."""

__version__ = "0.1.0"