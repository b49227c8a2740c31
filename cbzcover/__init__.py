"""Extract a cover thumbnail from a comic / ebook archive."""

__version__ = "0.1.0"
