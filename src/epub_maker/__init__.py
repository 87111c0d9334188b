"""Build EPUB books from projects and import EPUBs back into projects."""

__version__ = "0.1.0"
