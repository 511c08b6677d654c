"""ContentFinder: full-text search over a git content tree."""

__version__ = "0.1.0"
