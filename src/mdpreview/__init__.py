"""Live HTML preview of Markdown documents for Qt editors."""

__version__ = "0.1.0"
