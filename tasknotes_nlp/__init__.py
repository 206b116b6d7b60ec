"""Natural-language quick entry parser for markdown task notes."""

__version__ = "0.1.0"
