"""wordcapture: capture word lists, validate them against a dictionary, keep them as collections."""

__version__ = "0.1.0"
