"""Phase-by-phase HTTP request timing."""

__version__ = "0.1.0"
