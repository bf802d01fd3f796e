"""Parallel, depth- and deadline-bounded word-frequency crawler."""

__version__ = "0.1.0"
