"""Tandem: a small runtime with a future-join combinator"""

__version__ = "0.1.0"
