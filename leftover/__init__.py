"""Leftover: a 6x6 block-placement puzzle where partial clears leave junk."""

__version__ = "0.1.0"
