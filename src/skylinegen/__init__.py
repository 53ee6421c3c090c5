"""
Skyline Generator - seeded synthetic relations for preference query benchmarks.

This package generates reproducible streams of level tuples whose attribute
values are independent, correlated, anti-correlated or Gaussian-shaped, and
exposes them through a forward-only, optionally peekable and resettable cursor.
"""

__version__ = "1.0.0"
