"""Diff playground backend - line and word level diffs for split and unified views"""

__version__ = "1.0.0"
