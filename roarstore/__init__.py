"""Roaring bitmap containers for sets of 16-bit integers, with range and merge helpers."""

__version__ = "0.1.0"