"""Effective cost basis of brokerage positions, including related derivatives."""

__version__ = "0.1.0"
