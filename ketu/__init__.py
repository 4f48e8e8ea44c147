"""Simulated nodes that sense one another and anneal into a grid formation."""

__version__ = "0.1.0"