"""Contribution-calendar walker animation: grid, walker, canvas, encoder and driver."""

__version__ = "0.1.0"
