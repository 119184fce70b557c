"""Tracklink: fulfillment webhook receiver and order tracking lookup."""

__version__ = "0.1.0"
