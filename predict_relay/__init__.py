"""
Relay backend and trading helpers for the prediction-market dashboard.
"""

__version__ = "1.0.0"
