"""
chitchat

Top-level package for the Chit Chat REST backend.

Responsibilities:
- Expose package version metadata.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
