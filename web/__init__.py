"""
Web interface module for QR detection.

Provides a Flask-based JSON API wrapping the detection service functions.
"""

from .app import create_app, main

__all__ = ["create_app", "main"]
