"""Command-line interface module for the streaming XML formatter.

This module provides the sfxml tool, which formats markup piped through
standard input.
"""

from .main import main

__all__ = ["main"]
