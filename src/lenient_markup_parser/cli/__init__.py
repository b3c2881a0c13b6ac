"""Command-line interface module for Lenient Markup Parser.

This module provides CLI tools for repairing malformed markup and inspecting
the structural event stream.
"""

from .main import main

__all__ = ["main"]
