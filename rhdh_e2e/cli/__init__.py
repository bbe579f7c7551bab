"""
Command line interface for the e2e utilities.
"""

from .cli import build_parser, main

__all__ = ["build_parser", "main"]
