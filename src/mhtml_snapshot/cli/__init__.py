"""
CLI module for snapshot extraction.
"""

from mhtml_snapshot.cli.extract import main as extract_main

__all__ = ["extract_main"]
