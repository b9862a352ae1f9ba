"""
Command-line interface for the buildhelper package.
"""

from .main import main_cli

__all__ = [
    "main_cli",
]
