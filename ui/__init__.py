"""
User Interface Package

This package contains the command-line interface.

Components:
- CLI: Interactive command shell over the tracker agents
"""

from .cli import CLI

__all__ = ['CLI']
