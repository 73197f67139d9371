"""Command-line interface for tacobuild."""

from .parser import CLI, main

__all__ = ["CLI", "main"]
