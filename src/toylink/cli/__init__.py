"""
toylink Command-Line Interface
==============================

This package provides the `toylink` command, a Click-based front end that
reads a module description file, links it, and prints the report.
"""

__all__ = ["toylink"]
