"""
Shack Command-Line Interface
============================

- **sham**: Shack to Hack translator

Implemented as a Click application with help and error reporting.
"""

__all__ = ["sham"]
