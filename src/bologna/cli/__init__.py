"""
Bologna Command-Line Interface
==============================

- **bologna**: interactive read loop around the front end

Implemented as a Click application.
"""

__all__ = ["repl"]
