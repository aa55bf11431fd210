"""
Provides txec2 version information.
"""

# This file is auto-generated! Do not edit!
# Use `python -m incremental.update txec2` to change this file.

from incremental import Version

__version__ = Version("txec2", 0, 1, 0)
__all__ = ["__version__"]
