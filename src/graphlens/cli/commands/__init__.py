"""
CLI Commands Package.

Each command is implemented in its own module for maintainability.
"""

from . import build
from . import render
from . import filter
from . import theme

__all__ = [
    "build",
    "render",
    "filter",
    "theme",
]
