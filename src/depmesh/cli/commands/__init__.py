"""
CLI Commands Package.

Each command is implemented in its own module for maintainability.
"""

from . import demo
from . import groups
from . import layout
from . import render
from .initialize import init

__all__ = [
    "demo",
    "groups",
    "layout",
    "render",
    "init",
]
