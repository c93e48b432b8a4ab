# recipeshare/api/__init__.py
from .recipes import api

__all__ = [
    "api",
]
