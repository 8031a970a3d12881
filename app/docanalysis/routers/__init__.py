"""
Routers package for FastAPI endpoints.

- analyze: Document analysis command
"""

from . import analyze

__all__ = ["analyze"]
