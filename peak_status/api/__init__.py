"""
API package for the Peak Status API.
Contains FastAPI route handlers and request dependencies.
"""

from .routes import router

__all__ = [
    "router",
]
