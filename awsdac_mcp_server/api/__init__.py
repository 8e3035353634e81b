"""HTTP surface of the server."""

from .main import create_app

__all__ = ["create_app"]
