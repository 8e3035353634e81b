"""Configuration for the server."""

from .loaders import build_parser, load_from_args
from .settings import Settings

__all__ = ["Settings", "build_parser", "load_from_args"]
