"""Command-line interface for tagbump."""

from .main import app

__all__ = ["app"]
