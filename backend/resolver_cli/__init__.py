"""Command line client for the stream URL resolver service."""

from .app import app

__all__ = ["app"]
