"""HTTP service exposing the stream URL resolver."""

from .app import create_app

__all__ = ["create_app"]
