"""Router exports for the resolver service."""
from . import cache, health, streams

__all__ = ["cache", "health", "streams"]
