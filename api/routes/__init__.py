"""API route handlers."""

from api.routes import anchor, health, merkle

__all__ = ["anchor", "health", "merkle"]
