"""Router namespace exports for FastAPI include hooks."""

from . import health, scripture

__all__ = ["health", "scripture"]
