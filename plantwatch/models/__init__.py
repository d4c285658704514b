"""Models package — imports all models for metadata discovery."""

from plantwatch.models.base import Base, create_session_factory
from plantwatch.models.plant import Plant

__all__ = ["Base", "create_session_factory", "Plant"]
