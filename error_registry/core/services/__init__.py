"""Service layer base classes."""

from .base import BaseService
from .list_service import ListService

__all__ = ["BaseService", "ListService"]
