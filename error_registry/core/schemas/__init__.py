"""Shared API schemas."""

from .base import CustomBase, ORMResponse
from .error import ErrorResponse

__all__ = ["CustomBase", "ErrorResponse", "ORMResponse"]
