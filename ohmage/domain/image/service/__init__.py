"""Image domain services."""

from .access import ImageAccessService

__all__ = ["ImageAccessService"]
