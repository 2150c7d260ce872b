"""Image domain ports."""

from .repository import ImageRepository

__all__ = ["ImageRepository"]
