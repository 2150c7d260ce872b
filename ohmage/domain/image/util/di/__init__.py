from .provider import ImageProvider

__all__ = ["ImageProvider"]
