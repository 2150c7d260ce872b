from .provider import StreamProvider

__all__ = ["StreamProvider"]
