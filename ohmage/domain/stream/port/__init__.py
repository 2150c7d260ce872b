"""Data stream ports."""

from .stream_registry import StreamRegistry

__all__ = ["StreamRegistry"]
