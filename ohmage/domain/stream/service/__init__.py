"""Data stream services."""

from .decoder import DataStreamDecoder

__all__ = ["DataStreamDecoder"]
