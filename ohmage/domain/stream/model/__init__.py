"""Data stream domain models."""

from .data_stream import DataStream
from .location import Location
from .metadata import Metadata, MetadataBuilder
from .stream import Stream

__all__ = [
    "DataStream",
    "Location",
    "Metadata",
    "MetadataBuilder",
    "Stream",
]
