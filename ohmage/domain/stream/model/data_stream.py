"""Decoded data stream point."""

from dataclasses import dataclass

from ohmage.domain.shared.error import InvalidInputError
from ohmage.domain.shared.model.node import Node
from ohmage.domain.stream.model.metadata import Metadata
from ohmage.domain.stream.model.stream import Stream


@dataclass(frozen=True)
class DataStream:
    """One uploaded point: its stream definition, metadata and data.

    Keeps a reference to the stream that was used to decode the data.
    """

    stream: Stream
    metadata: Metadata | None
    data: Node

    def __post_init__(self) -> None:
        if self.stream is None:
            raise InvalidInputError("The stream is null.")
        if self.data is None or self.data.is_null:
            raise InvalidInputError("The data is null.", field="data")
