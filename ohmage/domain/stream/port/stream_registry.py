"""Port for looking up stream definitions."""

from abc import abstractmethod
from typing import Protocol

from ohmage.domain.shared.port import Port
from ohmage.domain.stream.model.stream import Stream


class StreamRegistry(Port, Protocol):
    """Source of the stream definitions uploads are decoded against."""

    @abstractmethod
    async def get(
        self,
        observer_id: str,
        observer_version: int,
        stream_id: str,
        stream_version: int,
    ) -> Stream | None:
        """Get a stream definition, or None if it is not registered."""
        ...
