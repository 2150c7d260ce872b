"""Stream registry backed by the ``streams`` section of the configuration."""

import logging

from ohmage.config import StreamConfig
from ohmage.domain.shared.error import ConfigurationError
from ohmage.domain.stream.model.stream import Stream
from ohmage.domain.stream.port.stream_registry import StreamRegistry

logger = logging.getLogger(__name__)


class ConfigStreamRegistry(StreamRegistry):
    """In-memory registry built once from configured stream definitions."""

    def __init__(self, streams: list[StreamConfig]) -> None:
        self._streams: dict[tuple[str, int, str, int], Stream] = {}
        for stream_config in streams:
            stream = Stream(**stream_config.model_dump())
            if stream.key in self._streams:
                raise ConfigurationError(
                    f"Stream {stream.stream_id} v{stream.stream_version} is defined twice "
                    f"for observer {stream.observer_id} v{stream.observer_version}"
                )
            self._streams[stream.key] = stream
        logger.debug("Registered %d stream definitions", len(self._streams))

    async def get(
        self,
        observer_id: str,
        observer_version: int,
        stream_id: str,
        stream_version: int,
    ) -> Stream | None:
        return self._streams.get((observer_id, observer_version, stream_id, stream_version))

    def __len__(self) -> int:
        return len(self._streams)
