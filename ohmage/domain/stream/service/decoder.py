"""Decoding of data stream uploads."""

import logging

import logfire

from ohmage.domain.shared.error import InvalidInputError
from ohmage.domain.shared.model.instant import Clock
from ohmage.domain.shared.model.node import Node
from ohmage.domain.shared.service import Service
from ohmage.domain.stream.model.data_stream import DataStream
from ohmage.domain.stream.model.metadata import Metadata, MetadataBuilder
from ohmage.domain.stream.model.stream import Stream
from ohmage.domain.stream.port.stream_registry import StreamRegistry

logger = logging.getLogger(__name__)

JSON_KEY_STREAM_ID = "stream_id"
JSON_KEY_STREAM_VERSION = "stream_version"
JSON_KEY_METADATA = "metadata"
JSON_KEY_DATA = "data"


class DataStreamDecoder(Service):
    """Turns one observer upload into validated data stream points.

    An upload is a JSON array of points::

        [
            {
                "stream_id": "accel",
                "stream_version": 1,
                "metadata": {"id": "...", "time": 1400000000000, "timezone": "UTC"},
                "data": {...}
            }
        ]

    Any invalid point rejects the whole upload.
    """

    _registry: StreamRegistry
    _clock: Clock

    async def decode(
        self,
        observer_id: str,
        observer_version: int,
        upload: Node,
    ) -> list[DataStream]:
        """Decode every point in ``upload``, in order.

        Raises:
            InvalidInputError: If the upload or any point is malformed, names an
                unknown stream, or carries invalid metadata.
        """
        with logfire.span(
            "DecodeDataStreams",
            observer_id=observer_id,
            observer_version=observer_version,
        ):
            if not upload.is_array:
                raise InvalidInputError("The upload is not a JSON array.", field=JSON_KEY_DATA)

            results: list[DataStream] = []
            for index, point in enumerate(upload):
                try:
                    results.append(await self._decode_point(observer_id, observer_version, point))
                except InvalidInputError as e:
                    logger.info(
                        "Rejected upload for observer %s v%s at point %d: %s",
                        observer_id,
                        observer_version,
                        index,
                        e.message,
                    )
                    raise

            logger.debug(
                "Decoded %d points for observer %s v%s",
                len(results),
                observer_id,
                observer_version,
            )
            return results

    async def _decode_point(
        self,
        observer_id: str,
        observer_version: int,
        point: Node,
    ) -> DataStream:
        if not point.is_object:
            raise InvalidInputError("A data point is not a JSON object.")

        stream_id_node = point.get(JSON_KEY_STREAM_ID)
        if stream_id_node is None or not stream_id_node.is_textual:
            raise InvalidInputError(
                "The stream ID is missing or not a string.", field=JSON_KEY_STREAM_ID
            )

        stream_version = _read_stream_version(point.get(JSON_KEY_STREAM_VERSION))

        stream = await self._registry.get(
            observer_id,
            observer_version,
            stream_id_node.text,
            stream_version,
        )
        if stream is None:
            raise InvalidInputError(
                f"Unknown stream for observer {observer_id} v{observer_version}: "
                f"{stream_id_node.text} v{stream_version}",
                field=JSON_KEY_STREAM_ID,
            )

        metadata_node = point.get(JSON_KEY_METADATA)
        if metadata_node is not None and not metadata_node.is_object:
            raise InvalidInputError("The metadata is not a JSON object.", field=JSON_KEY_METADATA)

        return DataStream(
            stream=stream,
            metadata=self._build_metadata(stream, metadata_node),
            data=point.get(JSON_KEY_DATA),
        )

    def _build_metadata(self, stream: Stream, metadata_node: Node | None) -> Metadata:
        builder = MetadataBuilder(clock=self._clock)
        if stream.with_id:
            builder.set_id(metadata_node)
        if stream.with_timestamp:
            builder.set_timestamp(metadata_node)
        if stream.with_location:
            builder.set_location(metadata_node)
        return builder.build()


def _read_stream_version(version_node: Node | None) -> int:
    if version_node is not None and version_node.is_number:
        value = version_node.value
        if isinstance(value, int):
            return value
        if value.is_integer():
            return int(value)
    raise InvalidInputError(
        "The stream version is missing or not an integer.",
        field=JSON_KEY_STREAM_VERSION,
    )
