"""Check command: decode an upload file against the configured streams."""

import asyncio
import sys
from pathlib import Path

import cyclopts

from ohmage.cli.console import get_console
from ohmage.config import Config
from ohmage.domain.shared.error import OhmageError
from ohmage.domain.shared.model.instant import utc_now
from ohmage.domain.shared.model.node import Node
from ohmage.domain.stream.model.data_stream import DataStream
from ohmage.domain.stream.service.decoder import DataStreamDecoder
from ohmage.infrastructure.stream.config_registry import ConfigStreamRegistry

app = cyclopts.App(name="check", help="Validate an upload file without the server")


def _row(point: DataStream) -> dict[str, str]:
    metadata = point.metadata
    location = metadata.location if metadata else None
    return {
        "stream": f"{point.stream.stream_id} v{point.stream.stream_version}",
        "id": (metadata.id if metadata else None) or "",
        "timestamp": metadata.timestamp.isoformat() if metadata and metadata.timestamp else "",
        "location": f"{location.latitude}, {location.longitude}" if location else "",
    }


@app.default
def check(
    path: Path,
    /,
    *,
    observer_id: str,
    observer_version: int,
) -> None:
    """Decode an upload file and print its points.

    Args:
        path: JSON file holding the upload's array of points.
        observer_id: Observer the upload belongs to.
        observer_version: Version of that observer.
    """
    console = get_console()

    if not path.exists():
        console.error(f"File not found: {path}")
        sys.exit(1)

    config = Config()  # type: ignore[call-arg]
    decoder = DataStreamDecoder(
        _registry=ConfigStreamRegistry(config.streams),
        _clock=utc_now,
    )

    try:
        upload = Node.parse(path.read_bytes())
        points = asyncio.run(decoder.decode(observer_id, observer_version, upload))
    except OhmageError as e:
        console.error(e.message, hint=f"field: {e.field}" if getattr(e, "field", None) else None)
        sys.exit(1)

    console.table(
        [_row(point) for point in points],
        [("stream", "Stream"), ("id", "ID"), ("timestamp", "Timestamp"), ("location", "Location")],
        title=str(path),
        numbered=True,
    )
    console.success(f"{len(points)} point{'s' if len(points) != 1 else ''} valid")
