"""Data stream upload routes."""

from datetime import datetime
from typing import Any

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel, Field

from ohmage.domain.shared.model.node import Node
from ohmage.domain.stream.model.data_stream import DataStream
from ohmage.domain.stream.model.location import Location
from ohmage.domain.stream.service.decoder import DataStreamDecoder

router = APIRouter(
    prefix="/uploads",
    tags=["uploads"],
    route_class=DishkaRoute,
)


class UploadRequest(BaseModel):
    """An observer's upload: a list of data stream points."""

    observer_id: str
    observer_version: int = Field(ge=1)
    data: list[Any]


class DataPointSummary(BaseModel):
    stream_id: str
    stream_version: int
    id: str | None = None
    timestamp: datetime | None = None
    location: Location | None = None


class UploadResponse(BaseModel):
    accepted: int
    points: list[DataPointSummary]


def _summarize(point: DataStream) -> DataPointSummary:
    metadata = point.metadata
    return DataPointSummary(
        stream_id=point.stream.stream_id,
        stream_version=point.stream.stream_version,
        id=metadata.id if metadata else None,
        timestamp=metadata.timestamp if metadata else None,
        location=metadata.location if metadata else None,
    )


@router.post("")
async def upload(
    body: UploadRequest,
    decoder: FromDishka[DataStreamDecoder],
) -> UploadResponse:
    """Decode and validate an upload. Any invalid point rejects the whole upload."""
    points = await decoder.decode(
        body.observer_id,
        body.observer_version,
        Node.of(body.data),
    )
    return UploadResponse(
        accepted=len(points),
        points=[_summarize(point) for point in points],
    )
