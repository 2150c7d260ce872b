"""Location attached to a data stream point."""

import math
from datetime import datetime

from pydantic import Field

from ohmage.domain.shared.error import InvalidInputError
from ohmage.domain.shared.model.instant import read_epoch_instant
from ohmage.domain.shared.model.node import Node
from ohmage.domain.shared.model.value import ValueObject
from ohmage.util.text import is_empty_or_whitespace_only

JSON_KEY_LATITUDE = "latitude"
JSON_KEY_LONGITUDE = "longitude"
JSON_KEY_ACCURACY = "accuracy"
JSON_KEY_PROVIDER = "provider"
JSON_KEY_TIME = "time"
JSON_KEY_TIMEZONE = "timezone"


class Location(ValueObject):
    """A device-reported position fix.

    JSON form::

        {
            "latitude": 34.07,
            "longitude": -118.44,
            "accuracy": 20.0,
            "provider": "gps",
            "time": 1400000000000,
            "timezone": "America/Los_Angeles"
        }

    ``time`` and ``timezone`` are optional.
    """

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)
    accuracy: float = Field(ge=0.0)
    provider: str
    timestamp: datetime | None = None

    @classmethod
    def from_node(cls, node: Node | None) -> "Location":
        """Parse a location object node.

        Raises:
            InvalidInputError: If the node is not an object or any field is
                missing, of the wrong type or out of range.
        """
        if node is None or not node.is_object:
            raise InvalidInputError("The location is not a JSON object.", field="location")

        latitude = _read_number(node, JSON_KEY_LATITUDE, -90.0, 90.0)
        longitude = _read_number(node, JSON_KEY_LONGITUDE, -180.0, 180.0)
        accuracy = _read_number(node, JSON_KEY_ACCURACY, 0.0, None)

        provider_node = node.get(JSON_KEY_PROVIDER)
        if (
            provider_node is None
            or not provider_node.is_textual
            or is_empty_or_whitespace_only(provider_node.text)
        ):
            raise InvalidInputError(
                "The location provider is missing or not a string.",
                field=f"location.{JSON_KEY_PROVIDER}",
            )

        try:
            timestamp = read_epoch_instant(node, JSON_KEY_TIME, JSON_KEY_TIMEZONE)
        except InvalidInputError as e:
            raise InvalidInputError(
                f"Invalid location: {e.message}", field=f"location.{e.field}"
            ) from e

        return cls(
            latitude=latitude,
            longitude=longitude,
            accuracy=accuracy,
            provider=provider_node.text,
            timestamp=timestamp,
        )


def _read_number(node: Node, name: str, low: float, high: float | None) -> float:
    value_node = node.get(name)
    if value_node is None or not value_node.is_number:
        raise InvalidInputError(
            f"The location {name} is missing or not a number.", field=f"location.{name}"
        )
    try:
        value = float(value_node.value)
    except OverflowError:
        value = math.inf
    if not math.isfinite(value) or value < low or (high is not None and value > high):
        raise InvalidInputError(
            f"The location {name} is out of range: {value}", field=f"location.{name}"
        )
    return value
