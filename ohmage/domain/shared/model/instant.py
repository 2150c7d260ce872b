"""Helpers for instants: epoch milliseconds, zone ids, ISO-8601 and the clock.

All instants handled by ohmage are timezone-aware and carry millisecond
resolution; anything finer is truncated.
"""

import re
from collections.abc import Callable
from datetime import UTC, datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil.parser import isoparse

from ohmage.domain.shared.error import InvalidInputError
from ohmage.domain.shared.model.node import Node

Clock = Callable[[], datetime]

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
MILLISECOND = timedelta(milliseconds=1)

# "+05:30", "-08", "+0100"
_OFFSET_PATTERN = re.compile(r"^([+-])(\d{2})(?::?(\d{2}))?$")


def utc_now() -> datetime:
    """Default clock: the current instant in UTC."""
    return datetime.now(UTC)


def truncate_to_millis(instant: datetime) -> datetime:
    return instant.replace(microsecond=instant.microsecond - instant.microsecond % 1000)


def to_epoch_millis(instant: datetime) -> int:
    """Milliseconds since the epoch, truncating sub-millisecond precision."""
    return (instant - EPOCH) // MILLISECOND


def from_epoch_millis(millis: int, zone: tzinfo = UTC) -> datetime:
    """The instant ``millis`` after the epoch, expressed in ``zone``.

    Raises:
        OverflowError: If the instant is outside the supported date range.
    """
    return (EPOCH + timedelta(milliseconds=millis)).astimezone(zone)


def parse_zone(zone_id: str) -> tzinfo:
    """Resolve a zone id: ``UTC``, an IANA name, or a fixed ``+hh:mm`` offset.

    Raises:
        ValueError: If the id is not a known zone.
    """
    if zone_id == "UTC":
        return UTC

    match = _OFFSET_PATTERN.match(zone_id)
    if match:
        sign, hours, minutes = match.groups()
        offset = timedelta(hours=int(hours), minutes=int(minutes or 0))
        if offset >= timedelta(hours=24):
            raise ValueError(f"Offset out of range: {zone_id}")
        return timezone(-offset if sign == "-" else offset)

    if not zone_id or zone_id != zone_id.strip():
        raise ValueError(f"Unknown time zone: {zone_id!r}")

    # Zone directories such as "America" fail the file read with an OSError
    try:
        return ZoneInfo(zone_id)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        raise ValueError(f"Unknown time zone: {zone_id}") from e


def parse_iso8601(text: str) -> datetime:
    """Parse any ISO-8601 date or date-time string.

    Values without an offset are taken to be UTC.

    Raises:
        ValueError: If the text is not valid ISO-8601.
    """
    try:
        parsed = isoparse(text)
    except OverflowError as e:
        raise ValueError(f"Timestamp out of range: {text}") from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def read_epoch_instant(
    node: Node,
    time_field: str = "time",
    zone_field: str = "timezone",
) -> datetime | None:
    """Read an epoch-millisecond field and its optional zone from an object node.

    Returns None when ``time_field`` is absent. A present but non-numeric time,
    or a present zone that is not a known zone id string, fails.
    """
    if not node.has(time_field):
        return None

    time_node = node.get(time_field)
    if not time_node.is_number:
        raise InvalidInputError("The time isn't a number.", field=time_field)
    # JSON numbers may be fractional; the instant is whole milliseconds
    try:
        millis = int(time_node.value)
    except (ValueError, OverflowError) as e:
        raise InvalidInputError("The time isn't a finite number.", field=time_field) from e

    zone: tzinfo = UTC
    if node.has(zone_field):
        zone_node = node.get(zone_field)
        if not zone_node.is_textual:
            raise InvalidInputError("The time zone is not a string.", field=zone_field)
        try:
            zone = parse_zone(zone_node.text)
        except ValueError as e:
            raise InvalidInputError(
                f"The time zone is unknown: {zone_node.text}", field=zone_field
            ) from e

    try:
        return from_epoch_millis(millis, zone)
    except OverflowError as e:
        raise InvalidInputError("The time is out of range.", field=time_field) from e
