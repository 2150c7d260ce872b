"""Metadata envelope for a data stream point, and the builder that reads it.

Every field is optional. A metadata section may carry the same instant twice,
once as epoch milliseconds (with an optional zone) and once as an ISO-8601
string; both must agree to the millisecond.
"""

from datetime import datetime

from ohmage.domain.shared.error import InvalidInputError
from ohmage.domain.shared.model.instant import (
    Clock,
    parse_iso8601,
    read_epoch_instant,
    to_epoch_millis,
    truncate_to_millis,
    utc_now,
)
from ohmage.domain.shared.model.node import Node
from ohmage.domain.shared.model.value import ValueObject
from ohmage.domain.stream.model.location import Location

JSON_KEY_ID = "id"
JSON_KEY_TIME = "time"
JSON_KEY_TIMEZONE = "timezone"
JSON_KEY_TIMESTAMP = "timestamp"
JSON_KEY_LOCATION = "location"


class Metadata(ValueObject):
    """Immutable metadata for one data stream point.

    Use :meth:`create` (or :class:`MetadataBuilder`) rather than the raw
    constructor so that the timestamp is checked against the clock.
    """

    id: str | None = None
    timestamp: datetime | None = None
    location: Location | None = None

    @classmethod
    def create(
        cls,
        id: str | None = None,
        timestamp: datetime | None = None,
        location: Location | None = None,
        *,
        clock: Clock = utc_now,
    ) -> "Metadata":
        """Create metadata, rejecting timestamps later than now.

        Raises:
            InvalidInputError: If the timestamp is in the future.
        """
        if timestamp is not None:
            now = truncate_to_millis(clock())
            if timestamp > now:
                given = to_epoch_millis(timestamp)
                now_millis = to_epoch_millis(now)
                raise InvalidInputError(
                    "The timestamp cannot be in the future: "
                    f"Now: {now_millis} Given: {given} Difference: {given - now_millis}",
                    field=JSON_KEY_TIMESTAMP,
                )
        return cls(id=id, timestamp=timestamp, location=location)

    def has_id(self) -> bool:
        return self.id is not None

    def has_timestamp(self) -> bool:
        return self.timestamp is not None

    def has_location(self) -> bool:
        return self.location is not None


class MetadataBuilder:
    """Collects metadata fields from upload nodes and builds :class:`Metadata`.

    Mutable and meant to be owned by a single ingestion flow. Each
    ``set_*`` method reads its fields from a metadata object node; a missing
    node or missing field leaves the builder unchanged, while a malformed
    field raises :class:`InvalidInputError` immediately.

    Timestamp representations are collected as candidates. Conflicting forms
    in one node fail in ``set_timestamp``; forms from separate calls are
    reconciled again in :meth:`build`.
    """

    def __init__(self, clock: Clock = utc_now) -> None:
        self._clock = clock
        self._id: str | None = None
        self._timestamps: list[datetime] = []
        self._location: Location | None = None

    # -------------------------------------------------------------------------
    # ID
    # -------------------------------------------------------------------------

    def has_id(self) -> bool:
        return self._id is not None

    @property
    def id(self) -> str | None:
        return self._id

    @id.setter
    def id(self, value: str | None) -> None:
        self._id = value

    def set_id(self, metadata_node: Node | None) -> None:
        """Read the ``id`` field. It must not be an object or array; its text is
        stored, so an explicit ``null`` becomes ``"null"``.
        """
        if metadata_node is None or not metadata_node.has(JSON_KEY_ID):
            return

        id_node = metadata_node.get(JSON_KEY_ID)
        if not id_node.is_value:
            raise InvalidInputError("The ID JSON is not a value.", field=JSON_KEY_ID)
        self._id = id_node.text

    # -------------------------------------------------------------------------
    # Timestamp
    # -------------------------------------------------------------------------

    def has_timestamp(self) -> bool:
        return bool(self._timestamps)

    @property
    def timestamp(self) -> datetime | None:
        """The reconciled timestamp, or None if none was supplied.

        Raises:
            InvalidInputError: If the collected representations disagree.
        """
        if not self._timestamps:
            return None

        _reconcile(self._timestamps)
        return truncate_to_millis(self._timestamps[0])

    @timestamp.setter
    def timestamp(self, value: datetime | None) -> None:
        if value is not None and value.tzinfo is None:
            raise ValueError("timestamp must be timezone-aware")
        self._timestamps = [] if value is None else [value]

    def set_timestamp(self, metadata_node: Node | None) -> None:
        """Read ``time``/``timezone`` and ``timestamp`` as timestamp candidates.

        ``time`` is epoch milliseconds with ``timezone`` defaulting to UTC;
        ``timestamp`` is any ISO-8601 string. The epoch form, when present,
        is the representation kept on success. Both forms in one node must
        agree here; forms from separate calls are compared in :meth:`build`.
        """
        if metadata_node is None:
            return

        candidates: list[datetime] = []

        epoch_instant = read_epoch_instant(metadata_node, JSON_KEY_TIME, JSON_KEY_TIMEZONE)
        if epoch_instant is not None:
            candidates.append(epoch_instant)

        if metadata_node.has(JSON_KEY_TIMESTAMP):
            timestamp_node = metadata_node.get(JSON_KEY_TIMESTAMP)
            if not timestamp_node.is_textual:
                raise InvalidInputError(
                    "The timestamp value was not a string.", field=JSON_KEY_TIMESTAMP
                )
            try:
                candidates.append(parse_iso8601(timestamp_node.text))
            except ValueError as e:
                raise InvalidInputError(
                    "The timestamp was not a valid ISO 8601 timestamp.",
                    field=JSON_KEY_TIMESTAMP,
                ) from e

        _reconcile(candidates)
        self._timestamps.extend(candidates)

    # -------------------------------------------------------------------------
    # Location
    # -------------------------------------------------------------------------

    def has_location(self) -> bool:
        return self._location is not None

    @property
    def location(self) -> Location | None:
        return self._location

    @location.setter
    def location(self, value: Location | None) -> None:
        self._location = value

    def set_location(self, metadata_node: Node | None) -> None:
        """Parse the ``location`` field with :meth:`Location.from_node`."""
        if metadata_node is None or not metadata_node.has(JSON_KEY_LOCATION):
            return
        self._location = Location.from_node(metadata_node.get(JSON_KEY_LOCATION))

    # -------------------------------------------------------------------------
    # Build
    # -------------------------------------------------------------------------

    def build(self) -> Metadata:
        """Build the immutable metadata.

        Raises:
            InvalidInputError: If timestamp representations disagree or the
                timestamp is later than now.
        """
        return Metadata.create(
            id=self._id,
            timestamp=self.timestamp,
            location=self._location,
            clock=self._clock,
        )


def _reconcile(candidates: list[datetime]) -> None:
    """Fail unless every candidate denotes the same millisecond."""
    if not candidates:
        return
    first_millis = to_epoch_millis(candidates[0])
    for other in candidates[1:]:
        if to_epoch_millis(other) != first_millis:
            raise InvalidInputError(
                "Multiple representations of the timestamp were given, "
                "and they are not equal.",
                field=JSON_KEY_TIMESTAMP,
            )
