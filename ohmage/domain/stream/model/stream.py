"""Stream definitions owned by observers."""

from pydantic import Field

from ohmage.domain.shared.model.value import ValueObject


class Stream(ValueObject):
    """A versioned stream of an observer (a data-producing app or device).

    The ``with_*`` flags say which metadata fields points of this stream
    carry; fields the stream does not declare are not read.
    """

    observer_id: str = Field(min_length=1)
    observer_version: int = Field(ge=1)
    stream_id: str = Field(min_length=1)
    stream_version: int = Field(ge=1)
    with_id: bool = False
    with_timestamp: bool = False
    with_location: bool = False

    @property
    def key(self) -> tuple[str, int, str, int]:
        return (self.observer_id, self.observer_version, self.stream_id, self.stream_version)
