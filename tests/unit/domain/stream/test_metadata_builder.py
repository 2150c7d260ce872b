"""Unit tests for MetadataBuilder and Metadata."""

from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest
from pydantic import ValidationError

from ohmage.domain.shared.error import InvalidInputError
from ohmage.domain.shared.model.instant import to_epoch_millis
from ohmage.domain.shared.model.node import Node
from ohmage.domain.stream.model import Location, Metadata, MetadataBuilder

NOW = datetime(2020, 1, 1, tzinfo=UTC)
NOW_MILLIS = to_epoch_millis(NOW)


def fixed_clock(instant: datetime = NOW):
    return lambda: instant


def make_builder(clock_instant: datetime = NOW) -> MetadataBuilder:
    return MetadataBuilder(clock=fixed_clock(clock_instant))


def make_location_fields(**overrides) -> dict:
    fields = {
        "latitude": 34.07,
        "longitude": -118.44,
        "accuracy": 20.0,
        "provider": "gps",
    }
    fields.update(overrides)
    return fields


class TestScenarios:
    """End-to-end builder flows over a single metadata node."""

    def test_epoch_time_with_zone(self):
        node = Node.parse(
            '{"id": "abc", "time": 1400000000000, "timezone": "America/Los_Angeles"}'
        )
        builder = make_builder()

        builder.set_id(node)
        builder.set_timestamp(node)
        builder.set_location(node)
        metadata = builder.build()

        assert metadata.id == "abc"
        assert to_epoch_millis(metadata.timestamp) == 1400000000000
        assert metadata.timestamp.tzinfo == ZoneInfo("America/Los_Angeles")
        assert metadata.location is None

    def test_agreeing_representations(self):
        node = Node.parse('{"time": 1400000000000, "timestamp": "2014-05-13T16:53:20.000Z"}')
        builder = make_builder()

        builder.set_timestamp(node)
        metadata = builder.build()

        assert to_epoch_millis(metadata.timestamp) == 1400000000000

    def test_conflicting_representations(self):
        node = Node.parse('{"time": 1400000000000, "timestamp": "2014-05-13T16:53:21.000Z"}')
        builder = make_builder()

        with pytest.raises(InvalidInputError) as exc_info:
            builder.set_timestamp(node)

        assert exc_info.value.message == (
            "Multiple representations of the timestamp were given, and they are not equal."
        )
        assert not builder.has_timestamp()
        assert builder.build().timestamp is None

    def test_future_timestamp(self):
        node = Node.of({"time": NOW_MILLIS + 60_000})
        builder = make_builder()
        builder.set_timestamp(node)

        with pytest.raises(InvalidInputError) as exc_info:
            builder.build()

        message = exc_info.value.message
        assert message.startswith("The timestamp cannot be in the future:")
        assert f"Now: {NOW_MILLIS}" in message
        assert f"Given: {NOW_MILLIS + 60_000}" in message
        assert "Difference: 60000" in message


class TestSetId:
    def test_absent_node_is_noop(self):
        builder = make_builder()
        builder.set_id(None)
        assert not builder.has_id()

    def test_missing_field_is_noop(self):
        builder = make_builder()
        builder.set_id(Node.of({}))
        assert builder.id is None

    def test_number_id_stored_as_text(self):
        builder = make_builder()
        builder.set_id(Node.of({"id": 42}))
        assert builder.id == "42"

    def test_boolean_id_stored_as_text(self):
        builder = make_builder()
        builder.set_id(Node.of({"id": True}))
        assert builder.id == "true"

    def test_null_id_stored_as_text(self):
        builder = make_builder()
        builder.set_id(Node.parse('{"id": null}'))
        assert builder.has_id()
        assert builder.build().id == "null"

    @pytest.mark.parametrize("value", [{"a": 1}, [1], {}, []])
    def test_container_id_rejected(self, value):
        builder = make_builder()
        with pytest.raises(InvalidInputError) as exc_info:
            builder.set_id(Node.of({"id": value}))
        assert exc_info.value.message == "The ID JSON is not a value."
        assert not builder.has_id()

    def test_second_call_overwrites(self):
        builder = make_builder()
        builder.set_id(Node.of({"id": "first"}))
        builder.set_id(Node.of({"id": "second"}))
        assert builder.build().id == "second"


class TestSetTimestamp:
    def test_absent_node_is_noop(self):
        builder = make_builder()
        builder.set_timestamp(None)
        assert not builder.has_timestamp()
        assert builder.build().timestamp is None

    def test_zone_without_time_is_ignored(self):
        builder = make_builder()
        builder.set_timestamp(Node.of({"timezone": "Not/AZone"}))
        assert not builder.has_timestamp()

    def test_iso_only(self):
        builder = make_builder()
        builder.set_timestamp(Node.of({"timestamp": "2014-05-13T09:53:20-07:00"}))
        assert to_epoch_millis(builder.build().timestamp) == 1400000000000

    def test_non_numeric_time_fails_even_with_valid_timestamp(self):
        node = Node.of({"time": "soon", "timestamp": "2014-05-13T16:53:20Z"})
        builder = make_builder()
        with pytest.raises(InvalidInputError) as exc_info:
            builder.set_timestamp(node)
        assert exc_info.value.message == "The time isn't a number."
        assert not builder.has_timestamp()

    def test_unknown_zone(self):
        builder = make_builder()
        with pytest.raises(InvalidInputError) as exc_info:
            builder.set_timestamp(Node.of({"time": 0, "timezone": "Not/AZone"}))
        assert exc_info.value.message == "The time zone is unknown: Not/AZone"

    def test_non_text_timestamp(self):
        builder = make_builder()
        with pytest.raises(InvalidInputError) as exc_info:
            builder.set_timestamp(Node.of({"timestamp": 1400000000000}))
        assert exc_info.value.message == "The timestamp value was not a string."

    def test_invalid_iso_timestamp_chains_cause(self):
        builder = make_builder()
        with pytest.raises(InvalidInputError) as exc_info:
            builder.set_timestamp(Node.of({"timestamp": "13/05/2014"}))
        assert exc_info.value.message == "The timestamp was not a valid ISO 8601 timestamp."
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_epoch_representation_kept_on_agreement(self):
        node = Node.of(
            {
                "time": 1400000000000,
                "timezone": "Asia/Tokyo",
                "timestamp": "2014-05-13T16:53:20Z",
            }
        )
        builder = make_builder()
        builder.set_timestamp(node)
        assert builder.build().timestamp.tzinfo == ZoneInfo("Asia/Tokyo")

    def test_sub_millisecond_difference_agrees(self):
        node = Node.of({"time": 1400000000000, "timestamp": "2014-05-13T16:53:20.000900Z"})
        builder = make_builder()
        builder.set_timestamp(node)
        assert to_epoch_millis(builder.build().timestamp) == 1400000000000

    def test_conflict_across_separate_calls(self):
        builder = make_builder()
        builder.set_timestamp(Node.of({"time": 1400000000000}))
        builder.set_timestamp(Node.of({"timestamp": "2014-05-13T16:53:20.001Z"}))
        with pytest.raises(InvalidInputError):
            builder.build()

    def test_conflicting_node_keeps_earlier_timestamp(self):
        builder = make_builder()
        builder.set_timestamp(Node.of({"time": 1400000000000}))

        with pytest.raises(InvalidInputError):
            builder.set_timestamp(
                Node.of({"time": 1400000000000, "timestamp": "2014-05-13T16:53:21Z"})
            )

        assert to_epoch_millis(builder.build().timestamp) == 1400000000000

    def test_agreement_across_separate_calls(self):
        builder = make_builder()
        builder.set_timestamp(Node.of({"time": 1400000000000}))
        builder.set_timestamp(Node.of({"timestamp": "2014-05-13T16:53:20Z"}))
        assert to_epoch_millis(builder.build().timestamp) == 1400000000000


class TestSetLocation:
    def test_location_parsed(self):
        node = Node.of({"location": make_location_fields(time=1400000000000)})
        builder = make_builder()
        builder.set_location(node)

        location = builder.build().location
        assert location == Location(
            latitude=34.07,
            longitude=-118.44,
            accuracy=20.0,
            provider="gps",
            timestamp=datetime(2014, 5, 13, 16, 53, 20, tzinfo=UTC),
        )

    def test_missing_field_is_noop(self):
        builder = make_builder()
        builder.set_location(Node.of({"id": "x"}))
        assert not builder.has_location()

    def test_malformed_location_propagates(self):
        builder = make_builder()
        with pytest.raises(InvalidInputError):
            builder.set_location(Node.of({"location": "here"}))
        assert not builder.has_location()


class TestBuild:
    def test_empty_builder(self):
        metadata = make_builder().build()
        assert metadata == Metadata()
        assert not metadata.has_id()
        assert not metadata.has_timestamp()
        assert not metadata.has_location()

    def test_timestamp_equal_to_now_accepted(self):
        builder = make_builder()
        builder.timestamp = NOW
        assert builder.build().timestamp == NOW

    def test_timestamp_one_millisecond_ahead_rejected(self):
        builder = make_builder()
        builder.timestamp = NOW + timedelta(milliseconds=1)
        with pytest.raises(InvalidInputError):
            builder.build()

    def test_clock_below_millisecond_is_truncated(self):
        builder = make_builder(NOW + timedelta(microseconds=500))
        builder.timestamp = NOW
        assert builder.build().timestamp == NOW

    def test_build_is_repeatable(self):
        node = Node.of({"id": "abc", "time": 1400000000000, "location": make_location_fields()})
        builder = make_builder()
        builder.set_id(node)
        builder.set_timestamp(node)
        builder.set_location(node)

        assert builder.build() == builder.build()

    def test_setters_replace_state(self):
        builder = make_builder()
        builder.set_timestamp(Node.of({"time": 1400000000000}))
        builder.timestamp = None
        builder.id = "manual"
        assert builder.build() == Metadata(id="manual")

    def test_naive_timestamp_rejected(self):
        builder = make_builder()
        with pytest.raises(ValueError):
            builder.timestamp = datetime(2014, 5, 13)

    def test_metadata_is_frozen(self):
        metadata = make_builder().build()
        with pytest.raises(ValidationError):
            metadata.id = "changed"


class TestMetadataCreate:
    def test_future_rejected(self):
        with pytest.raises(InvalidInputError):
            Metadata.create(timestamp=NOW + timedelta(days=1), clock=fixed_clock())

    def test_past_accepted(self):
        metadata = Metadata.create(id="x", timestamp=NOW - timedelta(days=1), clock=fixed_clock())
        assert metadata.has_id()
        assert metadata.has_timestamp()
