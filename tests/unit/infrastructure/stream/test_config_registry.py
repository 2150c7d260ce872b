"""Tests for the configuration-backed stream registry."""

import pytest

from ohmage.config import StreamConfig
from ohmage.domain.shared.error import ConfigurationError
from ohmage.infrastructure.stream import ConfigStreamRegistry


def make_stream_config(**overrides) -> StreamConfig:
    defaults = {
        "observer_id": "org.ohmage.mobility",
        "observer_version": 1,
        "stream_id": "mode",
        "stream_version": 1,
    }
    defaults.update(overrides)
    return StreamConfig(**defaults)


class TestConfigStreamRegistry:
    @pytest.mark.asyncio
    async def test_lookup_by_full_key(self):
        registry = ConfigStreamRegistry(
            [
                make_stream_config(with_timestamp=True),
                make_stream_config(stream_version=2, with_location=True),
            ]
        )

        stream = await registry.get("org.ohmage.mobility", 1, "mode", 2)

        assert len(registry) == 2
        assert stream.with_location
        assert not stream.with_timestamp

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "key",
        [
            ("org.ohmage.other", 1, "mode", 1),
            ("org.ohmage.mobility", 2, "mode", 1),
            ("org.ohmage.mobility", 1, "accel", 1),
            ("org.ohmage.mobility", 1, "mode", 3),
        ],
    )
    async def test_unknown_key(self, key):
        registry = ConfigStreamRegistry([make_stream_config()])
        assert await registry.get(*key) is None

    def test_empty(self):
        assert len(ConfigStreamRegistry([])) == 0

    def test_duplicate_definition_rejected(self):
        with pytest.raises(ConfigurationError):
            ConfigStreamRegistry([make_stream_config(), make_stream_config(with_id=True)])
