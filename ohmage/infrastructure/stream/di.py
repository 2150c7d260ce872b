from dishka import provide

from ohmage.config import Config
from ohmage.domain.stream.port.stream_registry import StreamRegistry
from ohmage.infrastructure.stream.config_registry import ConfigStreamRegistry
from ohmage.util.di.base import Provider
from ohmage.util.di.scope import Scope


class StreamInfraProvider(Provider):
    @provide(scope=Scope.APP)
    def get_stream_registry(self, config: Config) -> StreamRegistry:
        return ConfigStreamRegistry(config.streams)
