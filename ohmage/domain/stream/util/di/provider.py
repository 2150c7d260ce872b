from dishka import provide

from ohmage.domain.shared.model.instant import utc_now
from ohmage.domain.stream.port.stream_registry import StreamRegistry
from ohmage.domain.stream.service.decoder import DataStreamDecoder
from ohmage.util.di.base import Provider
from ohmage.util.di.scope import Scope


class StreamProvider(Provider):
    @provide(scope=Scope.UOW)
    def get_decoder(self, registry: StreamRegistry) -> DataStreamDecoder:
        return DataStreamDecoder(_registry=registry, _clock=utc_now)
