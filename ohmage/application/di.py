from dishka import AsyncContainer, from_context, make_async_container
from starlette.requests import Request

from ohmage.config import Config
from ohmage.domain.image.util.di import ImageProvider
from ohmage.domain.stream.util.di import StreamProvider
from ohmage.infrastructure.persistence import PersistenceProvider
from ohmage.infrastructure.stream import StreamInfraProvider
from ohmage.util.di.base import Provider
from ohmage.util.di.scope import Scope


class ConfigProvider(Provider):
    config = from_context(provides=Config, scope=Scope.APP)
    request = from_context(provides=Request, scope=Scope.UOW)


def create_container(config: Config | None = None) -> AsyncContainer:
    # Pydantic Settings populates from env vars at runtime
    if config is None:
        config = Config()  # type: ignore[call-arg]

    return make_async_container(
        ConfigProvider(),
        PersistenceProvider(),
        StreamInfraProvider(),
        StreamProvider(),
        ImageProvider(),
        context={Config: config},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
