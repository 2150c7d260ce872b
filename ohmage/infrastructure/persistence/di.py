from typing import AsyncIterable

from dishka import provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from ohmage.config import Config
from ohmage.domain.campaign.port.repository import CampaignRepository
from ohmage.domain.image.port.repository import ImageRepository
from ohmage.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
)
from ohmage.infrastructure.persistence.repository.campaign import SqlCampaignRepository
from ohmage.infrastructure.persistence.repository.image import SqlImageRepository
from ohmage.util.di.base import Provider
from ohmage.util.di.scope import Scope


class PersistenceProvider(Provider):
    # APP-scoped factories
    @provide(scope=Scope.APP)
    async def get_engine(self, config: Config) -> AsyncIterable[AsyncEngine]:
        engine = create_db_engine(config)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(self, engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    # UOW-scoped session (one per unit of work)
    @provide(scope=Scope.UOW)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterable[AsyncSession]:
        async with session_factory() as session:
            yield session
            await session.commit()

    # UOW-scoped repositories
    image_repo = provide(SqlImageRepository, scope=Scope.UOW, provides=ImageRepository)
    campaign_repo = provide(SqlCampaignRepository, scope=Scope.UOW, provides=CampaignRepository)
