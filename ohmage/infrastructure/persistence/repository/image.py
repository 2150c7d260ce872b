"""SQL repository implementation for image lookups."""

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ohmage.domain.campaign.model.value import PrivacyState
from ohmage.domain.image.port.repository import ImageRepository
from ohmage.domain.shared.error import StorageUnavailableError
from ohmage.infrastructure.persistence.tables import campaign_images_table, images_table


class SqlImageRepository(ImageRepository):
    """SQLAlchemy implementation of ImageRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_owner(self, image_id: str) -> str | None:
        stmt = select(images_table.c.owner_username).where(images_table.c.id == image_id)
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise StorageUnavailableError(f"Failed to read owner of image {image_id}") from e
        return result.scalar_one_or_none()

    async def get_campaign_ids(self, image_id: str) -> list[str]:
        stmt = (
            select(campaign_images_table.c.campaign_urn)
            .where(campaign_images_table.c.image_id == image_id)
            .order_by(campaign_images_table.c.campaign_urn)
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise StorageUnavailableError(f"Failed to read campaigns of image {image_id}") from e
        return list(result.scalars().all())

    async def get_privacy_state_in_campaign(
        self, campaign_id: str, image_id: str
    ) -> PrivacyState | None:
        stmt = select(campaign_images_table.c.privacy_state).where(
            campaign_images_table.c.campaign_urn == campaign_id,
            campaign_images_table.c.image_id == image_id,
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise StorageUnavailableError(
                f"Failed to read privacy state of image {image_id} in {campaign_id}"
            ) from e
        state = result.scalar_one_or_none()
        return PrivacyState(state) if state is not None else None
