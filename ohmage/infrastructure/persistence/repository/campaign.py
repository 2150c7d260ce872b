"""SQL repository implementation for campaign lookups."""

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ohmage.domain.campaign.model.value import CampaignRole, PrivacyState
from ohmage.domain.campaign.port.repository import CampaignRepository
from ohmage.domain.shared.error import StorageUnavailableError
from ohmage.infrastructure.persistence.tables import campaigns_table, user_campaign_roles_table


class SqlCampaignRepository(CampaignRepository):
    """SQLAlchemy implementation of CampaignRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_privacy_state(self, campaign_id: str) -> PrivacyState | None:
        stmt = select(campaigns_table.c.privacy_state).where(campaigns_table.c.urn == campaign_id)
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise StorageUnavailableError(
                f"Failed to read privacy state of campaign {campaign_id}"
            ) from e
        state = result.scalar_one_or_none()
        return PrivacyState(state) if state is not None else None

    async def get_user_roles(self, username: str, campaign_id: str) -> list[CampaignRole]:
        stmt = select(user_campaign_roles_table.c.role).where(
            user_campaign_roles_table.c.username == username,
            user_campaign_roles_table.c.campaign_urn == campaign_id,
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise StorageUnavailableError(
                f"Failed to read roles of {username} in campaign {campaign_id}"
            ) from e
        return [CampaignRole(role) for role in result.scalars().all()]
