"""Repository port for campaign lookups."""

from abc import abstractmethod
from typing import Protocol

from ohmage.domain.campaign.model.value import CampaignRole, PrivacyState
from ohmage.domain.shared.port import Port


class CampaignRepository(Port, Protocol):
    """Read access to campaigns and user memberships."""

    @abstractmethod
    async def get_privacy_state(self, campaign_id: str) -> PrivacyState | None:
        """Get the campaign's privacy state, or None if the campaign does not exist."""
        ...

    @abstractmethod
    async def get_user_roles(self, username: str, campaign_id: str) -> list[CampaignRole]:
        """Get every role the user holds in the campaign (empty if none)."""
        ...
