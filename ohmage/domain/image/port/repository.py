"""Repository port for image ownership and campaign membership."""

from abc import abstractmethod
from typing import Protocol

from ohmage.domain.campaign.model.value import PrivacyState
from ohmage.domain.shared.port import Port


class ImageRepository(Port, Protocol):
    """Read access to image ownership and the campaigns images belong to."""

    @abstractmethod
    async def get_owner(self, image_id: str) -> str | None:
        """Get the username of the image's owner, or None if the image does not exist."""
        ...

    @abstractmethod
    async def get_campaign_ids(self, image_id: str) -> list[str]:
        """Get the IDs of every campaign the image is associated with."""
        ...

    @abstractmethod
    async def get_privacy_state_in_campaign(
        self, campaign_id: str, image_id: str
    ) -> PrivacyState | None:
        """Get the image's privacy state within a campaign, or None if not associated."""
        ...
