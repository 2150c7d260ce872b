"""Image access service - who may read an uploaded image."""

import logging

import logfire

from ohmage.domain.campaign.model.value import CampaignRole, PrivacyState
from ohmage.domain.campaign.port.repository import CampaignRepository
from ohmage.domain.image.port.repository import ImageRepository
from ohmage.domain.shared.error import AuthorizationError
from ohmage.domain.shared.service import Service

logger = logging.getLogger("ohmage.authz")


class ImageAccessService(Service):
    """Decides whether a user may read an image.

    A user may read an image if they own it, or if in any campaign the image
    belongs to they are:
    - a supervisor;
    - an author, and the image is shared in that campaign;
    - an analyst, and both the image and the campaign are shared.
    """

    _image_repo: ImageRepository
    _campaign_repo: CampaignRepository

    async def verify_user_can_read_image(self, username: str, image_id: str) -> None:
        """Raise unless ``username`` may read ``image_id``.

        Raises:
            AuthorizationError: If the user has insufficient permissions.
            StorageUnavailableError: If a lookup fails.
        """
        with logfire.span("VerifyUserCanReadImage", image_id=image_id):
            if username == await self._image_repo.get_owner(image_id):
                logger.debug("Image %s readable by owner %s", image_id, username)
                return

            for campaign_id in await self._image_repo.get_campaign_ids(image_id):
                roles = await self._campaign_repo.get_user_roles(username, campaign_id)

                if CampaignRole.SUPERVISOR in roles:
                    logger.debug(
                        "Image %s readable by %s as supervisor of %s",
                        image_id,
                        username,
                        campaign_id,
                    )
                    return

                # None if the image left the campaign since the IDs were read
                image_privacy = await self._image_repo.get_privacy_state_in_campaign(
                    campaign_id, image_id
                )

                if CampaignRole.AUTHOR in roles and image_privacy == PrivacyState.SHARED:
                    logger.debug(
                        "Image %s readable by %s as author in %s", image_id, username, campaign_id
                    )
                    return

                campaign_privacy = await self._campaign_repo.get_privacy_state(campaign_id)

                if (
                    CampaignRole.ANALYST in roles
                    and image_privacy == PrivacyState.SHARED
                    and campaign_privacy == PrivacyState.SHARED
                ):
                    logger.debug(
                        "Image %s readable by %s as analyst in %s", image_id, username, campaign_id
                    )
                    return

            logger.debug("Image %s not readable by %s", image_id, username)
            raise AuthorizationError(
                "The user doesn't have sufficient permissions to read the image.",
                code="image_insufficient_permissions",
            )
