from dishka import provide

from ohmage.domain.campaign.port.repository import CampaignRepository
from ohmage.domain.image.port.repository import ImageRepository
from ohmage.domain.image.service.access import ImageAccessService
from ohmage.util.di.base import Provider
from ohmage.util.di.scope import Scope


class ImageProvider(Provider):
    @provide(scope=Scope.UOW)
    def get_access_service(
        self,
        image_repo: ImageRepository,
        campaign_repo: CampaignRepository,
    ) -> ImageAccessService:
        return ImageAccessService(_image_repo=image_repo, _campaign_repo=campaign_repo)
