from .campaign import SqlCampaignRepository
from .image import SqlImageRepository

__all__ = ["SqlCampaignRepository", "SqlImageRepository"]
