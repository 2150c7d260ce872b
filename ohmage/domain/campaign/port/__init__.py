"""Campaign domain ports."""

from .repository import CampaignRepository

__all__ = ["CampaignRepository"]
