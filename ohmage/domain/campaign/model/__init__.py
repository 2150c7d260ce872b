"""Campaign domain models."""

from .value import CampaignRole, PrivacyState

__all__ = ["CampaignRole", "PrivacyState"]
