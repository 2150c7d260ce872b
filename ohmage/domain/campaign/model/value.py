"""Campaign roles and privacy states."""

from enum import StrEnum


class CampaignRole(StrEnum):
    """Role a user holds within one campaign. Roles are not hierarchical."""

    SUPERVISOR = "supervisor"
    AUTHOR = "author"
    ANALYST = "analyst"
    PARTICIPANT = "participant"


class PrivacyState(StrEnum):
    """Privacy state of a campaign, or of a survey response/image within one."""

    SHARED = "shared"
    PRIVATE = "private"
    INVISIBLE = "invisible"
