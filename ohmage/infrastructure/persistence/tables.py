"""SQLAlchemy table definitions - dialect-agnostic (works with SQLite and PostgreSQL)."""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    UniqueConstraint,
)

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# CAMPAIGNS TABLE
# ============================================================================
campaigns_table = Table(
    "campaigns",
    metadata,
    Column("urn", String(250), primary_key=True),
    Column("name", String, nullable=False),
    Column("privacy_state", String(16), nullable=False),  # PrivacyState as string
    Column("created_at", DateTime(timezone=True), nullable=False),
)


# ============================================================================
# USER CAMPAIGN ROLES TABLE
# ============================================================================
user_campaign_roles_table = Table(
    "user_campaign_roles",
    metadata,
    Column("username", String(25), nullable=False),
    Column("campaign_urn", String(250), ForeignKey("campaigns.urn"), nullable=False),
    Column("role", String(16), nullable=False),  # CampaignRole as string
    UniqueConstraint("username", "campaign_urn", "role", name="uq_user_campaign_role"),
)

Index(
    "idx_user_campaign_roles_lookup",
    user_campaign_roles_table.c.username,
    user_campaign_roles_table.c.campaign_urn,
)


# ============================================================================
# IMAGES TABLE
# ============================================================================
images_table = Table(
    "images",
    metadata,
    Column("id", String(36), primary_key=True),  # UUID as string
    Column("owner_username", String(25), nullable=False),
    Column("uploaded_at", DateTime(timezone=True), nullable=False),
)

Index("idx_images_owner", images_table.c.owner_username)


# ============================================================================
# CAMPAIGN IMAGES TABLE (image's privacy state within each campaign)
# ============================================================================
campaign_images_table = Table(
    "campaign_images",
    metadata,
    Column("campaign_urn", String(250), ForeignKey("campaigns.urn"), primary_key=True),
    Column("image_id", String(36), ForeignKey("images.id"), primary_key=True),
    Column("privacy_state", String(16), nullable=False),  # PrivacyState as string
)

Index("idx_campaign_images_image_id", campaign_images_table.c.image_id)
