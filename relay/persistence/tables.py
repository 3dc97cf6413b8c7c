"""SQLAlchemy table definitions for the relay.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import Column, Index, MetaData, String, Table
from sqlalchemy.dialects.postgresql import TIMESTAMP

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# ACCOUNTS TABLE (Discord identity, optional Foursquare link)
# ============================================================================
accounts_table = Table(
    "accounts",
    metadata,
    Column("discord_user_id", String(32), primary_key=True),  # Discord snowflake
    Column("discord_username", String(255), nullable=False),
    Column("discord_display_name", String(255), nullable=True),
    Column("foursquare_user_id", String(64), nullable=True, unique=True),
    Column("linked_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("last_checkin_at", TIMESTAMP(timezone=True), nullable=True),
)

Index("idx_accounts_foursquare_user_id", accounts_table.c.foursquare_user_id)
