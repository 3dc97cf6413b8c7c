"""create_accounts

Create the account directory: one row per Discord user, with an optional
unique Foursquare link.

Revision ID: 3c1f0a9d2e47
Revises:
Create Date: 2026-10-18 12:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f0a9d2e47"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "accounts",
        sa.Column("discord_user_id", sa.String(32), primary_key=True),
        sa.Column("discord_username", sa.String(255), nullable=False),
        sa.Column("discord_display_name", sa.String(255), nullable=True),
        sa.Column("foursquare_user_id", sa.String(64), nullable=True),
        sa.Column("linked_at", postgresql.TIMESTAMP(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "last_checkin_at", postgresql.TIMESTAMP(timezone=True), nullable=True
        ),
        sa.UniqueConstraint(
            "foursquare_user_id", name="accounts_foursquare_user_id_key"
        ),
    )
    op.create_index(
        "idx_accounts_foursquare_user_id", "accounts", ["foursquare_user_id"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_accounts_foursquare_user_id", table_name="accounts")
    op.drop_table("accounts")
