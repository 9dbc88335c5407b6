"""create radares table"""

from alembic import op
import sqlalchemy as sa

revision = "0001_create_radares"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "radares",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("km", sa.String(length=32), nullable=False),
        sa.Column("highway", sa.String(length=32), nullable=False),
        sa.Column("direction", sa.String(length=64), nullable=True),
        sa.Column("speed_kmh", sa.Integer, nullable=False),
        sa.Column("classification", sa.String(length=48), nullable=False, server_default="rural"),
        sa.Column("radar_type", sa.String(length=32), nullable=False),
        sa.Column("municipality", sa.String(length=128), nullable=True),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("photos", sa.JSON(), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="pending"),
        sa.Column("last_checklist_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_radares_km", "radares", ["km"])
    op.create_index("ix_radares_status", "radares", ["status"])


def downgrade() -> None:
    op.drop_index("ix_radares_status", table_name="radares")
    op.drop_index("ix_radares_km", table_name="radares")
    op.drop_table("radares")
