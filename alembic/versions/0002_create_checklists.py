"""create checklists table"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

revision = "0002_create_checklists"
down_revision = "0001_create_radares"
branch_labels: tuple[str, ...] | None = None
depends_on: tuple[str, ...] | None = None


def upgrade() -> None:
    # No foreign key on radar_id; deleting a radar removes its checklists in the service layer
    op.create_table(
        "checklists",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("radar_id", sa.Integer, nullable=False),
        sa.Column("sign_present", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("sign_legible", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("lane_paint_adequate", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("unobstructed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("speed_plate_visible", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("sign_distance_m", sa.Integer, nullable=True),
        sa.Column("observations", sa.Text(), nullable=False, server_default=""),
        sa.Column("photos", sa.JSON(), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=True),
        sa.Column("inspected_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_checklists_radar_id", "checklists", ["radar_id"])
    op.create_index("ix_checklists_inspected_at", "checklists", ["inspected_at"])


def downgrade() -> None:
    op.drop_index("ix_checklists_inspected_at", table_name="checklists")
    op.drop_index("ix_checklists_radar_id", table_name="checklists")
    op.drop_table("checklists")
