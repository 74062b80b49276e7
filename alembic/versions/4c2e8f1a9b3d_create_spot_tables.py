"""create spot tables

Revision ID: 4c2e8f1a9b3d
Revises:
Create Date: 2026-09-28 10:12:31.482051

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = "4c2e8f1a9b3d"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "user",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("username", sa.Text(), nullable=False),
        sa.Column("is_private", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
    )
    op.create_table(
        "place",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("latitude", sa.Float(), nullable=False),
        sa.Column("longitude", sa.Float(), nullable=False),
        sa.Column("foursquare_id", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("foursquare_id"),
    )
    op.create_index("idx_place_latitude_longitude", "place", ["latitude", "longitude"], unique=False)
    op.create_table(
        "follow",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("follower_id", sa.UUID(), nullable=False),
        sa.Column("followee_id", sa.UUID(), nullable=False),
        sa.Column("status", sa.Enum("pending", "active", name="followstatus"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["followee_id"], ["user.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["follower_id"], ["user.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("follower_id", "followee_id", name="_follower_followee_uc"),
    )
    op.create_index("follow_follower_id_status_idx", "follow", ["follower_id", "status"], unique=False)
    op.create_index("follow_followee_id_status_idx", "follow", ["followee_id", "status"], unique=False)
    op.create_table(
        "spot",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("place_id", sa.UUID(), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=True),
        sa.Column("tags", postgresql.JSONB(astext_type=sa.Text()), server_default="[]", nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["place_id"], ["place.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["user.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "place_id", name="_spot_user_place_uc"),
    )
    op.create_index("idx_spot_place_id", "spot", ["place_id"], unique=False)
    op.create_table(
        "want_to_go",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("place_id", sa.UUID(), nullable=False),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["place_id"], ["place.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["user.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "place_id", name="_want_to_go_user_place_uc"),
    )
    op.create_index("idx_want_to_go_place_id", "want_to_go", ["place_id"], unique=False)


def downgrade():
    op.drop_index("idx_want_to_go_place_id", table_name="want_to_go")
    op.drop_table("want_to_go")
    op.drop_index("idx_spot_place_id", table_name="spot")
    op.drop_table("spot")
    op.drop_index("follow_followee_id_status_idx", table_name="follow")
    op.drop_index("follow_follower_id_status_idx", table_name="follow")
    op.drop_table("follow")
    sa.Enum(name="followstatus").drop(op.get_bind(), checkfirst=True)
    op.drop_index("idx_place_latitude_longitude", table_name="place")
    op.drop_table("place")
    op.drop_table("user")
