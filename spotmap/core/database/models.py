import enum
import uuid
from typing import Any

from sqlalchemy import (
    Enum,
    DateTime,
    Boolean,
    ForeignKey,
    Integer,
    Text,
    func,
    Float,
    UniqueConstraint,
    Index,
)
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import (
    relationship,
    declarative_base,
    Mapped,
    mapped_column,
)
from sqlalchemy.sql import expression


Base: Any = declarative_base()


# region Users
class UserRow(Base):
    __tablename__ = "user"

    id = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    username = mapped_column(Text, unique=True, nullable=False)
    # Private accounts approve followers, so new follows start out pending
    is_private = mapped_column(Boolean, nullable=False, server_default=expression.false())
    created_at = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())


class FollowStatus(enum.Enum):
    pending = "pending"
    active = "active"


class FollowRow(Base):
    __tablename__ = "follow"

    id = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    follower_id = mapped_column(UUID(as_uuid=True), ForeignKey("user.id", ondelete="CASCADE"), nullable=False)
    followee_id = mapped_column(UUID(as_uuid=True), ForeignKey("user.id", ondelete="CASCADE"), nullable=False)
    status = mapped_column(Enum(FollowStatus), nullable=False)
    created_at = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        UniqueConstraint("follower_id", "followee_id", name="_follower_followee_uc"),
        Index("follow_follower_id_status_idx", follower_id, status),
        Index("follow_followee_id_status_idx", followee_id, status),
    )


# endregion Users

# region Places
class PlaceRow(Base):
    __tablename__ = "place"

    id = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = mapped_column(Text, nullable=False)

    # Latitude and longitude of the place
    # This might be the entrance of the place, the most visited location, etc.
    # NOT necessarily the geometric centroid of the place
    latitude = mapped_column(Float, nullable=False)
    longitude = mapped_column(Float, nullable=False)

    # Set for places imported from Foursquare
    foursquare_id = mapped_column(Text, unique=True, nullable=True)

    created_at = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (Index("idx_place_latitude_longitude", latitude, longitude),)


# endregion Places

# region Spots
class SpotRow(Base):
    """A place the user has been to."""

    __tablename__ = "spot"

    id = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = mapped_column(UUID(as_uuid=True), ForeignKey("user.id", ondelete="CASCADE"), nullable=False)
    place_id = mapped_column(UUID(as_uuid=True), ForeignKey("place.id", ondelete="CASCADE"), nullable=False)
    rating = mapped_column(Integer, nullable=True)
    tags = mapped_column(JSONB, nullable=False, server_default="[]")  # list[str]
    created_at = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())

    place: Mapped[PlaceRow] = relationship("PlaceRow")

    # Only want one row per (user, place) pair
    __table_args__ = (
        UniqueConstraint("user_id", "place_id", name="_spot_user_place_uc"),
        Index("idx_spot_place_id", "place_id"),
    )


class WantToGoRow(Base):
    """A place the user wants to go to."""

    __tablename__ = "want_to_go"

    id = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = mapped_column(UUID(as_uuid=True), ForeignKey("user.id", ondelete="CASCADE"), nullable=False)
    place_id = mapped_column(UUID(as_uuid=True), ForeignKey("place.id", ondelete="CASCADE"), nullable=False)
    note = mapped_column(Text, nullable=True)
    created_at = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())

    place: Mapped[PlaceRow] = relationship("PlaceRow")

    __table_args__ = (
        UniqueConstraint("user_id", "place_id", name="_want_to_go_user_place_uc"),
        Index("idx_want_to_go_place_id", "place_id"),
    )


# endregion Spots
