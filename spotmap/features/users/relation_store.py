import sqlalchemy as sa

from spotmap.core.database.engine import SessionFactory
from spotmap.core.database.models import FollowRow, FollowStatus
from spotmap.core.types import UserId


class RelationStore:
    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    async def get_active_followee_ids(self, user_id: UserId) -> list[UserId]:
        """Get the users `user_id` follows. Pending follow requests don't count."""
        query = sa.select(FollowRow.followee_id).where(
            FollowRow.follower_id == user_id, FollowRow.status == FollowStatus.active
        )
        async with self.session_factory() as db:
            result = await db.execute(query)
            return list(result.scalars().all())
