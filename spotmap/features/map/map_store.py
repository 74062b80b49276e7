from typing import Optional

import sqlalchemy as sa

from spotmap.core.database.engine import SessionFactory
from spotmap.core.database.models import PlaceRow, SpotRow, WantToGoRow
from spotmap.core.types import UserId
from spotmap.features.map.entities import MapLocation
from spotmap.features.map.filters import MapFilter, UserFilter, UserListFilter, ViewportFilter
from spotmap.features.places.entities import PlacePoint, Viewport


class MapStore:
    """
    Map queries over spots and want-to-go items.

    Every method opens its own session so callers can run queries concurrently (an AsyncSession does not support
    concurrent operations).
    """

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    async def get_spots(self, viewport: Viewport, user_ids: list[UserId]) -> list[PlacePoint]:
        """Get the places of every spot inside the viewport owned by one of the given users."""
        if len(user_ids) == 0:
            return []
        query = point_query(SpotRow)
        for f in (ViewportFilter(viewport), UserListFilter(SpotRow.user_id, user_ids)):
            query = f.apply(query)
        return await self._get_points(query.order_by(SpotRow.created_at, SpotRow.id))

    async def get_want_to_go(self, viewport: Viewport, user_id: UserId) -> list[PlacePoint]:
        """Get the places of the user's want-to-go items inside the viewport."""
        query = point_query(WantToGoRow)
        for f in (ViewportFilter(viewport), UserFilter(WantToGoRow.user_id, user_id)):
            query = f.apply(query)
        return await self._get_points(query.order_by(WantToGoRow.created_at, WantToGoRow.id))

    async def get_user_locations(self, user_id: UserId, viewport: Optional[Viewport] = None) -> list[MapLocation]:
        """Get the user's spots followed by their want-to-go items, optionally restricted to the viewport."""
        filters: list[MapFilter] = [ViewportFilter(viewport)] if viewport else []
        spot_query = location_query(SpotRow)
        want_to_go_query = location_query(WantToGoRow)
        for f in filters + [UserFilter(SpotRow.user_id, user_id)]:
            spot_query = f.apply(spot_query)
        for f in filters + [UserFilter(WantToGoRow.user_id, user_id)]:
            want_to_go_query = f.apply(want_to_go_query)

        async with self.session_factory() as db:
            spot_rows = (await db.execute(spot_query.order_by(SpotRow.created_at, SpotRow.id))).all()
            want_to_go_rows = (
                await db.execute(want_to_go_query.order_by(WantToGoRow.created_at, WantToGoRow.id))
            ).all()
        spots = [
            MapLocation(place_id=place_id, latitude=lat, longitude=long, pin_type="spot", spot_id=spot_id)
            for (spot_id, place_id, lat, long) in spot_rows
        ]
        want_to_go = [
            MapLocation(
                place_id=place_id, latitude=lat, longitude=long, pin_type="want_to_go", want_to_go_id=want_to_go_id
            )
            for (want_to_go_id, place_id, lat, long) in want_to_go_rows
        ]
        return spots + want_to_go

    async def _get_points(self, query: sa.sql.Select) -> list[PlacePoint]:
        async with self.session_factory() as db:
            rows = (await db.execute(query)).all()
        return [PlacePoint(place_id=place_id, latitude=lat, longitude=long) for (place_id, lat, long) in rows]


def point_query(entity) -> sa.sql.Select:
    return sa.select(entity.place_id, PlaceRow.latitude, PlaceRow.longitude).select_from(entity).join(PlaceRow)


def location_query(entity) -> sa.sql.Select:
    return (
        sa.select(entity.id, entity.place_id, PlaceRow.latitude, PlaceRow.longitude).select_from(entity).join(PlaceRow)
    )
