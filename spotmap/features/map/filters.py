from abc import ABC, abstractmethod
from typing import Any

import sqlalchemy as sa
from sqlalchemy import values, column
from sqlalchemy.dialects import postgresql

from spotmap.core.database.models import PlaceRow
from spotmap.core.types import UserId
from spotmap.features.places.entities import Viewport


class MapFilter(ABC):
    @abstractmethod
    def apply(self, query: sa.sql.Select) -> sa.sql.Select:
        pass


class ViewportFilter(MapFilter):
    """Keep places inside the viewport, edges included. Expects the query to join PlaceRow."""

    def __init__(self, viewport: Viewport):
        self.viewport = viewport

    def apply(self, query: sa.sql.Select) -> sa.sql.Select:
        return query.where(
            PlaceRow.latitude.between(self.viewport.south, self.viewport.north),
            PlaceRow.longitude.between(self.viewport.west, self.viewport.east),
        )


class UserFilter(MapFilter):
    def __init__(self, user_column: Any, user_id: UserId):
        self.user_column = user_column
        self.user_id = user_id

    def apply(self, query: sa.sql.Select) -> sa.sql.Select:
        return query.where(self.user_column == self.user_id)


class UserListFilter(MapFilter):
    def __init__(self, user_column: Any, user_ids: list[UserId]):
        self.user_column = user_column
        self.user_ids = user_ids

    def apply(self, query: sa.sql.Select) -> sa.sql.Select:
        if len(self.user_ids) > 100:
            return query.where(
                self.user_column.in_(
                    sa.select(
                        values(column("user_id", postgresql.UUID), name="user_ids").data(
                            [(user_id,) for user_id in self.user_ids]
                        )
                    )
                )
            )
        return query.where(self.user_column.in_(self.user_ids))
