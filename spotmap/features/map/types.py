from spotmap.core.types import Base
from spotmap.features.map.entities import MapLocation


class MyLocationsResponse(Base):
    locations: list[MapLocation]
    count: int
