from typing import Literal

from spotmap.core.types import Base, PlaceId, SpotId, WantToGoId

PinType = Literal["spot", "want_to_go", "network"]


class MapPin(Base):
    place_id: PlaceId
    latitude: float
    longitude: float
    pin_type: PinType
    spot_count: int = 0  # Number of spots from followed users at this place


class MapCluster(Base):
    latitude: float
    longitude: float
    count: int


class MapPinsResponse(Base):
    pins: list[MapPin]
    clusters: list[MapCluster]


class MapLocation(Base):
    place_id: PlaceId
    latitude: float
    longitude: float
    pin_type: Literal["spot", "want_to_go"]
    spot_id: SpotId | None = None
    want_to_go_id: WantToGoId | None = None
