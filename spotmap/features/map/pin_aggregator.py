import asyncio
import math
from collections import Counter
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from pydantic import ValidationError

from spotmap.core.cache import CacheService
from spotmap.core.types import PlaceId, UserId
from spotmap.features.map.entities import MapCluster, MapPin, MapPinsResponse
from spotmap.features.map.map_store import MapStore
from spotmap.features.places.entities import PlacePoint, Viewport
from spotmap.features.users.relation_store import RelationStore
from spotmap.utils import get_logger

log = get_logger(__name__)

MAP_PINS_CACHE_TTL_SECONDS = 300

# Below this zoom level pins get clustered
CLUSTERING_ZOOM_THRESHOLD = 12

# 6 decimal places is ~0.11m at the equator
_CACHE_KEY_PRECISION = Decimal("0.000001")


class ViewportPinAggregator:
    def __init__(self, map_store: MapStore, relation_store: RelationStore, cache: CacheService):
        self.map_store = map_store
        self.relation_store = relation_store
        self.cache = cache

    async def get_map_pins(
        self,
        user_id: UserId,
        viewport: Viewport,
        zoom: Optional[int] = None,
        include_network: bool = True,
    ) -> MapPinsResponse:
        """
        Get the pins for the user's map.

        Pins come from the user's own spots, their want-to-go list, and (if include_network) the spots of the users
        they follow. A place gets a single pin, typed by the highest priority source (spot > want_to_go > network).
        Below CLUSTERING_ZOOM_THRESHOLD, pins sharing a grid cell get merged into a cluster.

        Results are cached per (rounded viewport, user, include_network) for MAP_PINS_CACHE_TTL_SECONDS.
        """
        cache_key = map_pins_cache_key(viewport, user_id, include_network)
        cached = await self.cache.get(cache_key)
        if cached is not None:
            try:
                response = MapPinsResponse.model_validate(cached)
                log.debug("Cache hit for %s", cache_key)
                return response
            except ValidationError:
                # Stale schema or foreign value, recompute and overwrite it
                log.exception("Invalid cached map pins for key %s", cache_key)
        else:
            log.debug("Cache miss for %s", cache_key)

        own_spots, own_want_to_go = await asyncio.gather(
            self.map_store.get_spots(viewport, user_ids=[user_id]),
            self.map_store.get_want_to_go(viewport, user_id=user_id),
        )
        network_spots: list[PlacePoint] = []
        if include_network:
            followee_ids = await self.relation_store.get_active_followee_ids(user_id)
            if followee_ids:
                network_spots = await self.map_store.get_spots(viewport, user_ids=followee_ids)

        pins = merge_pins(own_spots, own_want_to_go, network_spots)
        if zoom is not None and zoom < CLUSTERING_ZOOM_THRESHOLD:
            response = cluster_pins(pins, zoom)
        else:
            response = MapPinsResponse(pins=pins, clusters=[])

        await self.cache.set(cache_key, response.model_dump(mode="json"), ttl_seconds=MAP_PINS_CACHE_TTL_SECONDS)
        return response


def map_pins_cache_key(viewport: Viewport, user_id: Optional[UserId], include_network: bool) -> str:
    bounds = [_round_coordinate(bound) for bound in (viewport.north, viewport.south, viewport.east, viewport.west)]
    user = str(user_id) if user_id else "anonymous"
    network = "network" if include_network else "own"
    return ":".join(["map_pins", *bounds, user, network])


def _round_coordinate(value: float) -> str:
    # Decimal rounding is half away from zero; float round() is half to even and works on binary approximations
    rounded = Decimal(str(value)).quantize(_CACHE_KEY_PRECISION, rounding=ROUND_HALF_UP)
    if rounded.is_zero():
        rounded = abs(rounded)  # No "-0.000000"
    return f"{rounded:.6f}"


def merge_pins(
    own_spots: list[PlacePoint],
    own_want_to_go: list[PlacePoint],
    network_spots: list[PlacePoint],
) -> list[MapPin]:
    pins: dict[PlaceId, MapPin] = {}
    for spot in own_spots:
        if spot.place_id not in pins:
            pins[spot.place_id] = _pin(spot, "spot")
    for item in own_want_to_go:
        if item.place_id not in pins:
            pins[item.place_id] = _pin(item, "want_to_go")

    network_counts: Counter[PlaceId] = Counter(spot.place_id for spot in network_spots)
    for spot in network_spots:
        if spot.place_id not in pins:
            pins[spot.place_id] = _pin(spot, "network")

    for place_id, pin in pins.items():
        pin.spot_count = network_counts[place_id]
    return list(pins.values())


def _pin(point: PlacePoint, pin_type) -> MapPin:
    return MapPin(place_id=point.place_id, latitude=point.latitude, longitude=point.longitude, pin_type=pin_type)


def cluster_pins(pins: list[MapPin], zoom: int) -> MapPinsResponse:
    """
    Bucket pins into a square grid and collapse every cell holding 2+ pins into a cluster.

    The cell is the same number of degrees on both axes, so cells get narrower (in meters) away from the equator.
    """
    cell_size = 360 / 2**zoom
    cells: dict[tuple[int, int], list[MapPin]] = {}
    for pin in pins:
        cell = (math.floor(pin.longitude / cell_size), math.floor(pin.latitude / cell_size))
        cells.setdefault(cell, []).append(pin)

    clustered: set[PlaceId] = set()
    clusters: list[MapCluster] = []
    for members in cells.values():
        if len(members) < 2:
            continue
        clusters.append(
            MapCluster(
                latitude=sum(pin.latitude for pin in members) / len(members),
                longitude=sum(pin.longitude for pin in members) / len(members),
                count=len(members),
            )
        )
        clustered.update(pin.place_id for pin in members)
    return MapPinsResponse(pins=[pin for pin in pins if pin.place_id not in clustered], clusters=clusters)
