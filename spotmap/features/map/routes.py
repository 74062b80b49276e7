from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from starlette.requests import Request

from spotmap.core import config
from spotmap.core.types import UserId
from spotmap.features.map.entities import MapPinsResponse
from spotmap.features.map.map_store import MapStore
from spotmap.features.map.pin_aggregator import ViewportPinAggregator
from spotmap.features.map.types import MyLocationsResponse
from spotmap.features.places.entities import Viewport
from spotmap.features.stores import get_map_store, get_pin_aggregator
from spotmap.features.users.dependencies import get_caller_user_id, limiter

router = APIRouter()


@router.get("/pins", response_model=MapPinsResponse)
@limiter.limit(config.MAP_PINS_RATE_LIMIT)
async def get_map_pins(
    request: Request,  # This needs to be here for limiter
    north: Optional[float] = None,
    south: Optional[float] = None,
    east: Optional[float] = None,
    west: Optional[float] = None,
    zoom: Optional[int] = Query(None, ge=0, le=22),
    include_network: bool = True,
    user_id: UserId = Depends(get_caller_user_id),
    aggregator: ViewportPinAggregator = Depends(get_pin_aggregator),
):
    """Get the pins (or clusters, when zoomed out) for the given viewport. Bounds should be in SRID 4326."""
    if north is None or south is None or east is None or west is None:
        raise HTTPException(400, detail="Viewport parameters (north, south, east, west) are required")
    viewport = parse_viewport(north, south, east, west)
    return await aggregator.get_map_pins(user_id, viewport, zoom=zoom, include_network=include_network)


@router.get("/my-locations", response_model=MyLocationsResponse)
async def get_my_locations(
    north: Optional[float] = None,
    south: Optional[float] = None,
    east: Optional[float] = None,
    west: Optional[float] = None,
    user_id: UserId = Depends(get_caller_user_id),
    map_store: MapStore = Depends(get_map_store),
):
    """Get the caller's spots and want-to-go items. The viewport is only applied when all four bounds are given."""
    viewport = None
    if north is not None and south is not None and east is not None and west is not None:
        viewport = parse_viewport(north, south, east, west)
    locations = await map_store.get_user_locations(user_id, viewport)
    return MyLocationsResponse(locations=locations, count=len(locations))


def parse_viewport(north: float, south: float, east: float, west: float) -> Viewport:
    # Written as negated ranges so NaN fails too
    if not all(-90 <= lat <= 90 for lat in (north, south)) or not all(-180 <= long <= 180 for long in (east, west)):
        raise HTTPException(400, detail="Invalid viewport coordinates")
    if north <= south:
        raise HTTPException(400, detail="North must be greater than south")
    if east <= west:
        raise HTTPException(400, detail="East must be greater than west")
    return Viewport(north=north, south=south, east=east, west=west)
