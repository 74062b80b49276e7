import uuid
from contextlib import contextmanager
from unittest.mock import AsyncMock

import pytest

from spotmap.features.map.entities import MapCluster, MapLocation, MapPin, MapPinsResponse
from spotmap.features.map.map_store import MapStore
from spotmap.features.map.pin_aggregator import ViewportPinAggregator
from spotmap.features.map.types import MyLocationsResponse
from spotmap.features.places.entities import Viewport
from spotmap.features.stores import get_map_store, get_pin_aggregator
from spotmap.features.users.dependencies import get_caller_user_id

pytestmark = pytest.mark.asyncio
USER_ID = uuid.uuid4()
PLACE_ID = uuid.uuid4()
SPOT_ID = uuid.uuid4()
VIEWPORT_PARAMS = {"north": "40.8", "south": "40.7", "east": "-73.9", "west": "-74.0"}
VIEWPORT = Viewport(north=40.8, south=40.7, east=-73.9, west=-74.0)
MISSING_VIEWPORT = "Viewport parameters (north, south, east, west) are required"


@pytest.fixture
def aggregator():
    aggregator = AsyncMock(spec=ViewportPinAggregator)
    aggregator.get_map_pins.return_value = MapPinsResponse(pins=[], clusters=[])
    return aggregator


@pytest.fixture
def map_store():
    return AsyncMock(spec=MapStore)


@pytest.fixture(autouse=True)
def override_stores(app, aggregator, map_store):
    app.dependency_overrides[get_pin_aggregator] = lambda: aggregator
    app.dependency_overrides[get_map_store] = lambda: map_store
    yield
    app.dependency_overrides = {}


@contextmanager
def request_as(app, user_id: uuid.UUID):
    app.dependency_overrides[get_caller_user_id] = lambda: user_id
    yield
    app.dependency_overrides.pop(get_caller_user_id, None)


async def test_get_map_pins(app, client, aggregator):
    pins = MapPinsResponse(
        pins=[MapPin(place_id=PLACE_ID, latitude=40.7282, longitude=-73.9942, pin_type="spot", spot_count=2)],
        clusters=[],
    )
    aggregator.get_map_pins.return_value = pins

    with request_as(app, USER_ID):
        response = await client.get("/map/pins", params=VIEWPORT_PARAMS)

    assert response.status_code == 200
    assert MapPinsResponse.model_validate(response.json()) == pins
    assert response.json()["pins"][0]["pin_type"] == "spot"
    assert response.json()["pins"][0]["spot_count"] == 2
    aggregator.get_map_pins.assert_awaited_once_with(USER_ID, VIEWPORT, zoom=None, include_network=True)


async def test_get_map_pins_with_zoom(app, client, aggregator):
    aggregator.get_map_pins.return_value = MapPinsResponse(
        pins=[], clusters=[MapCluster(latitude=40.7282, longitude=-73.9942, count=5)]
    )

    with request_as(app, USER_ID):
        response = await client.get("/map/pins", params={**VIEWPORT_PARAMS, "zoom": "10"})

    assert response.status_code == 200
    assert response.json()["clusters"] == [{"latitude": 40.7282, "longitude": -73.9942, "count": 5}]
    aggregator.get_map_pins.assert_awaited_once_with(USER_ID, VIEWPORT, zoom=10, include_network=True)


async def test_get_map_pins_without_network(app, client, aggregator):
    with request_as(app, USER_ID):
        response = await client.get("/map/pins", params={**VIEWPORT_PARAMS, "include_network": "false"})

    assert response.status_code == 200
    aggregator.get_map_pins.assert_awaited_once_with(USER_ID, VIEWPORT, zoom=None, include_network=False)


async def test_get_map_pins_unauthenticated(client, aggregator):
    response = await client.get("/map/pins", params=VIEWPORT_PARAMS)

    assert response.status_code == 401
    assert response.json()["detail"] == "Unauthorized"
    aggregator.get_map_pins.assert_not_called()


@pytest.mark.parametrize(
    "params, detail",
    [
        ({}, MISSING_VIEWPORT),
        ({"north": "40.8", "south": "40.7", "east": "-73.9"}, MISSING_VIEWPORT),
        ({**VIEWPORT_PARAMS, "north": "40.7", "south": "40.8"}, "North must be greater than south"),
        ({**VIEWPORT_PARAMS, "east": "-74.0", "west": "-73.9"}, "East must be greater than west"),
        ({**VIEWPORT_PARAMS, "north": "91"}, "Invalid viewport coordinates"),
        ({**VIEWPORT_PARAMS, "west": "-181"}, "Invalid viewport coordinates"),
    ],
)
async def test_get_map_pins_invalid_viewport(app, client, aggregator, params, detail):
    with request_as(app, USER_ID):
        response = await client.get("/map/pins", params=params)

    assert response.status_code == 400
    assert response.json()["detail"] == detail
    aggregator.get_map_pins.assert_not_called()


async def test_get_map_pins_invalid_zoom(app, client, aggregator):
    with request_as(app, USER_ID):
        response = await client.get("/map/pins", params={**VIEWPORT_PARAMS, "zoom": "30"})

    assert response.status_code == 400
    assert "zoom" in response.json()
    aggregator.get_map_pins.assert_not_called()


async def test_get_map_pins_service_error(app, client, aggregator):
    aggregator.get_map_pins.side_effect = RuntimeError("Database error")

    with request_as(app, USER_ID):
        with pytest.raises(RuntimeError, match="Database error"):
            await client.get("/map/pins", params=VIEWPORT_PARAMS)


async def test_get_my_locations(app, client, map_store):
    location = MapLocation(place_id=PLACE_ID, latitude=40.75, longitude=-73.95, pin_type="spot", spot_id=SPOT_ID)
    map_store.get_user_locations.return_value = [location]

    with request_as(app, USER_ID):
        response = await client.get("/map/my-locations")

    assert response.status_code == 200
    assert MyLocationsResponse.model_validate(response.json()) == MyLocationsResponse(locations=[location], count=1)
    map_store.get_user_locations.assert_awaited_once_with(USER_ID, None)


async def test_get_my_locations_in_viewport(app, client, map_store):
    map_store.get_user_locations.return_value = []

    with request_as(app, USER_ID):
        response = await client.get("/map/my-locations", params=VIEWPORT_PARAMS)

    assert response.status_code == 200
    assert response.json() == {"locations": [], "count": 0}
    map_store.get_user_locations.assert_awaited_once_with(USER_ID, VIEWPORT)


async def test_get_my_locations_rejects_inverted_viewport(app, client, map_store):
    with request_as(app, USER_ID):
        response = await client.get("/map/my-locations", params={**VIEWPORT_PARAMS, "north": "40.6"})

    assert response.status_code == 400
    assert response.json() == {"detail": "North must be greater than south"}
    map_store.get_user_locations.assert_not_called()
