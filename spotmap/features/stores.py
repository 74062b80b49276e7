from fastapi import Depends

from spotmap.core.cache import CacheService, get_cache_service
from spotmap.core.database.engine import get_db_context
from spotmap.features.map.map_store import MapStore
from spotmap.features.map.pin_aggregator import ViewportPinAggregator
from spotmap.features.users.relation_store import RelationStore


def get_map_store():
    return MapStore(session_factory=get_db_context)


def get_relation_store():
    return RelationStore(session_factory=get_db_context)


def get_pin_aggregator(
    map_store: MapStore = Depends(get_map_store),
    relation_store: RelationStore = Depends(get_relation_store),
    cache: CacheService = Depends(get_cache_service),
):
    return ViewportPinAggregator(map_store=map_store, relation_store=relation_store, cache=cache)
