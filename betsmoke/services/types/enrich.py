"""Attach `typeName` to SportsMonks payload entries that carry a `type_id`.

SportsMonks responses only reference types by id; these helpers resolve the
names from the in-process cache so the frontend needs no hardcoded mapping.
Entries are mutated in place and returned.
"""
from typing import Any, Dict, List

from betsmoke.services.types.cache import TypesCache

FIXTURE_TYPED_SECTIONS = ("statistics", "events", "sidelined")


def enrich_stat(cache: TypesCache, stat: Dict[str, Any]) -> Dict[str, Any]:
    if isinstance(stat, dict) and stat.get("type_id"):
        stat["typeName"] = cache.get_name(stat["type_id"])
    return stat


def enrich_stats(cache: TypesCache, stats: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    if not isinstance(stats, list):
        return stats
    for stat in stats:
        enrich_stat(cache, stat)
    return stats


# events carry the same type_id shape as statistics
enrich_events = enrich_stats


def enrich_fixture(cache: TypesCache, fixture: Dict[str, Any]) -> Dict[str, Any]:
    if not isinstance(fixture, dict):
        return fixture
    for section in FIXTURE_TYPED_SECTIONS:
        enrich_stats(cache, fixture.get(section))
    return fixture
