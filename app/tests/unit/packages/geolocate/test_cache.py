"""Unit tests for the simple-response cache."""

import pytest

from packages.geolocate.cache import ResultCache
from packages.geolocate.schemas import IpGeoResponse


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


@pytest.mark.unit
def test_get_returns_inserted_value():
    cache = ResultCache(max_entries=10, ttl_seconds=60)
    response = IpGeoResponse(city="Stockholm")

    cache.insert("8.8.8.8", response)

    assert cache.get("8.8.8.8") is response
    assert cache.get("1.1.1.1") is None


@pytest.mark.unit
def test_entries_expire_after_ttl():
    clock = FakeClock()
    cache = ResultCache(max_entries=10, ttl_seconds=60, timer=clock)
    cache.insert("8.8.8.8", IpGeoResponse())

    clock.now = 59.0
    assert cache.get("8.8.8.8") is not None

    clock.now = 61.0
    assert cache.get("8.8.8.8") is None


@pytest.mark.unit
def test_capacity_is_bounded():
    cache = ResultCache(max_entries=3, ttl_seconds=60)

    for i in range(10):
        cache.insert(f"10.0.0.{i}", IpGeoResponse())

    assert len(cache) == 3


@pytest.mark.unit
def test_keys_are_not_canonicalized():
    cache = ResultCache(max_entries=10, ttl_seconds=60)
    cache.insert("::1", IpGeoResponse(city="a"))

    assert cache.get("0::1") is None


@pytest.mark.unit
def test_insert_same_key_overwrites():
    cache = ResultCache(max_entries=10, ttl_seconds=60)
    cache.insert("8.8.8.8", IpGeoResponse(city="old"))
    cache.insert("8.8.8.8", IpGeoResponse(city="new"))

    assert cache.get("8.8.8.8").city == "new"
    assert len(cache) == 1


@pytest.mark.unit
def test_from_settings_uses_cache_section(settings):
    settings.cache.CACHE_SIZE = 2

    cache = ResultCache.from_settings(settings)
    for ip in ("1.1.1.1", "1.0.0.1", "8.8.8.8"):
        cache.insert(ip, IpGeoResponse())

    assert len(cache) == 2
