"""Shared fixtures for unit and integration tests.

Fake ports stand in for the GeoIP database and timezonefinder so tests run
without a GeoLite2 file. The country reference tables are the real bundled
ones.
"""

import pytest

from infrastructure.configuration import Settings
from packages.geolocate.builder import ResponseBuilder
from packages.geolocate.cache import ResultCache
from packages.geolocate.reference import StaticCountryReference
from packages.geolocate.service import GeolocationService
from packages.mcp.dispatcher import McpDispatcher
from packages.mcp.tools import GeoTools
from tests.factories.geo import (
    NEW_YORK_IP,
    STOCKHOLM_IP,
    FakeGeoLookup,
    FakeTimezoneDetails,
    FakeTimezoneNames,
    make_geo_record,
)


@pytest.fixture
def settings():
    """Settings built from defaults only, ignoring any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture(scope="session")
def country_reference():
    return StaticCountryReference()


@pytest.fixture
def geo_lookup():
    return FakeGeoLookup(
        records={
            STOCKHOLM_IP: make_geo_record(),
            NEW_YORK_IP: make_geo_record(
                latitude=40.7128,
                longitude=-74.006,
                city="New York",
                country_name="United States",
                country_code="US",
                state_prov="New York",
                state_code="NY",
                postal_code="10001",
                geoname_id=5128581,
            ),
        }
    )


@pytest.fixture
def timezone_names():
    return FakeTimezoneNames()


@pytest.fixture
def timezone_details():
    return FakeTimezoneDetails()


@pytest.fixture
def builder(timezone_names, timezone_details, country_reference):
    return ResponseBuilder(
        timezone_names=timezone_names,
        timezone_details=timezone_details,
        countries=country_reference,
    )


@pytest.fixture
def result_cache():
    return ResultCache(max_entries=100, ttl_seconds=60)


@pytest.fixture
def geolocation_service(geo_lookup, builder, result_cache):
    return GeolocationService(geo=geo_lookup, builder=builder, cache=result_cache)


@pytest.fixture
def geo_tools(geo_lookup, builder):
    return GeoTools(geo=geo_lookup, builder=builder)


@pytest.fixture
def mcp_dispatcher(geo_tools):
    return McpDispatcher(tools=geo_tools, version="1.0.0")
