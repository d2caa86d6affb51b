"""Unit tests for the response builder."""

import json
from datetime import datetime, timedelta

import pytest
import pytz

from infrastructure.clients.timezone import PytzDetailsClient
from infrastructure.operations import OperationResult
from packages.geolocate.builder import ResponseBuilder, default_full, default_simple
from tests.factories.geo import (
    FakeTimezoneDetails,
    FakeTimezoneNames,
    STOCKHOLM_IP,
    make_geo_record,
)


@pytest.mark.unit
def test_build_simple_composes_zone_and_languages(builder):
    response = builder.build_simple(make_geo_record())

    assert response.latitude == 59.3293
    assert response.longitude == 18.0686
    assert response.city == "Stockholm"
    assert response.country_name == "Sweden"
    assert response.time_zone.name == "Europe/Stockholm"
    assert response.languages == "sv-SE,sv"


@pytest.mark.unit
def test_build_simple_skips_zone_lookup_without_coordinates(
    builder, timezone_names
):
    response = builder.build_simple(make_geo_record(latitude=None, longitude=None))

    assert response.time_zone.name == ""
    assert timezone_names.calls == []


@pytest.mark.unit
def test_build_simple_skips_zone_lookup_with_one_coordinate(builder, timezone_names):
    builder.build_simple(make_geo_record(longitude=None))

    assert timezone_names.calls == []


@pytest.mark.unit
def test_build_simple_unknown_country_has_empty_languages(builder):
    response = builder.build_simple(make_geo_record(country_code="ZZ"))

    assert response.languages == ""


@pytest.mark.unit
def test_build_simple_is_deterministic(builder):
    record = make_geo_record()

    first = builder.build_simple(record).model_dump_json()
    second = builder.build_simple(record).model_dump_json()

    assert first == second


@pytest.mark.unit
def test_build_full_differs_only_in_current_time(timezone_names, country_reference):
    moments = iter(
        pytz.utc.localize(datetime(2026, 7, 1, 12, 0, 0)) + timedelta(seconds=n)
        for n in range(2)
    )
    builder = ResponseBuilder(
        timezone_names=timezone_names,
        timezone_details=PytzDetailsClient(clock=lambda: next(moments)),
        countries=country_reference,
    )
    record = make_geo_record()

    first = json.loads(builder.build_full(STOCKHOLM_IP, record).model_dump_json())
    second = json.loads(builder.build_full(STOCKHOLM_IP, record).model_dump_json())

    assert first["time_zone"]["current_time_unix"] == 1782907200.0
    assert second["time_zone"]["current_time_unix"] == 1782907201.0
    assert first["time_zone"]["current_time"] != second["time_zone"]["current_time"]
    for body in (first, second):
        del body["time_zone"]["current_time"]
        del body["time_zone"]["current_time_unix"]
    assert first == second


@pytest.mark.unit
def test_build_full_germany_metadata(builder):
    record = make_geo_record(
        city="Berlin",
        country_name="Germany",
        country_code="DE",
        state_prov="Land Berlin",
        state_code="BE",
    )

    response = builder.build_full("5.9.0.1", record)

    assert response.ip == "5.9.0.1"
    assert response.currency.code == "EUR"
    assert response.location.is_eu is True
    assert response.location.country_code3 == "DEU"
    assert response.location.state_code == "DE-BE"
    assert response.location.country_flag == "/static/flags/de.svg"
    assert response.country_metadata.calling_code == "+49"


@pytest.mark.unit
def test_build_full_formats_coordinates_and_ids(builder):
    response = builder.build_full("81.2.69.142", make_geo_record(latitude=59.3, longitude=18.0))

    assert response.location.latitude == "59.30000"
    assert response.location.longitude == "18.00000"
    assert response.location.geoname_id == "2673730"
    assert response.location.zipcode == "111 22"
    assert response.location.district is None


@pytest.mark.unit
def test_build_full_state_code_requires_both_parts(builder):
    no_state = builder.build_full("1.1.1.1", make_geo_record(state_code=None))
    no_country = builder.build_full("1.1.1.1", make_geo_record(country_code=None))

    assert no_state.location.state_code is None
    assert no_country.location.state_code is None


@pytest.mark.unit
def test_build_full_without_country_code_has_no_metadata(builder):
    response = builder.build_full("1.1.1.1", make_geo_record(country_code=None))

    assert response.country_metadata is None
    assert response.currency is None
    assert response.location.country_flag is None
    assert response.location.country_code3 is None


@pytest.mark.unit
def test_build_full_unknown_country_uses_placeholder(builder):
    response = builder.build_full("1.1.1.1", make_geo_record(country_code="ZZ"))

    assert response.location.country_code3 == "UNK"
    assert response.location.continent_code == "XX"
    assert response.currency is not None
    assert response.currency.code == ""


@pytest.mark.unit
def test_build_full_time_zone_details(builder):
    response = builder.build_full("81.2.69.142", make_geo_record())

    assert response.time_zone.name == "Europe/Stockholm"
    assert response.time_zone.offset == 2
    assert response.time_zone.offset_with_dst == 2
    assert response.time_zone.is_dst is True
    assert response.time_zone.dst_savings == 1


@pytest.mark.unit
def test_build_full_time_zone_absent_when_details_missing(country_reference):
    builder = ResponseBuilder(
        timezone_names=FakeTimezoneNames("Mars/Olympus_Mons"),
        timezone_details=FakeTimezoneDetails(),
        countries=country_reference,
    )

    response = builder.build_full("81.2.69.142", make_geo_record())

    assert response.time_zone is None
    assert response.location is not None


@pytest.mark.unit
def test_build_full_time_zone_absent_when_name_missing(country_reference):
    builder = ResponseBuilder(
        timezone_names=FakeTimezoneNames(None),
        timezone_details=FakeTimezoneDetails(),
        countries=country_reference,
    )

    response = builder.build_full("81.2.69.142", make_geo_record())

    assert response.time_zone is None


@pytest.mark.unit
def test_simple_from_lookup_soft_fails_to_default(builder):
    result = OperationResult.not_found("IP address not found in database: 1.1.1.1")

    response = builder.simple_from_lookup(result)

    assert response == default_simple()
    assert response.model_dump(exclude_none=True) == {
        "city": "",
        "country_name": "",
        "time_zone": {"name": ""},
        "languages": "",
    }


@pytest.mark.unit
def test_full_from_lookup_soft_fails_to_ip_only(builder):
    result = OperationResult.transient_error("Lookup error: corrupt record")

    response = builder.full_from_lookup("1.1.1.1", result)

    assert response == default_full("1.1.1.1")
    assert response.model_dump(exclude_none=True) == {"ip": "1.1.1.1"}


@pytest.mark.unit
def test_build_timezone_empty_when_unresolved(country_reference):
    builder = ResponseBuilder(
        timezone_names=FakeTimezoneNames(None),
        timezone_details=FakeTimezoneDetails(),
        countries=country_reference,
    )

    assert builder.build_timezone(0.0, -150.0).timezone == ""
    full = builder.build_timezone_full(0.0, -150.0)
    assert full.model_dump(exclude_none=True) == {"timezone": ""}


@pytest.mark.unit
def test_build_timezone_full_copies_details(builder):
    response = builder.build_timezone_full(59.33, 18.07)

    assert response.timezone == "Europe/Stockholm"
    assert response.offset == 2
    assert response.offset_with_dst == 2
    assert response.current_time == "2026-07-01 14:00:00.000+0200"
    assert response.dst_exists is True
