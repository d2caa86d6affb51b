"""Integration tests for health and version routes."""

import pytest


@pytest.mark.integration
def test_health(client, geo_lookup):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.text == "OK"
    assert geo_lookup.calls == []


@pytest.mark.integration
def test_version(client):
    response = client.get("/version")

    assert response.json() == {"version": "abc1234"}


@pytest.mark.integration
def test_correlation_id_is_echoed(client):
    response = client.get("/health", headers={"X-Correlation-ID": "req-42"})

    assert response.headers["X-Correlation-ID"] == "req-42"


@pytest.mark.integration
def test_correlation_id_is_generated(client):
    response = client.get("/health")

    assert response.headers["X-Correlation-ID"]


@pytest.mark.integration
def test_cors_allows_any_origin(client):
    response = client.options(
        "/ipgeo",
        headers={
            "Origin": "https://example.org",
            "Access-Control-Request-Method": "GET",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
