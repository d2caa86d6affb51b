"""FastAPI routes for the geolocation REST surface."""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Query, Request, Response

from infrastructure.services import GeolocationServiceDep
from packages.geolocate import proto
from packages.geolocate.cache import CLIENT_CACHE_CONTROL
from packages.geolocate.client_ip import extract_client_ip
from packages.geolocate.errors import GeoValidationError
from packages.geolocate.schemas import (
    ApiError,
    IpGeoResponse,
    IpGeoResponseFull,
    TimezoneResponse,
    TimezoneResponseFull,
)
from packages.geolocate.validation import parse_latitude, parse_longitude

logger = structlog.get_logger()

JSON_CONTENT_TYPE = "application/json; charset=utf-8"
FULL_FIELD_SELECTORS = ("*", "location")


def accept_legacy_api_key(
    api_key_legacy: Optional[str] = Query(
        None, alias="apiKey", description="Ignored, kept for backward compatibility"
    ),
    api_key: Optional[str] = Query(
        None, description="Ignored, kept for backward compatibility"
    ),
) -> None:
    """Accept ``apiKey``/``api_key`` from old clients without checking them."""
    return None


router = APIRouter(
    tags=["IP Geolocation"], dependencies=[Depends(accept_legacy_api_key)]
)


def _render(model, use_protobuf: bool, status_code: int = 200) -> Response:
    if use_protobuf:
        body = proto.encode(model)
        media_type = proto.PROTOBUF_CONTENT_TYPE
    else:
        body = model.model_dump_json(exclude_none=True)
        media_type = JSON_CONTENT_TYPE
    response = Response(content=body, status_code=status_code, media_type=media_type)
    if status_code == 200:
        response.headers["Cache-Control"] = CLIENT_CACHE_CONTROL
    return response


def _reject(error: GeoValidationError, use_protobuf: bool, endpoint: str) -> Response:
    logger.info("request_rejected", endpoint=endpoint, code=error.code.value)
    return _render(ApiError(**error.to_dict()), use_protobuf, status_code=400)


def _wants_full(fields: Optional[str]) -> bool:
    if not fields:
        return False
    return any(selector in fields for selector in FULL_FIELD_SELECTORS)


@router.get(
    "/ipgeo",
    response_model=IpGeoResponse,
    responses={400: {"model": ApiError}},
    summary="Geolocate IP address",
    description=(
        "Look up an IPv4 or IPv6 address. Pass fields=* (or any value"
        " containing 'location') for the full response shape."
    ),
)
def get_ipgeo(
    request: Request,
    service: GeolocationServiceDep,
    ip: Optional[str] = Query(None, description="IPv4 or IPv6 address"),
    fields: Optional[str] = Query(None, description="'*' or 'location' for the full shape"),
) -> Response:
    use_protobuf = proto.accepts_protobuf(request.headers.get("accept"))
    address = (ip or "").strip()
    try:
        if _wants_full(fields):
            result = service.lookup_full(address)
        else:
            result = service.lookup_simple(address, use_cache=not use_protobuf)
    except GeoValidationError as e:
        return _reject(e, use_protobuf, "/ipgeo")
    return _render(result, use_protobuf)


@router.get(
    "/v1/ipgeo",
    response_model=IpGeoResponseFull,
    responses={400: {"model": ApiError}},
    summary="Geolocate IP address (full)",
    description="Full lookup with location, country metadata, currency and timezone.",
)
def get_ipgeo_full(
    request: Request,
    service: GeolocationServiceDep,
    ip: Optional[str] = Query(None, description="IPv4 or IPv6 address"),
) -> Response:
    use_protobuf = proto.accepts_protobuf(request.headers.get("accept"))
    try:
        result = service.lookup_full((ip or "").strip())
    except GeoValidationError as e:
        return _reject(e, use_protobuf, "/v1/ipgeo")
    return _render(result, use_protobuf)


@router.get(
    "/timezone",
    response_model=TimezoneResponse,
    responses={400: {"model": ApiError}},
    summary="Timezone for coordinates",
)
def get_timezone(
    request: Request,
    service: GeolocationServiceDep,
    lat: Optional[str] = Query(None, description="Latitude, -90 to 90"),
    long: Optional[str] = Query(None, description="Longitude, -180 to 180"),
) -> Response:
    use_protobuf = proto.accepts_protobuf(request.headers.get("accept"))
    try:
        result = service.timezone(parse_latitude(lat), parse_longitude(long))
    except GeoValidationError as e:
        return _reject(e, use_protobuf, "/timezone")
    return _render(result, use_protobuf)


@router.get(
    "/v1/timezone",
    response_model=TimezoneResponseFull,
    responses={400: {"model": ApiError}},
    summary="Timezone for coordinates (full)",
    description="Timezone name with UTC offset, DST state and current local time.",
)
def get_timezone_full(
    request: Request,
    service: GeolocationServiceDep,
    lat: Optional[str] = Query(None, description="Latitude, -90 to 90"),
    long: Optional[str] = Query(None, description="Longitude, -180 to 180"),
) -> Response:
    use_protobuf = proto.accepts_protobuf(request.headers.get("accept"))
    try:
        result = service.timezone_full(parse_latitude(lat), parse_longitude(long))
    except GeoValidationError as e:
        return _reject(e, use_protobuf, "/v1/timezone")
    return _render(result, use_protobuf)


@router.get(
    "/",
    response_model=IpGeoResponse,
    responses={400: {"model": ApiError}},
    summary="Geolocate the caller",
    description=(
        "Simple lookup of the caller's address, taken from CF-Connecting-IP,"
        " X-Real-IP, the first X-Forwarded-For hop or the peer address."
    ),
)
def get_self(request: Request, service: GeolocationServiceDep) -> Response:
    use_protobuf = proto.accepts_protobuf(request.headers.get("accept"))
    try:
        result = service.lookup_simple(
            extract_client_ip(request), use_cache=not use_protobuf
        )
    except GeoValidationError as e:
        return _reject(e, use_protobuf, "/")
    return _render(result, use_protobuf)
