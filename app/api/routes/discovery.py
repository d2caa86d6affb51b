"""Discovery documents for crawlers, agents and client generators."""

import yaml
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from infrastructure.services import SettingsDep
from packages.geolocate import proto

router = APIRouter(tags=["Discovery"], include_in_schema=False)

YAML_MEDIA_TYPE = "application/yaml; charset=utf-8"

LLMS_TXT = """\
# IP Geolocation API

> Free IP address geolocation and coordinate timezone lookup. No API key
> required. Responses are JSON by default; send
> `Accept: application/x-protobuf` for protobuf (schema at /geolocation.proto).

## Endpoints

- GET {base}/ipgeo?ip=8.8.8.8 - simple lookup: latitude, longitude, city,
  country_name, time_zone.name, languages
- GET {base}/ipgeo?ip=8.8.8.8&fields=* - full lookup (same as /v1/ipgeo)
- GET {base}/v1/ipgeo?ip=8.8.8.8 - full lookup: location, country_metadata,
  currency, time_zone with offsets and DST state
- GET {base}/timezone?lat=59.33&long=18.07 - timezone name for coordinates
- GET {base}/v1/timezone?lat=59.33&long=18.07 - timezone with offset, DST
  state and current local time
- GET {base}/ - simple lookup of the caller's own address

## Errors

Invalid input returns HTTP 400 with `{{"error": "...", "code": "..."}}`.
Codes: INVALID_IP, INVALID_LATITUDE, INVALID_LONGITUDE. Addresses that are
valid but unknown return 200 with empty fields.

## MCP

JSON-RPC 2.0 at POST {base}/mcp (batch: POST {base}/mcp/batch). Tools:
geoip_lookup, geoip_bulk_lookup (max 100 IPs), geoip_lookup_self,
timezone_lookup. Discovery document: {base}/mcp/info

## Docs

- OpenAPI: {base}/openapi.yaml
"""

ROBOTS_TXT = """\
User-agent: *
Allow: /
Allow: /openapi.yaml
Allow: /llms.txt
Allow: /sitemap.xml

# API endpoints - allow crawling for discovery
Allow: /ipgeo
Allow: /timezone
Allow: /v1/ipgeo
Allow: /v1/timezone

# Sitemap location
Sitemap: {base}/sitemap.xml
"""

# (path, priority)
SITEMAP_PAGES = [
    ("/", "1.0"),
    ("/openapi.yaml", "0.8"),
    ("/llms.txt", "0.8"),
    ("/ipgeo", "0.9"),
    ("/v1/ipgeo", "0.9"),
    ("/timezone", "0.9"),
    ("/v1/timezone", "0.9"),
]


def render_openapi_yaml(request: Request, base_url: str) -> str:
    document = dict(request.app.openapi())
    document["servers"] = [{"url": base_url}]
    return yaml.safe_dump(document, sort_keys=False, allow_unicode=True)


@router.get("/openapi.yaml")
def get_openapi_yaml(request: Request, settings: SettingsDep) -> Response:
    return Response(
        content=render_openapi_yaml(request, settings.server.BASE_URL),
        media_type=YAML_MEDIA_TYPE,
    )


@router.get("/.well-known/openapi.yaml")
def get_wellknown_openapi_yaml(request: Request, settings: SettingsDep) -> Response:
    return get_openapi_yaml(request, settings)


@router.get("/llms.txt", response_class=PlainTextResponse)
def get_llms_txt(settings: SettingsDep) -> str:
    return LLMS_TXT.format(base=settings.server.BASE_URL)


@router.get("/robots.txt", response_class=PlainTextResponse)
def get_robots_txt(settings: SettingsDep) -> str:
    return ROBOTS_TXT.format(base=settings.server.BASE_URL)


@router.get("/sitemap.xml")
def get_sitemap(settings: SettingsDep) -> Response:
    base = settings.server.BASE_URL
    entries = "".join(
        f"  <url>\n"
        f"    <loc>{base}{path}</loc>\n"
        f"    <changefreq>monthly</changefreq>\n"
        f"    <priority>{priority}</priority>\n"
        f"  </url>\n"
        for path, priority in SITEMAP_PAGES
    )
    body = (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n'
        f"{entries}"
        "</urlset>\n"
    )
    return Response(content=body, media_type="application/xml; charset=utf-8")


@router.get("/.well-known/ai-plugin.json")
def get_ai_plugin_manifest(settings: SettingsDep) -> JSONResponse:
    base = settings.server.BASE_URL
    return JSONResponse(
        {
            "schema_version": "v1",
            "name_for_human": "IP Geolocation API",
            "name_for_model": "ip_geolocation",
            "description_for_human": (
                "Get geographic location data from IP addresses and timezone"
                " information from coordinates."
            ),
            "description_for_model": (
                "Use this API to look up geographic location (city, country,"
                " coordinates, timezone) for any IP address, or to get timezone"
                " information from latitude/longitude coordinates. Supports both"
                " simple and detailed response formats."
            ),
            "auth": {"type": "none"},
            "api": {"type": "openapi", "url": f"{base}/openapi.yaml"},
            "logo_url": f"{base}/static/flags/un.svg",
            "legal_info_url": f"{base}/",
        }
    )


@router.get("/geolocation.proto", response_class=PlainTextResponse)
def get_proto_schema() -> str:
    """Protobuf schema for clients generating their own message classes."""
    return proto.render_schema()
