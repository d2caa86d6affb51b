"""Static country and language reference tables.

Both tables are JSON files shipped with the package, read once and kept
as read-only mappings for the life of the process.
"""

import json
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional

import structlog

from packages.geolocate.models import CountryMetadata

logger = structlog.get_logger()

DATA_DIR = Path(__file__).parent / "data"
FLAG_PATH_TEMPLATE = "/static/flags/{code}.svg"


def flag_path(country_code: str) -> str:
    """Relative path of the SVG flag served for a country code."""
    return FLAG_PATH_TEMPLATE.format(code=country_code.lower())


def _load_json(name: str) -> Any:
    with open(DATA_DIR / name, "r", encoding="utf-8") as fh:
        return json.load(fh)


def _to_metadata(raw: Mapping[str, Any]) -> CountryMetadata:
    languages = tuple(lang for lang in raw.get("languages", "").split(",") if lang)
    return CountryMetadata(
        iso_code2=raw["iso_code2"],
        iso_code3=raw["iso_code3"],
        name=raw["name"],
        official_name=raw["official_name"],
        capital=raw["capital"],
        continent_code=raw["continent_code"],
        continent_name=raw["continent_name"],
        calling_code=raw.get("calling_code", ""),
        tld=raw.get("tld", ""),
        currency_code=raw.get("currency_code", ""),
        currency_name=raw.get("currency_name", ""),
        currency_symbol=raw.get("currency_symbol", ""),
        languages=languages,
        is_eu=bool(raw.get("is_eu", False)),
        flag_emoji=raw.get("flag_emoji", ""),
    )


class StaticCountryReference:
    """CountryReferencePort backed by the bundled JSON tables.

    Country codes are matched case-insensitively.

    Args:
        countries: Optional override of the country table, keyed by alpha-2.
        languages: Optional override of the language table, keyed by alpha-2.
    """

    def __init__(
        self,
        countries: Optional[Mapping[str, CountryMetadata]] = None,
        languages: Optional[Mapping[str, str]] = None,
    ) -> None:
        if countries is None:
            countries = {
                code.upper(): _to_metadata(raw)
                for code, raw in _load_json("countries.json").items()
            }
        if languages is None:
            languages = {
                code.upper(): value
                for code, value in _load_json("languages.json").items()
            }
        self._countries = MappingProxyType(dict(countries))
        self._languages = MappingProxyType(dict(languages))
        logger.info(
            "country_reference_loaded",
            countries=len(self._countries),
            languages=len(self._languages),
        )

    def metadata(self, country_code: Optional[str]) -> Optional[CountryMetadata]:
        if not country_code:
            return None
        code = country_code.upper()
        found = self._countries.get(code)
        if found is None:
            return CountryMetadata.unknown(code)
        return found

    def languages(self, country_code: Optional[str]) -> str:
        if not country_code:
            return ""
        return self._languages.get(country_code.upper(), "")
