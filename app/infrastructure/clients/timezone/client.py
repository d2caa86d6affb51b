"""Timezone clients: coordinate lookup and per-zone offset details.

``TimezoneFinderClient`` answers "which IANA zone contains this point"
from the timezonefinder polygon data. ``PytzDetailsClient`` answers
"what are this zone's offsets right now" using pytz.
"""

import math
import threading
from datetime import datetime, timedelta
from typing import Callable, Optional

import pytz
import structlog
from timezonefinder import TimezoneFinder

from packages.geolocate.models import TimezoneDetail

logger = structlog.get_logger()


def _utc_now() -> datetime:
    return datetime.now(pytz.utc)


def _whole_hours(offset: Optional[timedelta]) -> int:
    if offset is None:
        return 0
    return int(offset.total_seconds() / 3600)


class TimezoneFinderClient:
    """TimezoneNamePort backed by timezonefinder.

    Args:
        finder: Optional pre-built TimezoneFinder (loading one reads the
            boundary data, so the provider builds it once)
    """

    def __init__(self, finder: Optional[TimezoneFinder] = None) -> None:
        self._finder = finder if finder is not None else TimezoneFinder()
        self._lock = threading.Lock()
        self._logger = logger.bind(component="timezone_finder_client")

    def resolve(self, lat: float, lon: float) -> Optional[str]:
        """Return the IANA zone name at (lat, lon), or None.

        Out-of-range coordinates and points with no zone yield None.
        """
        if not (-90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0):
            return None
        try:
            with self._lock:
                name = self._finder.timezone_at(lng=lon, lat=lat)
        except ValueError as e:
            self._logger.warning("timezone_resolve_failed", error=str(e))
            return None
        return name or None


class PytzDetailsClient:
    """TimezoneDetailPort backed by pytz.

    DST is detected by comparing the zone's offsets at noon on January 15
    and July 15 of the current year. ``offset_hours`` and
    ``offset_with_dst_hours`` are both the offset in effect now;
    ``dst_savings_hours`` carries the DST magnitude.

    Args:
        clock: Returns the current aware UTC datetime (tests pin it)
    """

    def __init__(self, clock: Callable[[], datetime] = _utc_now) -> None:
        self._clock = clock

    def details(self, name: str) -> Optional[TimezoneDetail]:
        try:
            tz = pytz.timezone(name)
        except pytz.UnknownTimeZoneError:
            return None

        now_utc = self._clock()
        local = now_utc.astimezone(tz)
        current_offset = local.utcoffset()

        jan = tz.localize(datetime(local.year, 1, 15, 12)).utcoffset()
        jul = tz.localize(datetime(local.year, 7, 15, 12)).utcoffset()
        dst_exists = jan != jul
        dst_savings_hours = int(abs((jul - jan).total_seconds()) // 3600)
        is_dst = dst_exists and current_offset == max(jan, jul)

        current_time = "{}.{:03d}{}".format(
            local.strftime("%Y-%m-%d %H:%M:%S"),
            local.microsecond // 1000,
            local.strftime("%z"),
        )
        current_time_unix = math.floor(now_utc.timestamp() * 1000) / 1000

        return TimezoneDetail(
            name=name,
            offset_hours=_whole_hours(current_offset),
            offset_with_dst_hours=_whole_hours(current_offset),
            current_time=current_time,
            current_time_unix=current_time_unix,
            is_dst=is_dst,
            dst_exists=dst_exists,
            dst_savings_hours=dst_savings_hours,
        )
