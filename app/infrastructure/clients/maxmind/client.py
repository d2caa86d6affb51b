"""MaxMind GeoIP2 client for geolocation lookups.

Provides read access to a GeoLite2-City database with OperationResult
return types. The database is opened once and shared by all requests;
the underlying reader is safe for concurrent readers.
"""

from typing import TYPE_CHECKING, Optional

import geoip2.database
import structlog
from geoip2.errors import AddressNotFoundError, GeoIP2Error

from infrastructure.operations import OperationResult
from packages.geolocate.models import GeoRecord

if TYPE_CHECKING:
    from infrastructure.configuration import Settings

logger = structlog.get_logger()


class MaxMindClient:
    """GeoLookupPort backed by a MaxMind GeoIP2 City database.

    Opening the database happens in the constructor and any failure
    propagates: a missing or corrupt file must stop startup rather than
    surface later as per-request errors.

    Args:
        settings: Settings instance with maxmind.GEOIP_DB_PATH
        reader: Optional pre-opened reader (tests)
    """

    def __init__(
        self,
        settings: "Settings",
        reader: Optional[geoip2.database.Reader] = None,
    ) -> None:
        self._db_path = settings.maxmind.GEOIP_DB_PATH
        self._logger = logger.bind(component="maxmind_client")
        if reader is None:
            try:
                reader = geoip2.database.Reader(self._db_path)
            except Exception as e:
                self._logger.error(
                    "geoip_database_open_failed", db_path=self._db_path, error=str(e)
                )
                raise
        self._reader = reader
        self._logger.info("geoip_database_opened", db_path=self._db_path)

    def lookup(self, ip: str) -> OperationResult:
        """Look up an address in the City database.

        Args:
            ip: IPv4 or IPv6 address string

        Returns:
            OperationResult with a GeoRecord on success, NOT_FOUND when the
            address has no record, or an error result.
        """
        try:
            response = self._reader.city(ip)
        except AddressNotFoundError:
            return OperationResult.not_found(
                message=f"IP address not found in database: {ip}",
                error_code="NOT_FOUND",
            )
        except ValueError:
            return OperationResult.permanent_error(
                message=f"Invalid IP address: {ip}",
                error_code="INVALID_IP",
            )
        except GeoIP2Error as e:
            self._logger.error("geoip2_error", error=str(e))
            return OperationResult.transient_error(
                message=f"Lookup error: {e}",
                error_code="GEOIP2_ERROR",
            )

        subdivision = next(iter(response.subdivisions), None)
        record = GeoRecord(
            latitude=response.location.latitude,
            longitude=response.location.longitude,
            city=response.city.name,
            country_name=response.country.name,
            country_code=response.country.iso_code,
            state_prov=subdivision.name if subdivision else None,
            state_code=subdivision.iso_code if subdivision else None,
            postal_code=response.postal.code,
            geoname_id=response.city.geoname_id,
        )
        return OperationResult.success(data=record, message="IP geolocated")

    def close(self) -> None:
        """Release the memory-mapped database."""
        self._reader.close()
        self._logger.info("geoip_database_closed")
