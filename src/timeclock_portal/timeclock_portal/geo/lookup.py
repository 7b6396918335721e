from __future__ import annotations

import logging
from typing import Optional, Protocol

import requests

from ..core.constants import DEFAULT_GEO_LOOKUP_TIMEOUT, DEFAULT_GEO_LOOKUP_URL
from .model import OriginMetadata

logger = logging.getLogger(__name__)


class GeoLookup(Protocol):
    def resolve(self, ip: Optional[str] = None) -> Optional[OriginMetadata]:
        """Return origin metadata, or None when the lookup fails."""

        raise NotImplementedError


class NullGeoLookup:
    """Lookup that never calls out; keeps the client IP if one is known."""

    def resolve(self, ip: Optional[str] = None) -> Optional[OriginMetadata]:
        return OriginMetadata(ip=ip) if ip else None


class IpApiGeoLookup:
    """ipapi.co-style lookup: ``GET {base}/json/`` or ``GET {base}/{ip}/json/``.

    Never raises. A timeout, HTTP error or malformed payload is logged and the
    caller gets None, so clock-in/out is never blocked by the lookup.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_GEO_LOOKUP_URL,
        *,
        timeout: float = DEFAULT_GEO_LOOKUP_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = float(timeout)
        self._session = session or requests.Session()

    def _url(self, ip: Optional[str]) -> str:
        if ip:
            return f"{self._base_url}/{ip}/json/"
        return f"{self._base_url}/json/"

    def resolve(self, ip: Optional[str] = None) -> Optional[OriginMetadata]:
        try:
            response = self._session.get(self._url(ip), timeout=self._timeout)
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning("Geo lookup failed for ip=%s: %s", ip or "-", e)
            return None

        if not isinstance(data, dict) or data.get("error"):
            logger.warning("Geo lookup returned no usable data for ip=%s: %r", ip or "-", data)
            return None

        return OriginMetadata(
            ip=data.get("ip") or ip,
            city=data.get("city"),
            country=data.get("country_name") or data.get("country"),
            timezone=data.get("timezone"),
        )
