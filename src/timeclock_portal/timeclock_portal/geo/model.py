from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class OriginMetadata:
    """Network origin captured at clock-in or login, for audit purposes only."""

    ip: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    timezone: Optional[str] = None

    def location_data(self) -> Optional[dict[str, Any]]:
        if not (self.city or self.country or self.timezone):
            return None
        return {"city": self.city, "country": self.country, "timezone": self.timezone}

    @classmethod
    def from_location_data(cls, ip: Optional[str], data: Optional[dict]) -> Optional["OriginMetadata"]:
        if not ip and not data:
            return None
        data = data or {}
        return cls(
            ip=ip,
            city=data.get("city"),
            country=data.get("country") or data.get("country_name"),
            timezone=data.get("timezone"),
        )
