"""Base classes and shared types for RapidAid contracts.

Unit conventions (all contracts and API responses):
- **Distances**: kilometers, suffix ``_km``
- **Speeds**: kilometers per hour, suffix ``_kmh``
- **Durations**: whole minutes, suffix ``_minutes``
- **Datetimes**: always UTC, ISO 8601 in serialized form
- **Coordinates**: WGS84 decimal degrees

Firestore documents use camelCase field names; Python code uses snake_case.
The alias generator bridges the two. Where the web client writes a
different layout, the contract accepts both on read (see ``AmbulanceRequest``).
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class FirestoreModel(BaseModel):
    """Base model with Firestore-friendly serialization.

    - Enums serialize as string values (Firestore stores strings).
    - Fields are stored under their camelCase alias.
    - ``to_firestore()`` produces a JSON-safe dict (datetimes as ISO 8601).
    - ``from_firestore()`` hydrates from a Firestore document dict.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )

    def to_firestore(self) -> dict[str, Any]:
        """Dump to Firestore-compatible dict."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @classmethod
    def from_firestore(cls, data: dict[str, Any]) -> "FirestoreModel":
        """Create model instance from Firestore document dict."""
        return cls.model_validate(data)


class Coordinate(BaseModel):
    """WGS84 geographic coordinate.

    Accepts a plain ``{latitude, longitude}`` mapping or any object exposing
    those two attributes, such as ``google.cloud.firestore.GeoPoint``.
    """

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _from_geopoint(cls, value: Any) -> Any:
        if isinstance(value, (dict, Coordinate)):
            return value
        if hasattr(value, "latitude") and hasattr(value, "longitude"):
            return {"latitude": value.latitude, "longitude": value.longitude}
        return value
