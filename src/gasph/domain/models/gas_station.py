"""Gas station domain model."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from gasph.domain.models.coordinate import Coordinate


class GasStation(BaseModel):
    """A gas station row as stored by the backend."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    name: str
    brand: str | None = None
    address: str | None = None
    city: str | None = None
    province: str | None = None
    latitude: float
    longitude: float
    amenities: dict[str, Any] | None = Field(default_factory=dict)
    operating_hours: dict[str, Any] | None = Field(default_factory=dict)
    status: Literal["active", "inactive"] = "active"
    created_at: datetime | None = None
    updated_at: datetime | None = None
    distance: float | None = None

    @property
    def coordinate(self) -> Coordinate:
        """Station position as a Coordinate."""
        return Coordinate(latitude=self.latitude, longitude=self.longitude)

    def with_distance(self, distance_km: float) -> "GasStation":
        """Return a copy carrying the distance from the user in kilometers."""
        return self.model_copy(update={"distance": distance_km})
