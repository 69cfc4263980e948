"""Domain models for car listings."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

STATUS_AVAILABLE = "Available"
STATUS_BOOKED = "Booked"

DETAIL_FIELDS = (
    "carModel",
    "description",
    "features",
    "imageUrl",
    "location",
    "registrationNumber",
    "availability",
)


@dataclass(frozen=True)
class CarListing:
    """Represents a car offered for rent by a provider."""

    id: UUID
    provider_email: str
    provider_name: str | None
    car_name: str
    rent_price: float
    status: str
    created_at: datetime
    details: dict[str, object] = field(default_factory=dict)

    @property
    def is_available(self) -> bool:
        return self.status == STATUS_AVAILABLE


@dataclass(frozen=True)
class WriteResult:
    """Row counts reported by a store write."""

    matched_count: int
    modified_count: int
