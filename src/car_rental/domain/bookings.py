"""Domain models for bookings."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from car_rental.domain.listings import CarListing, WriteResult

RESERVED_BOOKING_FIELDS = frozenset(
    {"id", "_id", "carId", "userEmail", "bookingDate", "carDetails"}
)


@dataclass(frozen=True)
class Booking:
    """A renter's reservation of a listing."""

    id: UUID
    car_id: UUID
    user_email: str
    booking_date: datetime
    details: dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class BookingWithCar:
    """A booking joined with its listing, if the listing still exists."""

    booking: Booking
    car: CarListing | None


@dataclass(frozen=True)
class BookingConfirmation:
    """Outcome of a successful booking."""

    booking: Booking
    car_update: WriteResult


@dataclass(frozen=True)
class CancellationResult:
    """Outcome of a successful cancellation."""

    booking: Booking
    car_update: WriteResult
