"""Booking service: links bookings to listing availability."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from car_rental.domain.bookings import (
    RESERVED_BOOKING_FIELDS,
    Booking,
    BookingConfirmation,
    BookingWithCar,
    CancellationResult,
)
from car_rental.domain.errors import (
    BookingRejected,
    Forbidden,
    InternalError,
    NotFound,
)
from car_rental.domain.identifiers import parse_record_id
from car_rental.services.listings import ListingRepository

logger = logging.getLogger(__name__)

CAR_UNAVAILABLE_MESSAGE = "Booking failed: Car is already booked or unavailable."


class BookingRepository(Protocol):
    """Persistence interface for bookings."""

    def create_booking(self, payload: dict[str, object]) -> Booking:
        """Create a booking row and return it."""

    def find_user_booking(self, booking_id: UUID, user_email: str) -> Booking | None:
        """Return the booking if it exists and belongs to the user."""

    def delete_user_booking(self, booking_id: UUID, user_email: str) -> int:
        """Delete the user's booking and return the number of rows removed."""

    def list_user_bookings(self, user_email: str) -> list[Booking]:
        """Return all bookings made by the user."""


@dataclass
class BookingService:
    """Creates and cancels bookings, keeping listing status in step."""

    booking_repository: BookingRepository
    listing_repository: ListingRepository

    def create_booking(
        self, caller_email: str, payload: dict[str, object]
    ) -> BookingConfirmation:
        """Book a listing for the caller.

        The conditional Available -> Booked update decides which of several
        concurrent callers gets the car; the booking row is only written
        after it succeeds. If that write fails the car is released again.
        """
        if payload.get("userEmail") != caller_email:
            raise Forbidden("Forbidden: User email mismatch.")
        car_id = parse_record_id(payload.get("carId"), "Car")

        car = self.listing_repository.get_listing(car_id)
        if car is None:
            raise NotFound("Booking failed: Car not found.")
        if car.provider_email == caller_email:
            raise BookingRejected("Booking failed: You cannot book your own listing.")
        if not car.is_available:
            raise BookingRejected(CAR_UNAVAILABLE_MESSAGE)

        car_update = self.listing_repository.mark_booked(car_id)
        if car_update.modified_count == 0:
            logger.warning(
                "Car was taken before status update", extra={"car_id": str(car_id)}
            )
            raise BookingRejected(CAR_UNAVAILABLE_MESSAGE)

        details = {
            key: value
            for key, value in payload.items()
            if key not in RESERVED_BOOKING_FIELDS
        }
        try:
            booking = self.booking_repository.create_booking(
                {
                    "car_id": car_id,
                    "user_email": caller_email,
                    "booking_date": datetime.now(tz=UTC),
                    "details": details,
                }
            )
        except Exception as exc:
            logger.exception(
                "Failed to store booking, releasing car",
                extra={"car_id": str(car_id)},
            )
            self._release_car(car_id)
            raise InternalError("Booking failed: Could not create booking.") from exc

        logger.info(
            "Booking created",
            extra={"booking_id": str(booking.id), "car_id": str(car_id)},
        )
        return BookingConfirmation(booking=booking, car_update=car_update)

    def cancel_booking(self, caller_email: str, raw_id: object) -> CancellationResult:
        """Cancel the caller's booking and make the car available again.

        Bookings are private, so another user's booking is reported as not
        found. The status reset is a no-op when the listing was deleted.
        """
        booking_id = parse_record_id(raw_id, "Booking")
        booking = self.booking_repository.find_user_booking(booking_id, caller_email)
        if booking is None:
            raise NotFound(
                "Booking not found or you don't have permission to cancel it."
            )

        deleted = self.booking_repository.delete_user_booking(booking_id, caller_email)
        if deleted == 0:
            raise InternalError("Cancellation failed on database.")

        car_update = self.listing_repository.mark_available(booking.car_id)
        logger.info(
            "Booking cancelled",
            extra={"booking_id": str(booking_id), "car_id": str(booking.car_id)},
        )
        return CancellationResult(booking=booking, car_update=car_update)

    def list_user_bookings(self, caller_email: str) -> list[BookingWithCar]:
        """Return the caller's bookings joined with their listings."""
        bookings = self.booking_repository.list_user_bookings(caller_email)
        car_ids = list(dict.fromkeys(booking.car_id for booking in bookings))
        cars = {}
        if car_ids:
            cars = {
                car.id: car
                for car in self.listing_repository.list_listings_by_ids(car_ids)
            }
        return [
            BookingWithCar(booking=booking, car=cars.get(booking.car_id))
            for booking in bookings
        ]

    def _release_car(self, car_id: UUID) -> None:
        try:
            self.listing_repository.mark_available(car_id)
        except Exception:
            logger.exception(
                "Failed to release car after booking error",
                extra={"car_id": str(car_id)},
            )
