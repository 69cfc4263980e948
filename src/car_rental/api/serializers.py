"""JSON shapes returned by the HTTP API."""

from car_rental.domain.bookings import Booking
from car_rental.domain.listings import CarListing, WriteResult


def serialize_listing(listing: CarListing) -> dict[str, object]:
    """Render a listing with its descriptive fields at the top level."""
    return {
        **listing.details,
        "id": str(listing.id),
        "providerEmail": listing.provider_email,
        "providerName": listing.provider_name,
        "carName": listing.car_name,
        "rentPrice": listing.rent_price,
        "status": listing.status,
        "createdAt": listing.created_at.isoformat(),
    }


def serialize_booking(
    booking: Booking, car: CarListing | None = None
) -> dict[str, object]:
    """Render a booking; carDetails is omitted when the car is gone."""
    data: dict[str, object] = {
        **booking.details,
        "id": str(booking.id),
        "carId": str(booking.car_id),
        "userEmail": booking.user_email,
        "bookingDate": booking.booking_date.isoformat(),
    }
    if car is not None:
        data["carDetails"] = serialize_listing(car)
    return data


def serialize_write_result(result: WriteResult) -> dict[str, object]:
    return {
        "acknowledged": True,
        "matchedCount": result.matched_count,
        "modifiedCount": result.modified_count,
    }
