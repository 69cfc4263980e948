"""Booking endpoints."""

from typing import Any

from fastapi import APIRouter, Body, Depends

from car_rental.api.auth import get_container, require_session
from car_rental.api.serializers import serialize_booking, serialize_write_result
from car_rental.containers import AppContainer

router = APIRouter(tags=["bookings"])


@router.post("/book")
async def book_car(
    payload: dict[str, Any] = Body(...),
    email: str = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Book a car for the caller."""
    confirmation = container.booking_service.create_booking(email, payload)
    return {
        "success": True,
        "bookingId": str(confirmation.booking.id),
        "carUpdate": serialize_write_result(confirmation.car_update),
    }


@router.get("/my-bookings")
async def my_bookings(
    email: str = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> list[dict[str, object]]:
    """Return the caller's bookings with car details."""
    entries = container.booking_service.list_user_bookings(email)
    return [serialize_booking(entry.booking, entry.car) for entry in entries]


@router.delete("/booking/{booking_id}")
async def cancel_booking(
    booking_id: str,
    email: str = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Cancel one of the caller's bookings."""
    result = container.booking_service.cancel_booking(email, booking_id)
    return {
        "success": True,
        "message": "Booking cancelled and car status updated to Available.",
        "carUpdate": serialize_write_result(result.car_update),
    }
