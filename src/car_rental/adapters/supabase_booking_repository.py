"""Supabase-backed booking repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from car_rental.domain.bookings import Booking
from car_rental.services.bookings import BookingRepository


@dataclass
class SupabaseBookingRepository(BookingRepository):
    """Supabase implementation for booking persistence."""

    client: Client

    def create_booking(self, payload: dict[str, object]) -> Booking:
        """Create a booking row and return it."""
        booking_date = payload["booking_date"]
        response = (
            self.client.table("bookings")
            .insert(
                {
                    "car_id": str(payload["car_id"]),
                    "user_email": payload["user_email"],
                    "booking_date": booking_date.isoformat()
                    if isinstance(booking_date, datetime)
                    else booking_date,
                    "details": payload.get("details") or {},
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create booking in Supabase")
        return _parse_booking(response.data[0])

    def find_user_booking(self, booking_id: UUID, user_email: str) -> Booking | None:
        """Return the booking if it exists and belongs to the user."""
        response = (
            self.client.table("bookings")
            .select("*")
            .eq("id", str(booking_id))
            .eq("user_email", user_email)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_booking(response.data[0])

    def delete_user_booking(self, booking_id: UUID, user_email: str) -> int:
        """Delete the user's booking and return the number of rows removed."""
        response = (
            self.client.table("bookings")
            .delete()
            .eq("id", str(booking_id))
            .eq("user_email", user_email)
            .execute()
        )
        return len(response.data or [])

    def list_user_bookings(self, user_email: str) -> list[Booking]:
        """Return all bookings made by the user, newest first."""
        response = (
            self.client.table("bookings")
            .select("*")
            .eq("user_email", user_email)
            .order("booking_date", desc=True)
            .execute()
        )
        return [_parse_booking(row) for row in response.data or []]


def _parse_booking(row: dict[str, object]) -> Booking:
    details = row.get("details")
    return Booking(
        id=UUID(str(row["id"])),
        car_id=UUID(str(row["car_id"])),
        user_email=str(row["user_email"]),
        booking_date=datetime.fromisoformat(str(row["booking_date"])),
        details=details if isinstance(details, dict) else {},
    )
