"""Supabase implementation for car listings."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from car_rental.domain.listings import (
    STATUS_AVAILABLE,
    STATUS_BOOKED,
    CarListing,
    WriteResult,
)
from car_rental.services.listings import ListingRepository


@dataclass
class SupabaseListingRepository(ListingRepository):
    """Supabase-backed repository for the cars table."""

    client: Client

    def create_listing(self, payload: dict[str, object]) -> CarListing:
        """Create a listing row and return it."""
        response = self.client.table("cars").insert(_to_row(payload)).execute()
        if not response.data:
            raise RuntimeError("Failed to create car listing")
        return _parse_listing(response.data[0])

    def get_listing(self, listing_id: UUID) -> CarListing | None:
        """Return a listing by id, if present."""
        response = (
            self.client.table("cars")
            .select("*")
            .eq("id", str(listing_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_listing(response.data[0])

    def list_listings(self) -> list[CarListing]:
        """Return every listing."""
        response = self.client.table("cars").select("*").execute()
        return [_parse_listing(row) for row in response.data or []]

    def search_listings(self, query: str) -> list[CarListing]:
        """Return listings whose name contains the query, ignoring case."""
        response = (
            self.client.table("cars")
            .select("*")
            .ilike("car_name", f"%{_escape_like(query)}%")
            .execute()
        )
        return [_parse_listing(row) for row in response.data or []]

    def list_recent_listings(self, limit: int) -> list[CarListing]:
        """Return the most recently created listings."""
        response = (
            self.client.table("cars")
            .select("*")
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_listing(row) for row in response.data or []]

    def list_provider_listings(self, provider_email: str) -> list[CarListing]:
        """Return listings owned by a provider."""
        response = (
            self.client.table("cars")
            .select("*")
            .eq("provider_email", provider_email)
            .execute()
        )
        return [_parse_listing(row) for row in response.data or []]

    def list_listings_by_ids(self, listing_ids: list[UUID]) -> list[CarListing]:
        """Return the listings that exist among the given ids."""
        response = (
            self.client.table("cars")
            .select("*")
            .in_("id", [str(listing_id) for listing_id in listing_ids])
            .execute()
        )
        return [_parse_listing(row) for row in response.data or []]

    def update_listing(
        self, listing_id: UUID, changes: dict[str, object]
    ) -> WriteResult:
        """Apply changes to a listing."""
        response = (
            self.client.table("cars")
            .update(_to_row(changes))
            .eq("id", str(listing_id))
            .execute()
        )
        return _write_result(response.data)

    def delete_listing(self, listing_id: UUID) -> int:
        """Delete a listing and return the number of rows removed."""
        response = (
            self.client.table("cars").delete().eq("id", str(listing_id)).execute()
        )
        return len(response.data or [])

    def mark_booked(self, listing_id: UUID) -> WriteResult:
        """Flip status to Booked in a single conditional update."""
        response = (
            self.client.table("cars")
            .update({"status": STATUS_BOOKED})
            .eq("id", str(listing_id))
            .eq("status", STATUS_AVAILABLE)
            .execute()
        )
        return _write_result(response.data)

    def mark_available(self, listing_id: UUID) -> WriteResult:
        """Set status to Available unconditionally."""
        response = (
            self.client.table("cars")
            .update({"status": STATUS_AVAILABLE})
            .eq("id", str(listing_id))
            .execute()
        )
        return _write_result(response.data)


def _to_row(payload: dict[str, object]) -> dict[str, object]:
    """Convert service payload values into JSON-safe column values."""
    row: dict[str, object] = {}
    for key, value in payload.items():
        if isinstance(value, datetime):
            row[key] = value.isoformat()
        elif isinstance(value, UUID):
            row[key] = str(value)
        else:
            row[key] = value
    return row


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _write_result(rows: list[dict[str, object]] | None) -> WriteResult:
    count = len(rows or [])
    return WriteResult(matched_count=count, modified_count=count)


def _parse_listing(row: dict[str, object]) -> CarListing:
    """Parse a cars row into a domain model."""
    details = row.get("details")
    return CarListing(
        id=UUID(str(row["id"])),
        provider_email=str(row.get("provider_email", "")),
        provider_name=row.get("provider_name"),
        car_name=str(row.get("car_name", "")),
        rent_price=float(row.get("rent_price") or 0.0),
        status=str(row.get("status", STATUS_AVAILABLE)),
        created_at=datetime.fromisoformat(str(row["created_at"])),
        details=details if isinstance(details, dict) else {},
    )
