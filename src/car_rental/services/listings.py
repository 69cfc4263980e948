"""Services for managing car listings."""

import logging
import math
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from car_rental.domain.errors import Forbidden, NotFound, ValidationError
from car_rental.domain.identifiers import parse_record_id
from car_rental.domain.listings import (
    DETAIL_FIELDS,
    STATUS_AVAILABLE,
    CarListing,
    WriteResult,
)

logger = logging.getLogger(__name__)

REQUIRED_LISTING_FIELDS = ("providerEmail", "carName", "rentPrice")


class ListingRepository(Protocol):
    """Persistence interface for car listings."""

    def create_listing(self, payload: dict[str, object]) -> CarListing:
        """Create a listing row and return it."""

    def get_listing(self, listing_id: UUID) -> CarListing | None:
        """Return a listing by id, if present."""

    def list_listings(self) -> list[CarListing]:
        """Return every listing."""

    def search_listings(self, query: str) -> list[CarListing]:
        """Return listings whose name contains the query, ignoring case."""

    def list_recent_listings(self, limit: int) -> list[CarListing]:
        """Return the most recently created listings."""

    def list_provider_listings(self, provider_email: str) -> list[CarListing]:
        """Return listings owned by a provider."""

    def list_listings_by_ids(self, listing_ids: list[UUID]) -> list[CarListing]:
        """Return the listings that exist among the given ids."""

    def update_listing(
        self, listing_id: UUID, changes: dict[str, object]
    ) -> WriteResult:
        """Apply changes to a listing."""

    def delete_listing(self, listing_id: UUID) -> int:
        """Delete a listing and return the number of rows removed."""

    def mark_booked(self, listing_id: UUID) -> WriteResult:
        """Flip status from Available to Booked, only if currently Available."""

    def mark_available(self, listing_id: UUID) -> WriteResult:
        """Set status to Available unconditionally."""


@dataclass
class ListingService:
    """Application service for listing operations."""

    repository: ListingRepository

    def search(
        self, query: str | None = None, limit: int | None = None
    ) -> list[CarListing]:
        """List cars, filtered by name or capped to the most recent ones.

        A search term takes precedence; the limit only applies without one.
        """
        if query:
            return self.repository.search_listings(query)
        if limit is not None:
            return self.repository.list_recent_listings(limit)
        return self.repository.list_listings()

    def get_listing(self, raw_id: object) -> CarListing:
        """Return a listing or raise NotFound."""
        listing = self.repository.get_listing(parse_record_id(raw_id, "Car"))
        if listing is None:
            raise NotFound("Car not found.")
        return listing

    def list_provider_listings(self, provider_email: str) -> list[CarListing]:
        """Return the caller's own listings."""
        return self.repository.list_provider_listings(provider_email)

    def create_listing(
        self, caller_email: str, payload: dict[str, object]
    ) -> CarListing:
        """Create a listing for the provider named in the payload."""
        missing = [
            name
            for name in REQUIRED_LISTING_FIELDS
            if _is_missing(payload.get(name))
        ]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}.")
        provider_email = str(payload["providerEmail"])
        provider_name = payload.get("providerName")
        listing = self.repository.create_listing(
            {
                "provider_email": provider_email,
                "provider_name": str(provider_name) if provider_name else None,
                "car_name": str(payload["carName"]),
                "rent_price": coerce_rent_price(payload["rentPrice"]),
                "status": STATUS_AVAILABLE,
                "created_at": datetime.now(tz=UTC),
                "details": _project_details(payload),
            }
        )
        logger.info(
            "Listing created",
            extra={
                "listing_id": str(listing.id),
                "provider_email": provider_email,
                "caller_email": caller_email,
            },
        )
        return listing

    def update_listing(
        self, caller_email: str, raw_id: object, payload: dict[str, object]
    ) -> WriteResult:
        """Update the caller's listing through the field allow-list.

        A missing or empty rentPrice resets the price to zero.
        """
        listing = self.get_listing(raw_id)
        _require_owner(listing, caller_email)

        changes: dict[str, object] = {}
        if "carName" in payload:
            if _is_missing(payload["carName"]):
                raise ValidationError("carName cannot be empty.")
            changes["car_name"] = str(payload["carName"])
        raw_price = payload.get("rentPrice")
        changes["rent_price"] = (
            0.0 if _is_missing(raw_price) else coerce_rent_price(raw_price)
        )
        details = _project_details(payload)
        if details:
            changes["details"] = {**listing.details, **details}
        return self.repository.update_listing(listing.id, changes)

    def delete_listing(self, caller_email: str, raw_id: object) -> int:
        """Delete the caller's listing, regardless of bookings referencing it."""
        listing = self.get_listing(raw_id)
        _require_owner(listing, caller_email)
        deleted = self.repository.delete_listing(listing.id)
        logger.info("Listing deleted", extra={"listing_id": str(listing.id)})
        return deleted


def coerce_rent_price(value: object) -> float:
    """Normalize a caller-supplied price to a non-negative float."""
    if isinstance(value, bool):
        raise ValidationError("rentPrice must be a number.")
    if isinstance(value, int | float):
        try:
            price = float(value)
        except OverflowError as exc:
            raise ValidationError("rentPrice must be a number.") from exc
    elif isinstance(value, str):
        try:
            price = float(value.strip())
        except ValueError as exc:
            raise ValidationError("rentPrice must be a number.") from exc
    else:
        raise ValidationError("rentPrice must be a number.")
    if not math.isfinite(price):
        raise ValidationError("rentPrice must be a number.")
    if price < 0:
        raise ValidationError("rentPrice must not be negative.")
    return price


def _is_missing(value: object) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _project_details(payload: dict[str, object]) -> dict[str, object]:
    return {name: payload[name] for name in DETAIL_FIELDS if name in payload}


def _require_owner(listing: CarListing, caller_email: str) -> None:
    if listing.provider_email != caller_email:
        raise Forbidden("Forbidden: You do not own this listing.")
