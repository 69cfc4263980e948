"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient

from car_rental.config import Settings
from car_rental.containers import AppContainer
from car_rental.domain.bookings import Booking
from car_rental.domain.listings import (
    STATUS_AVAILABLE,
    STATUS_BOOKED,
    CarListing,
    WriteResult,
)
from car_rental.services.auth import (
    AuthService,
    IdentityVerificationError,
    IdentityVerifier,
    SessionTokenService,
)
from car_rental.services.bookings import BookingRepository, BookingService
from car_rental.services.listings import ListingRepository, ListingService


@dataclass
class InMemoryListingRepository(ListingRepository):
    """In-memory listing repository for tests."""

    listings: dict[UUID, CarListing] = field(default_factory=dict)

    def create_listing(self, payload: dict[str, object]) -> CarListing:
        listing = CarListing(
            id=uuid4(),
            provider_email=str(payload["provider_email"]),
            provider_name=payload.get("provider_name"),
            car_name=str(payload["car_name"]),
            rent_price=float(payload["rent_price"]),
            status=str(payload["status"]),
            created_at=payload["created_at"],
            details=dict(payload.get("details") or {}),
        )
        self.listings[listing.id] = listing
        return listing

    def get_listing(self, listing_id: UUID) -> CarListing | None:
        return self.listings.get(listing_id)

    def list_listings(self) -> list[CarListing]:
        return list(self.listings.values())

    def search_listings(self, query: str) -> list[CarListing]:
        query_lower = query.lower()
        return [
            listing
            for listing in self.listings.values()
            if query_lower in listing.car_name.lower()
        ]

    def list_recent_listings(self, limit: int) -> list[CarListing]:
        return sorted(
            self.listings.values(), key=lambda listing: listing.created_at, reverse=True
        )[:limit]

    def list_provider_listings(self, provider_email: str) -> list[CarListing]:
        return [
            listing
            for listing in self.listings.values()
            if listing.provider_email == provider_email
        ]

    def list_listings_by_ids(self, listing_ids: list[UUID]) -> list[CarListing]:
        return [self.listings[i] for i in listing_ids if i in self.listings]

    def update_listing(
        self, listing_id: UUID, changes: dict[str, object]
    ) -> WriteResult:
        current = self.listings.get(listing_id)
        if current is None:
            return WriteResult(matched_count=0, modified_count=0)
        self.listings[listing_id] = replace(current, **changes)
        return WriteResult(matched_count=1, modified_count=1)

    def delete_listing(self, listing_id: UUID) -> int:
        return 1 if self.listings.pop(listing_id, None) else 0

    def mark_booked(self, listing_id: UUID) -> WriteResult:
        current = self.listings.get(listing_id)
        if current is None or current.status != STATUS_AVAILABLE:
            return WriteResult(matched_count=0, modified_count=0)
        self.listings[listing_id] = replace(current, status=STATUS_BOOKED)
        return WriteResult(matched_count=1, modified_count=1)

    def mark_available(self, listing_id: UUID) -> WriteResult:
        current = self.listings.get(listing_id)
        if current is None:
            return WriteResult(matched_count=0, modified_count=0)
        self.listings[listing_id] = replace(current, status=STATUS_AVAILABLE)
        return WriteResult(matched_count=1, modified_count=1)

    def add(
        self,
        provider_email: str = "a@x.com",
        car_name: str = "Civic",
        rent_price: float = 20.0,
        status: str = STATUS_AVAILABLE,
        created_at: datetime | None = None,
    ) -> CarListing:
        """Seed a listing directly, bypassing the service."""
        listing = CarListing(
            id=uuid4(),
            provider_email=provider_email,
            provider_name=None,
            car_name=car_name,
            rent_price=rent_price,
            status=status,
            created_at=created_at or datetime.now(tz=UTC),
        )
        self.listings[listing.id] = listing
        return listing


@dataclass
class InMemoryBookingRepository(BookingRepository):
    """In-memory booking repository for tests."""

    bookings: dict[UUID, Booking] = field(default_factory=dict)
    fail_inserts: bool = False

    def create_booking(self, payload: dict[str, object]) -> Booking:
        if self.fail_inserts:
            raise RuntimeError("Failed to create booking in Supabase")
        booking = Booking(
            id=uuid4(),
            car_id=payload["car_id"],
            user_email=str(payload["user_email"]),
            booking_date=payload["booking_date"],
            details=dict(payload.get("details") or {}),
        )
        self.bookings[booking.id] = booking
        return booking

    def find_user_booking(self, booking_id: UUID, user_email: str) -> Booking | None:
        booking = self.bookings.get(booking_id)
        if booking is None or booking.user_email != user_email:
            return None
        return booking

    def delete_user_booking(self, booking_id: UUID, user_email: str) -> int:
        if self.find_user_booking(booking_id, user_email) is None:
            return 0
        del self.bookings[booking_id]
        return 1

    def list_user_bookings(self, user_email: str) -> list[Booking]:
        return [b for b in self.bookings.values() if b.user_email == user_email]


@dataclass
class FakeIdentityVerifier(IdentityVerifier):
    """Identity verifier that accepts a fixed set of ID tokens."""

    accounts: dict[str, str] = field(
        default_factory=lambda: {"valid-id-token": "b@x.com"}
    )

    async def verify(self, id_token: str) -> str:
        email = self.accounts.get(id_token)
        if email is None:
            raise IdentityVerificationError("INVALID_ID_TOKEN")
        return email


def sign_in(client: TestClient, container: AppContainer, email: str) -> None:
    """Attach a valid session cookie for the email to the client."""
    client.cookies.set(
        container.settings.session_cookie_name,
        container.session_tokens.issue(email),
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        access_token_secret="test-secret",
        firebase_api_key="firebase-key",
        environment="local",
    )


@pytest.fixture
def listing_repository() -> InMemoryListingRepository:
    return InMemoryListingRepository()


@pytest.fixture
def booking_repository() -> InMemoryBookingRepository:
    return InMemoryBookingRepository()


@pytest.fixture
def container(
    settings: Settings,
    listing_repository: InMemoryListingRepository,
    booking_repository: InMemoryBookingRepository,
) -> AppContainer:
    session_tokens = SessionTokenService(
        secret=settings.access_token_secret,
        algorithm=settings.jwt_algorithm,
        ttl=timedelta(days=settings.session_ttl_days),
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        auth_service=AuthService(
            identity_verifier=FakeIdentityVerifier(),
            session_tokens=session_tokens,
        ),
        session_tokens=session_tokens,
        listing_service=ListingService(listing_repository),
        booking_service=BookingService(
            booking_repository=booking_repository,
            listing_repository=listing_repository,
        ),
        close_resources=close_resources,
    )
