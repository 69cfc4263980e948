"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta

from supabase import create_client

from car_rental.adapters.firebase_identity_client import HttpxFirebaseIdentityClient
from car_rental.adapters.supabase_booking_repository import SupabaseBookingRepository
from car_rental.adapters.supabase_listing_repository import SupabaseListingRepository
from car_rental.config import Settings
from car_rental.services.auth import AuthService, SessionTokenService
from car_rental.services.bookings import BookingService
from car_rental.services.listings import ListingService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_service: AuthService
    session_tokens: SessionTokenService
    listing_service: ListingService
    booking_service: BookingService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    listing_repository = SupabaseListingRepository(supabase_client)
    booking_repository = SupabaseBookingRepository(supabase_client)
    identity_client = HttpxFirebaseIdentityClient.create(
        api_key=resolved_settings.firebase_api_key,
        base_url=resolved_settings.firebase_base_url,
    )
    session_tokens = SessionTokenService(
        secret=resolved_settings.access_token_secret,
        algorithm=resolved_settings.jwt_algorithm,
        ttl=timedelta(days=resolved_settings.session_ttl_days),
    )
    auth_service = AuthService(
        identity_verifier=identity_client,
        session_tokens=session_tokens,
    )
    listing_service = ListingService(listing_repository)
    booking_service = BookingService(
        booking_repository=booking_repository,
        listing_repository=listing_repository,
    )

    async def close_resources() -> None:
        await identity_client.close()

    return AppContainer(
        settings=resolved_settings,
        auth_service=auth_service,
        session_tokens=session_tokens,
        listing_service=listing_service,
        booking_service=booking_service,
        close_resources=close_resources,
    )
