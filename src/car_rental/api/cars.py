"""Car listing endpoints."""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query

from car_rental.api.auth import get_container, require_session
from car_rental.api.serializers import serialize_listing, serialize_write_result
from car_rental.containers import AppContainer

router = APIRouter(tags=["cars"])


@router.get("/cars")
async def list_cars(
    search: str | None = None,
    limit: int | None = Query(default=None, ge=1),
    container: AppContainer = Depends(get_container),
) -> list[dict[str, object]]:
    """Search cars by name, or return the most recent ones."""
    listings = container.listing_service.search(search, limit)
    return [serialize_listing(listing) for listing in listings]


@router.get("/cars/{car_id}")
async def get_car(
    car_id: str, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Return a single car."""
    return serialize_listing(container.listing_service.get_listing(car_id))


@router.post("/cars")
async def create_car(
    payload: dict[str, Any] = Body(...),
    email: str = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """List a new car for the caller."""
    listing = container.listing_service.create_listing(email, payload)
    return {"acknowledged": True, "insertedId": str(listing.id)}


@router.get("/my-listings")
async def my_listings(
    email: str = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> list[dict[str, object]]:
    """Return the caller's listings."""
    listings = container.listing_service.list_provider_listings(email)
    return [serialize_listing(listing) for listing in listings]


@router.patch("/cars/{car_id}")
async def update_car(
    car_id: str,
    payload: dict[str, Any] = Body(...),
    email: str = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Update a car owned by the caller."""
    result = container.listing_service.update_listing(email, car_id, payload)
    return serialize_write_result(result)


@router.delete("/cars/{car_id}")
async def delete_car(
    car_id: str,
    email: str = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Delete a car owned by the caller."""
    deleted = container.listing_service.delete_listing(email, car_id)
    return {"acknowledged": True, "deletedCount": deleted}
