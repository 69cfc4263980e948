"""FastAPI application factory."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from car_rental.api.auth import router as auth_router
from car_rental.api.bookings import router as bookings_router
from car_rental.api.cars import router as cars_router
from car_rental.api.errors import register_error_handlers
from car_rental.app_logging import configure_logging
from car_rental.config import parse_allowed_origins
from car_rental.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="Car Rental API", lifespan=lifespan)
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_allowed_origins(container.settings.cors_allowed_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    app.include_router(auth_router)
    app.include_router(cars_router)
    app.include_router(bookings_router)

    @app.get("/")
    async def root() -> dict[str, str]:
        """Report that the server is running."""
        return {"message": "Car Rental Backend Server is Running!"}

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
