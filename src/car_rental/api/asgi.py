"""ASGI entrypoint for the car rental API."""

from car_rental.api.app import create_app
from car_rental.containers import build_container

app = create_app(build_container())
