"""Process entrypoint that serves the API with uvicorn."""

import os

import uvicorn


def main() -> None:
    """Run the ASGI app on the configured port."""
    port = int(os.getenv("PORT", "3011"))
    uvicorn.run("car_rental.api.asgi:app", host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
