"""Domain error taxonomy shared by services and the HTTP layer."""


class CarRentalError(Exception):
    """Base class for errors that map to a client-facing response."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class Unauthenticated(CarRentalError):
    """No session, or the session token failed verification."""

    status_code = 401


class Unauthorized(CarRentalError):
    """The identity provider rejected the sign-in assertion."""

    status_code = 401


class Forbidden(CarRentalError):
    """Authenticated, but not permitted to act on the resource."""

    status_code = 403


class ValidationError(CarRentalError):
    """Missing or malformed input, including malformed identifiers."""

    status_code = 400


class NotFound(CarRentalError):
    """No matching record."""

    status_code = 404


class BookingRejected(CarRentalError):
    """A booking rule was violated (own listing, car unavailable)."""

    status_code = 400


class InternalError(CarRentalError):
    """A persistence step failed in a way the caller cannot fix."""

    status_code = 500
