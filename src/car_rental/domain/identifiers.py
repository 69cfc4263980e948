"""Record identifier parsing."""

from uuid import UUID

from car_rental.domain.errors import ValidationError


def parse_record_id(raw: object, label: str) -> UUID:
    """Parse a record id, raising ValidationError when it is malformed.

    A malformed id is a client error, distinct from an id that parses but
    matches no record.
    """
    if isinstance(raw, UUID):
        return raw
    if not isinstance(raw, str):
        raise ValidationError(f"Invalid {label} ID format.")
    try:
        return UUID(raw)
    except ValueError as exc:
        raise ValidationError(f"Invalid {label} ID format.") from exc
