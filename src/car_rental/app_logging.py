"""Logging configuration helpers."""

import logging

CONTEXT_FIELDS = (
    "listing_id",
    "booking_id",
    "car_id",
    "provider_email",
    "caller_email",
    "method",
    "path",
)


class ContextFormatter(logging.Formatter):
    """Formatter that appends the record ids passed through ``extra``."""

    def formatMessage(self, record: logging.LogRecord) -> str:
        message = super().formatMessage(record)
        context = " ".join(
            f"{name}={getattr(record, name)}"
            for name in CONTEXT_FIELDS
            if hasattr(record, name)
        )
        return f"{message} [{context}]" if context else message


def configure_logging(level: str = "INFO") -> None:
    """Attach one stream handler to the car_rental logger at the given level."""
    logger = logging.getLogger("car_rental")
    logger.setLevel(level.upper())
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(ContextFormatter("%(levelname)s: %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
