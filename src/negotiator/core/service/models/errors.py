"""Domain errors raised by the negotiation chat handler.

Anything else raised while loading a store, retrieving, or calling the
model is an upstream failure and is deliberately not wrapped.
"""

__all__ = ["NegotiationError", "InvalidRequest", "CarrierNotFound"]


class NegotiationError(Exception):
    """Base class for errors the API maps to a client-facing status."""

    detail = "Negotiation error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.detail)


class InvalidRequest(NegotiationError):
    """A required request field is missing or empty."""

    detail = "Invalid request"


class CarrierNotFound(NegotiationError):
    """No persisted store exists for the requested carrier."""

    detail = "Carrier not found"

    def __init__(self, carrier: str) -> None:
        super().__init__(f"{self.detail}: {carrier}")
        self.carrier = carrier
