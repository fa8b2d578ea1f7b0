class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class LateReasonRequiredError(ValidationError):
    """Raised when a first clock-in of the day falls after the grace deadline without a reason."""

    def __init__(self, deadline):
        super().__init__(f"Late clock-in after {deadline:%H:%M:%S} requires a reason")
        self.deadline = deadline


class AuthenticationError(DomainError):
    """Raised when no usable session exists."""


class GeolocationError(DomainError):
    """Raised when the position could not be captured (denied or timed out)."""


class TransportError(DomainError):
    """Raised when the remote API is unreachable or answers with an error."""


class SessionExpiredError(TransportError):
    """Raised when the remote API rejects the session token (HTTP 401)."""
