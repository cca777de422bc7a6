"""Exception hierarchy for the SMS MFA provider and its transports.

All errors inherit from MfaSmsError so that host applications can catch
the whole package with a single ``except`` clause.
"""

from __future__ import annotations

# ═══════════════════════════════════════════════════════════════
# BASE ERROR
# ═══════════════════════════════════════════════════════════════


class MfaSmsError(Exception):
    """Root exception for the cqrs-ddd-mfa-sms package."""


# ═══════════════════════════════════════════════════════════════
# CONFIGURATION ERRORS
# ═══════════════════════════════════════════════════════════════


class ConfigurationError(MfaSmsError):
    """Raised when the transport configuration is missing or unusable.

    Examples:
        - The ``dsn`` setting is empty
        - The DSN cannot be parsed
    """


class InvalidDsnError(ConfigurationError):
    """Raised when a DSN string cannot be parsed.

    The DSN itself is not kept on the exception since it carries credentials.
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid DSN: {reason}")


class UnsupportedSchemeError(ConfigurationError):
    """Raised when no transport is registered for a DSN scheme."""

    def __init__(self, scheme: str, supported: list[str] | None = None) -> None:
        self.scheme = scheme
        self.supported = supported or []
        message = f'The "{scheme}" scheme is not supported'
        if self.supported:
            message += f"; supported schemes are: {', '.join(self.supported)}"
        super().__init__(message)


# ═══════════════════════════════════════════════════════════════
# VALIDATION ERRORS
# ═══════════════════════════════════════════════════════════════


class MobileNumberValidationError(MfaSmsError):
    """Raised when a mobile number fails validation.

    Attributes:
        message_key: Translation key describing the failure, used to
            build the user-facing flash message.
        mobile_number: The normalized input that was rejected.
    """

    def __init__(self, message_key: str, mobile_number: str = "") -> None:
        self.message_key = message_key
        self.mobile_number = mobile_number
        super().__init__(f"Invalid mobile number ({message_key})")


# ═══════════════════════════════════════════════════════════════
# TRANSPORT ERRORS
# ═══════════════════════════════════════════════════════════════


class UnsupportedMessageError(MfaSmsError):
    """Raised when a transport is handed a message type it cannot send.

    This is a programming error and is never retried.
    """


class TransportError(MfaSmsError):
    """Base class for failures while talking to the SMS gateway."""


class DeliveryError(TransportError):
    """Raised when the gateway rejects a request (non-200 response).

    Attributes:
        status_code: HTTP status code returned by the gateway.
        reason: HTTP reason phrase.
    """

    def __init__(
        self,
        reason: str,
        status_code: int | None = None,
        message: str | None = None,
    ) -> None:
        self.reason = reason
        self.status_code = status_code
        super().__init__(message or f"Unable to send SMS: {reason}")


class ApiContractError(DeliveryError):
    """Raised when a 200 response lacks the expected success marker."""

    def __init__(self, reason: str = "Unknown API error", status_code: int | None = 200) -> None:
        super().__init__(reason, status_code, message=reason)


__all__: list[str] = [
    "MfaSmsError",
    "ConfigurationError",
    "InvalidDsnError",
    "UnsupportedSchemeError",
    "MobileNumberValidationError",
    "UnsupportedMessageError",
    "TransportError",
    "DeliveryError",
    "ApiContractError",
]
