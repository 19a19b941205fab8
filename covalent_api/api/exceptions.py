"""
Covalent API client exceptions.

Validation problems are detected locally and raised before any network call.
Transport failures are the ``requests`` exceptions themselves, re-exported here as
TransportError so callers can catch them without importing ``requests``.
"""

from typing import Any, Optional, Tuple

from requests.exceptions import RequestException

TransportError = RequestException


class CovalentAPIError(Exception):
    """Base exception for errors raised by this client."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class MissingCredentialError(CovalentAPIError, ValueError):
    """Raised when no access token was passed and none is configured."""

    HINT = (
        "Pass the API key explicitly (api_key=... or --api-key) "
        "or set the COVALENT_API_KEY environment variable."
    )

    def __init__(self, message: str = "Covalent API key is missing."):
        super().__init__(f"{message} {self.HINT}")


class ParameterValidationError(CovalentAPIError, ValueError):
    """Raised when a request parameter is missing or outside its accepted set."""

    def __init__(self, field: str, message: str, value: Any = None,
                 accepted: Optional[Tuple[str, ...]] = None):
        self.field = field
        self.value = value
        self.accepted = accepted
        super().__init__(message)
