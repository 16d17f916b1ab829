"""Error taxonomy for vpncore_kit.

Every failed API call carries exactly one of the errors below inside an
``Err`` result. Each error has a stable uppercase ``code`` for programmatic
matching and a human-readable ``description`` for logs and UI.
"""

from enum import Enum
from typing import Optional

from pydantic import ValidationError


class ErrorType(Enum):
    """Closed set of failure kinds, valued by their stable error code."""

    NATIVE_NULL = "NATIVE_NULL"
    API_ERROR = "API_ERROR"
    INVALID_JSON = "INVALID_JSON"
    DECODE_ERROR = "DECODE_ERROR"
    PARSE_ERROR = "PARSE_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"


class VpnCoreError(Exception):
    """Base exception for all vpncore_kit errors.

    Attributes:
        message: Error detail (the remote message for API errors)
        error_type: Kind of error from the ErrorType enum
        details: Optional dict with additional error context
    """

    def __init__(
        self,
        message: str,
        error_type: ErrorType,
        details: Optional[dict] = None,
    ):
        self.message = message
        self.error_type = error_type
        self.details = details or {}
        super().__init__(self.message)

    @property
    def code(self) -> str:
        """Stable error code for programmatic handling."""
        return self.error_type.value

    @property
    def description(self) -> str:
        """Human-readable description."""
        return self.message

    def __str__(self) -> str:
        base = f"[{self.code}] {self.description}"
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{base} ({details_str})"
        return base

    def to_dict(self) -> dict:
        """Convert error to dictionary for logging/serialization."""
        return {
            "code": self.code,
            "error_type": self.error_type.name,
            "message": self.message,
            "description": self.description,
            "details": self.details,
        }


class NativeNullError(VpnCoreError):
    """The native call produced no value at all."""

    def __init__(self, message: str = "Native call returned null"):
        super().__init__(message, ErrorType.NATIVE_NULL)


class ApiError(VpnCoreError):
    """The remote side answered with an error envelope."""

    def __init__(self, message: str, code: Optional[str] = None):
        details = {"api_code": code} if code else {}
        self.api_code = code
        super().__init__(message, ErrorType.API_ERROR, details)

    @property
    def code(self) -> str:
        return self.api_code or self.error_type.value

    @property
    def description(self) -> str:
        if self.api_code:
            return f"API error [{self.api_code}]: {self.message}"
        return f"API error: {self.message}"

    def __str__(self) -> str:
        return f"[{self.code}] {self.description}"


class InvalidJSONError(VpnCoreError):
    """The raw response could not be read as UTF-8 text."""

    def __init__(self, message: str):
        super().__init__(message, ErrorType.INVALID_JSON)

    @property
    def description(self) -> str:
        return f"Invalid JSON: {self.message}"


class DecodingFailedError(VpnCoreError):
    """The response did not match the expected structure.

    Attributes:
        cause: The underlying decoding exception (also set as ``__cause__``)
    """

    def __init__(self, cause: Exception):
        self.cause = cause
        details = {}
        if isinstance(cause, ValidationError):
            # Input values are left out, payloads carry credentials
            errors = cause.errors(include_url=False, include_input=False)
            details["error_count"] = len(errors)
            message = "; ".join(
                "{}: {}".format(
                    ".".join(str(part) for part in error["loc"]) or "<root>",
                    error["msg"],
                )
                for error in errors
            )
        else:
            message = str(cause)
        super().__init__(message, ErrorType.DECODE_ERROR, details)
        self.__cause__ = cause

    @property
    def description(self) -> str:
        return f"Failed to decode response: {self.message}"


class ParseError(VpnCoreError):
    """Structural parse failure, distinct from a shape mismatch."""

    def __init__(self, message: str):
        super().__init__(message, ErrorType.PARSE_ERROR)

    @property
    def description(self) -> str:
        return f"Parse error: {self.message}"


class NetworkError(VpnCoreError):
    """Transport failure surfaced through the native channel."""

    def __init__(self, message: str):
        super().__init__(message, ErrorType.NETWORK_ERROR)

    @property
    def description(self) -> str:
        return f"Network error: {self.message}"
