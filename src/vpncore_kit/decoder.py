"""Classification and decoding of raw vpn-core responses.

vpn-core returns success payloads and error envelopes over the same channel
with no discriminant field, so each response goes through, in order:

1. ``None`` -> ``NativeNullError``.
2. If the text contains ``"error"``, try it as an ``ErrorResponse``
   envelope -> ``ApiError``. If that decode fails the match was a false
   positive and classification continues.
3. UTF-8 conversion -> ``InvalidJSONError`` on failure.
4. Validation against the expected shape -> ``DecodingFailedError`` on
   failure, ``Ok(value)`` otherwise.

Nothing here logs; callers decide what to report.
"""

from typing import List, Optional, TypeVar, Union

from pydantic import TypeAdapter, ValidationError

from .exceptions import (
    ApiError,
    DecodingFailedError,
    ErrorType,
    InvalidJSONError,
    NativeNullError,
    VpnCoreError,
)
from .models import ErrorResponse, ServerConfiguration, ServerInfo
from .result import Err, Ok, Result

T = TypeVar("T")

RawResponse = Union[str, bytes]

ERROR_MARKER = '"error"'

SERVER_LIST_ADAPTER: TypeAdapter[List[ServerInfo]] = TypeAdapter(List[ServerInfo])
SERVER_CONFIGURATION_ADAPTER: TypeAdapter[ServerConfiguration] = TypeAdapter(
    ServerConfiguration
)


def _to_utf8(raw: RawResponse) -> bytes:
    """UTF-8 bytes of the response; raises UnicodeError if not convertible."""
    if isinstance(raw, bytes):
        raw.decode("utf-8")
        return raw
    return raw.encode("utf-8")


def _contains_error_marker(raw: RawResponse) -> bool:
    if isinstance(raw, bytes):
        return ERROR_MARKER.encode("ascii") in raw
    return ERROR_MARKER in raw


def decode_error_envelope(raw: RawResponse) -> Optional[ErrorResponse]:
    """Decode ``raw`` as an error envelope, or None if it is not one."""
    try:
        return ErrorResponse.model_validate_json(_to_utf8(raw))
    except (UnicodeError, ValidationError):
        return None


def decode_response(
    raw: Optional[RawResponse], adapter: TypeAdapter[T]
) -> Result[T, VpnCoreError]:
    """
    Classify a raw native response and decode it with ``adapter``.

    Args:
        raw: Text (or bytes) returned by the native call, None if it returned nothing
        adapter: TypeAdapter for the expected success shape

    Returns:
        Result[T, VpnCoreError]: Ok with the decoded value, or Err with exactly
                                 one classified error
    """
    if raw is None:
        return Err(NativeNullError())

    if _contains_error_marker(raw):
        envelope = decode_error_envelope(raw)
        if envelope is not None:
            return Err(ApiError(envelope.error, code=ErrorType.API_ERROR.value))

    try:
        data = _to_utf8(raw)
    except UnicodeError as e:
        return Err(InvalidJSONError(f"Failed to convert response to data: {e}"))

    try:
        return Ok(adapter.validate_json(data))
    except ValidationError as e:
        return Err(DecodingFailedError(e))


def decode_servers(
    raw: Optional[RawResponse],
) -> Result[List[ServerInfo], VpnCoreError]:
    """Decode a server list response."""
    return decode_response(raw, SERVER_LIST_ADAPTER)


def decode_configuration(
    raw: Optional[RawResponse],
) -> Result[ServerConfiguration, VpnCoreError]:
    """Decode a server configuration response."""
    return decode_response(raw, SERVER_CONFIGURATION_ADAPTER)
