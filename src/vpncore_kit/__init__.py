"""vpncore-kit - Typed Python API for the vpn-core native library"""

__version__ = "0.1.0"

from .api import ApiResult, VpnAPI
from .decoder import decode_configuration, decode_response, decode_servers
from .exceptions import (
    ApiError,
    DecodingFailedError,
    ErrorType,
    InvalidJSONError,
    NativeNullError,
    NetworkError,
    ParseError,
    VpnCoreError,
)
from .models import (
    IKEV2,
    OPENVPN,
    ErrorResponse,
    ServerConfiguration,
    ServerInfo,
    protocol_api_value,
    protocol_display_name,
)
from .native import CtypesBridge, NativeBridge
from .result import Err, Ok, Result

__all__ = [
    # API
    "VpnAPI",
    "ApiResult",
    "NativeBridge",
    "CtypesBridge",
    # Decoding
    "decode_response",
    "decode_servers",
    "decode_configuration",
    # Models
    "ServerInfo",
    "ServerConfiguration",
    "ErrorResponse",
    "OPENVPN",
    "IKEV2",
    "protocol_display_name",
    "protocol_api_value",
    # Errors
    "VpnCoreError",
    "ErrorType",
    "NativeNullError",
    "ApiError",
    "InvalidJSONError",
    "DecodingFailedError",
    "ParseError",
    "NetworkError",
    # Result type
    "Result",
    "Ok",
    "Err",
]
