"""Bridge to the native vpn-core library.

The native library does JWT generation, HTTPS and response decryption, and
hands back JSON as C strings that the caller must free. This module only
moves those strings across the boundary; classification happens in
``decoder``.
"""

import ctypes
import ctypes.util
import logging
import os
import threading
from typing import Optional, Protocol

from .decoder import RawResponse
from .models import protocol_api_value

logger = logging.getLogger(__name__)


class NativeBridge(Protocol):
    """The two opaque native calls the API depends on."""

    def list_servers(self) -> Optional[RawResponse]:
        """Raw server list JSON, or None if the native call failed."""
        ...

    def get_configuration(
        self, server_id: str, protocol: str
    ) -> Optional[RawResponse]:
        """Raw server configuration JSON, or None if the native call failed."""
        ...


class CtypesBridge:
    """
    NativeBridge backed by the vpn-core shared library, loaded with ctypes.

    The library is loaded on first use. If it cannot be loaded, or an
    expected symbol is missing, every call returns None so that the API
    reports ``NATIVE_NULL`` instead of raising.

    Attributes:
        LIBRARY_ENV_VAR: Environment variable holding the library path
        DEFAULT_LIBRARY_NAME: Name passed to ctypes.util.find_library as a fallback
    """

    LIBRARY_ENV_VAR = "VPNCORE_LIBRARY"
    DEFAULT_LIBRARY_NAME = "vpncore"

    # Exported symbols (see vc_vpn_api.h)
    LIST_SERVERS_SYMBOL = "_L1sT_v3r_"
    GET_CONFIGURATION_SYMBOL = "_G3t_C0nf_"
    FREE_STRING_SYMBOL = "_Fr33_Str_"

    def __init__(self, library_path: Optional[str] = None):
        """
        Initialize CtypesBridge.

        Args:
            library_path: Path to the vpn-core shared library. Nothing is
                          loaded until the first call.
        """
        self.library_path = library_path
        self._library: Optional[ctypes.CDLL] = None
        self._load_failed = False
        self._load_lock = threading.Lock()

    @classmethod
    def from_env(cls) -> "CtypesBridge":
        """
        Create a bridge using VPNCORE_LIBRARY, falling back to find_library.

        Example:
            export VPNCORE_LIBRARY=/opt/vpncore/libvpncore.so
            bridge = CtypesBridge.from_env()
        """
        path = os.environ.get(cls.LIBRARY_ENV_VAR)
        if path:
            logger.debug(f"Using vpn-core library from {cls.LIBRARY_ENV_VAR}: {path}")
        else:
            path = ctypes.util.find_library(cls.DEFAULT_LIBRARY_NAME)
            logger.debug(f"find_library({cls.DEFAULT_LIBRARY_NAME!r}) -> {path}")
        return cls(path)

    def _load(self) -> Optional[ctypes.CDLL]:
        if self._library is not None or self._load_failed:
            return self._library
        # Concurrent coroutines call in from executor threads
        with self._load_lock:
            if self._library is not None or self._load_failed:
                return self._library
            return self._load_library()

    def _load_library(self) -> Optional[ctypes.CDLL]:
        if not self.library_path:
            logger.error(
                f"vpn-core library not found. Set {self.LIBRARY_ENV_VAR} "
                "to the path of the shared library."
            )
            self._load_failed = True
            return None

        try:
            library = ctypes.CDLL(self.library_path)
            list_servers = getattr(library, self.LIST_SERVERS_SYMBOL)
            get_configuration = getattr(library, self.GET_CONFIGURATION_SYMBOL)
            free_string = getattr(library, self.FREE_STRING_SYMBOL)
        except (OSError, AttributeError) as e:
            logger.error(f"Failed to load vpn-core library {self.library_path}: {e}")
            self._load_failed = True
            return None

        # Keep results as raw pointers so they can be handed back to free()
        list_servers.argtypes = []
        list_servers.restype = ctypes.c_void_p
        get_configuration.argtypes = [ctypes.c_char_p, ctypes.c_char_p]
        get_configuration.restype = ctypes.c_void_p
        free_string.argtypes = [ctypes.c_void_p]
        free_string.restype = None

        logger.info(f"vpn-core library loaded from {self.library_path}")
        self._library = library
        return library

    def _take_string(
        self, library: ctypes.CDLL, pointer: Optional[int]
    ) -> Optional[bytes]:
        """Copy a native C string and release it."""
        if not pointer:
            return None
        try:
            return ctypes.string_at(pointer)
        finally:
            getattr(library, self.FREE_STRING_SYMBOL)(pointer)

    def list_servers(self) -> Optional[bytes]:
        library = self._load()
        if library is None:
            return None
        pointer = getattr(library, self.LIST_SERVERS_SYMBOL)()
        return self._take_string(library, pointer)

    def get_configuration(self, server_id: str, protocol: str) -> Optional[bytes]:
        library = self._load()
        if library is None:
            return None
        pointer = getattr(library, self.GET_CONFIGURATION_SYMBOL)(
            server_id.encode("utf-8"),
            protocol_api_value(protocol).encode("utf-8"),
        )
        return self._take_string(library, pointer)
