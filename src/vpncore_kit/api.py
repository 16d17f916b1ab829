"""High-level API for VPN server discovery and configuration."""

import asyncio
import logging
from typing import List, Optional, TypeVar, Union

from .decoder import decode_configuration, decode_servers
from .exceptions import ErrorType, VpnCoreError
from .models import ServerConfiguration, ServerInfo
from .native import CtypesBridge, NativeBridge
from .result import Err, Ok

logger = logging.getLogger(__name__)

T = TypeVar("T")

ApiResult = Union[Ok[T], Err[VpnCoreError]]


class VpnAPI:
    """
    Typed interface to the native vpn-core library.

    The native side handles JWT generation, HTTPS and response decryption;
    VpnAPI turns its raw JSON into ``ServerInfo`` / ``ServerConfiguration``
    values and classifies every failure as a ``VpnCoreError``.

    Each operation exists as a coroutine and as a blocking ``*_sync`` method.
    Both classify responses identically; only the coroutines log.

    Example:
        api = VpnAPI.shared()
        result = await api.get_servers()
        if result.is_ok():
            for server in result.value:
                print(f"{server.name} - {server.country_code}")
        else:
            print(f"Error: {result.error.description}")
    """

    _shared: Optional["VpnAPI"] = None

    def __init__(self, bridge: NativeBridge):
        """
        Initialize VpnAPI.

        Args:
            bridge: Provider of the native list-servers and get-configuration calls
        """
        self.bridge = bridge

    @classmethod
    def from_env(cls) -> "VpnAPI":
        """Create a VpnAPI backed by the library named in VPNCORE_LIBRARY."""
        return cls(CtypesBridge.from_env())

    @classmethod
    def shared(cls) -> "VpnAPI":
        """Process-wide instance, created from the environment on first use."""
        if cls._shared is None:
            cls._shared = cls.from_env()
        return cls._shared

    async def get_servers(self) -> ApiResult[List[ServerInfo]]:
        """
        Get the list of available VPN servers.

        Returns:
            ApiResult[List[ServerInfo]]: Ok with the server list, or Err with
                                         a classified VpnCoreError
        """
        logger.info("getServers")
        loop = asyncio.get_running_loop()
        raw = await loop.run_in_executor(None, self.bridge.list_servers)
        if raw is not None:
            logger.debug(f"Response: {len(raw)} chars")

        result = decode_servers(raw)
        if result.is_ok():
            logger.info(f"Server list decoded: {len(result.value)} servers")
        else:
            self._log_failure(result.error, raw)
        return result

    async def get_configuration(
        self, server_id: str, protocol: str
    ) -> ApiResult[ServerConfiguration]:
        """
        Get connection configuration for a server.

        Args:
            server_id: Server identifier from the server list
            protocol: VPN protocol, e.g. "OPENVPN" or "IKEV2" (any case)

        Returns:
            ApiResult[ServerConfiguration]: Ok with the configuration, or Err
                                            with a classified VpnCoreError
        """
        logger.info(f"getConfiguration: {server_id} ({protocol})")
        loop = asyncio.get_running_loop()
        raw = await loop.run_in_executor(
            None, self.bridge.get_configuration, server_id, protocol
        )
        if raw is not None:
            logger.debug(f"Response: {len(raw)} chars")

        result = decode_configuration(raw)
        if result.is_ok():
            logger.info("ServerConfiguration decoded successfully")
        else:
            self._log_failure(result.error, raw)
        return result

    def get_servers_sync(self) -> ApiResult[List[ServerInfo]]:
        """Blocking form of get_servers(). Does not log."""
        return decode_servers(self.bridge.list_servers())

    def get_configuration_sync(
        self, server_id: str, protocol: str
    ) -> ApiResult[ServerConfiguration]:
        """Blocking form of get_configuration(). Does not log."""
        return decode_configuration(self.bridge.get_configuration(server_id, protocol))

    @staticmethod
    def _log_failure(error: VpnCoreError, raw) -> None:
        if raw is None:
            logger.error("Native call returned null")
            return
        logger.error(str(error))
        if error.error_type is ErrorType.DECODE_ERROR:
            logger.debug(f"Full response: {raw!r}")
