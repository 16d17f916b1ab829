"""Pydantic models for vpn-core responses."""

from typing import Any, ClassVar, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Protocol identifiers as returned by the server list
OPENVPN = "OPENVPN"
IKEV2 = "IKEV2"

PROTOCOL_DISPLAY_NAMES = {
    OPENVPN: "OpenVPN",
    IKEV2: "IKEv2",
}


def protocol_display_name(protocol: str) -> str:
    """Display name for a protocol, or the protocol itself if unknown."""
    return PROTOCOL_DISPLAY_NAMES.get(protocol.upper(), protocol)


def protocol_api_value(protocol: str) -> str:
    """Lowercase protocol value expected by the native library."""
    return protocol.lower()


class ServerInfo(BaseModel):
    """
    One selectable VPN server from the server list.

    The country code is accepted as either ``countryCode`` or
    ``country_code``; it is always written back as ``countryCode``.
    """

    model_config = ConfigDict(
        frozen=True, populate_by_name=True, serialize_by_alias=True
    )

    # Tried in order, first string value wins
    COUNTRY_CODE_KEYS: ClassVar[Tuple[str, ...]] = ("countryCode", "country_code")

    id: str = Field(..., description="Unique server identifier.")
    name: str = Field(..., description="Server display name.")
    country_code: str = Field(
        ...,
        alias="countryCode",
        description='ISO country code (e.g. "US", "GB", "JP").',
    )
    quality: str = Field("", description='Server quality (e.g. "low", "high").')
    protocols: Tuple[str, ...] = Field(
        ...,
        description=(
            'Supported protocols as uppercase tokens ("OPENVPN", "IKEV2"). '
            "An empty list is accepted as sent."
        ),
    )

    @model_validator(mode="before")
    @classmethod
    def resolve_country_code(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        for key in cls.COUNTRY_CODE_KEYS:
            value = data.get(key)
            if isinstance(value, str):
                data = {k: v for k, v in data.items() if k not in cls.COUNTRY_CODE_KEYS}
                data["countryCode"] = value
                break
        return data

    @field_validator("quality", mode="before")
    @classmethod
    def quality_or_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    def supports(self, protocol: str) -> bool:
        """Check protocol membership, ignoring case."""
        wanted = protocol.upper()
        return any(p.upper() == wanted for p in self.protocols)

    def to_dict(self) -> Dict[str, Any]:
        """Canonical wire form (camelCase keys)."""
        return self.model_dump(mode="json")

    def to_json(self) -> str:
        return self.model_dump_json()


class ServerConfiguration(BaseModel):
    """Connection parameters and credentials for one (server, protocol) pair."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    protocol: str
    # .ovpn content for OpenVPN; usually absent for IKEv2
    template: Optional[str] = None
    host: str
    username: str
    password: str = Field(..., repr=False)

    @property
    def has_template(self) -> bool:
        return self.template is not None

    @property
    def protocol_display_name(self) -> str:
        return protocol_display_name(self.protocol)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")

    def to_json(self) -> str:
        return self.model_dump_json()


class ErrorResponse(BaseModel):
    """Error envelope returned by vpn-core: ``{"error": "message"}``."""

    model_config = ConfigDict(frozen=True)

    error: str
