"""Shared fixtures: sample vpn-core payloads and a fake native bridge."""

import json

import pytest

SERVERS = [
    {
        "id": "1",
        "name": "US Server - New York",
        "countryCode": "US",
        "quality": "high",
        "protocols": ["OPENVPN", "IKEV2"],
    },
    {
        "id": "2",
        "name": "Japan - Tokyo",
        "country_code": "JP",
        "protocols": ["IKEV2"],
    },
]

OPENVPN_CONFIG = {
    "id": "1",
    "name": "US Server",
    "protocol": "OPENVPN",
    "template": "client\ndev tun\nproto udp\nremote {host} 1194\n",
    "host": "us1.example.net",
    "username": "u-123",
    "password": "s3cret",
}

IKEV2_CONFIG = {
    "id": "2",
    "name": "Japan - Tokyo",
    "protocol": "IKEV2",
    "host": "jp1.example.net",
    "username": "u-456",
    "password": "hunter2",
}


class FakeBridge:
    """NativeBridge returning canned responses and recording calls."""

    def __init__(self, servers=None, configuration=None):
        self.servers = servers
        self.configuration = configuration
        self.calls = []

    def list_servers(self):
        self.calls.append(("list_servers",))
        return self.servers

    def get_configuration(self, server_id, protocol):
        self.calls.append(("get_configuration", server_id, protocol))
        return self.configuration


@pytest.fixture
def servers_json():
    return json.dumps(SERVERS)


@pytest.fixture
def openvpn_config_json():
    return json.dumps(OPENVPN_CONFIG)


@pytest.fixture
def ikev2_config_json():
    return json.dumps(IKEV2_CONFIG)


@pytest.fixture
def fake_bridge(servers_json, openvpn_config_json):
    return FakeBridge(servers=servers_json, configuration=openvpn_config_json)


@pytest.fixture
def openvpn_config():
    return dict(OPENVPN_CONFIG)


@pytest.fixture
def ikev2_config():
    return dict(IKEV2_CONFIG)


@pytest.fixture
def make_bridge():
    """Factory for FakeBridge instances with custom responses."""
    return FakeBridge
