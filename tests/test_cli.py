"""Tests for the Rich CLI module."""

from unittest.mock import MagicMock, patch

import pytest

from vpncore_kit.api import VpnAPI
from vpncore_kit.cli import (
    SECRET_MASK,
    build_api,
    build_parser,
    configuration_dict,
    main,
    show_stats,
    summarize_servers,
)
from vpncore_kit.decoder import decode_configuration, decode_servers
from vpncore_kit.native import CtypesBridge

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def mock_console(monkeypatch):
    """Replace the module-level Console so no Rich output is produced."""
    mc = MagicMock()
    monkeypatch.setattr("vpncore_kit.cli.console", mc)
    return mc


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    monkeypatch.setattr("vpncore_kit.cli.configure_logging", MagicMock())


@pytest.fixture
def servers(servers_json):
    return decode_servers(servers_json).unwrap()


@pytest.fixture
def run_cli(fake_bridge):
    """Run main() against the fake bridge and return its exit code."""

    def _run(argv):
        with patch("vpncore_kit.cli.build_api", return_value=VpnAPI(fake_bridge)):
            with pytest.raises(SystemExit) as exc_info:
                main(argv)
        return exc_info.value.code

    return _run


def _printed(mock_console) -> str:
    return " ".join(str(c) for c in mock_console.print.call_args_list)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def test_summarize_servers(servers):
    summary = summarize_servers(servers)

    assert summary == {
        "total": 2,
        "protocols": {"OPENVPN": 1, "IKEV2": 2},
        "countries": 2,
    }


def test_summarize_counts_duplicate_protocol_once(servers):
    duplicated = servers[1].model_copy(update={"protocols": ("IKEV2", "ikev2")})
    assert summarize_servers([duplicated])["protocols"] == {"IKEV2": 1}


def test_show_stats_empty(mock_console):
    show_stats([])
    assert "No servers found" in _printed(mock_console)


def test_configuration_dict_masks_password(openvpn_config_json):
    config = decode_configuration(openvpn_config_json).unwrap()

    assert configuration_dict(config, show_secrets=False)["password"] == SECRET_MASK
    assert configuration_dict(config, show_secrets=True)["password"] == "s3cret"


def test_build_api_with_library():
    api = build_api("/opt/vpncore/libvpncore.so")
    assert isinstance(api.bridge, CtypesBridge)
    assert api.bridge.library_path == "/opt/vpncore/libvpncore.so"


def test_build_api_from_env(monkeypatch):
    monkeypatch.setenv("VPNCORE_LIBRARY", "/env/libvpncore.so")
    assert build_api(None).bridge.library_path == "/env/libvpncore.so"


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


# ---------------------------------------------------------------------------
# main
# ---------------------------------------------------------------------------


def test_servers_command(run_cli, mock_console):
    assert run_cli(["servers"]) == 0
    # table + stats table + totals line
    assert mock_console.print.call_count == 3
    assert "Countries" in _printed(mock_console)


def test_servers_json_filtered(run_cli, mock_console):
    assert run_cli(["servers", "--protocol", "openvpn", "--json"]) == 0

    data = mock_console.print_json.call_args.kwargs["data"]
    assert [s["id"] for s in data] == ["1"]
    assert data[0]["countryCode"] == "US"


def test_servers_failure_exit_code(fake_bridge, mock_console):
    fake_bridge.servers = '{"error": "HTTP 404"}'
    with patch("vpncore_kit.cli.build_api", return_value=VpnAPI(fake_bridge)):
        with pytest.raises(SystemExit) as exc_info:
            main(["servers"])

    assert exc_info.value.code == 1
    assert "API_ERROR" in _printed(mock_console)


def test_config_command_masks_password(run_cli, fake_bridge, mock_console):
    assert run_cli(["config", "1", "openvpn"]) == 0

    assert fake_bridge.calls == [("get_configuration", "1", "openvpn")]
    panel = mock_console.print.call_args.args[0]
    assert SECRET_MASK in panel.renderable
    assert "s3cret" not in panel.renderable
    assert "us1.example.net" in panel.renderable


def test_config_json_show_secrets(run_cli, mock_console):
    assert run_cli(["config", "1", "openvpn", "--json", "--show-secrets"]) == 0

    data = mock_console.print_json.call_args.kwargs["data"]
    assert data["password"] == "s3cret"
    assert data["protocol"] == "OPENVPN"


def test_config_native_null(fake_bridge, mock_console):
    fake_bridge.configuration = None
    with patch("vpncore_kit.cli.build_api", return_value=VpnAPI(fake_bridge)):
        with pytest.raises(SystemExit) as exc_info:
            main(["config", "1", "ikev2"])

    assert exc_info.value.code == 1
    assert "NATIVE_NULL" in _printed(mock_console)


def test_library_option_passed_to_build_api(fake_bridge):
    with patch(
        "vpncore_kit.cli.build_api", return_value=VpnAPI(fake_bridge)
    ) as build:
        with pytest.raises(SystemExit):
            main(["--library", "./libvpncore.so", "servers"])

    build.assert_called_once_with("./libvpncore.so")
