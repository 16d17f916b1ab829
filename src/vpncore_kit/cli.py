"""Rich command-line interface for vpncore-kit."""

import argparse
import asyncio
import logging
import sys
from collections import Counter
from typing import Dict, List, Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .api import VpnAPI
from .exceptions import VpnCoreError
from .models import ServerConfiguration, ServerInfo, protocol_display_name
from .native import CtypesBridge

console = Console()

SECRET_MASK = "********"


def configure_logging(verbose: bool) -> None:
    """Send library logs to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def build_api(library: Optional[str] = None) -> VpnAPI:
    """VpnAPI for an explicit library path, or from VPNCORE_LIBRARY."""
    if library:
        return VpnAPI(CtypesBridge(library))
    return VpnAPI.from_env()


def summarize_servers(servers: List[ServerInfo]) -> Dict:
    """Count servers per protocol and distinct countries."""
    protocols: Counter = Counter()
    for server in servers:
        # Duplicate tokens on one server count once
        for proto in {p.upper() for p in server.protocols}:
            protocols[proto] += 1
    return {
        "total": len(servers),
        "protocols": dict(protocols),
        "countries": len({s.country_code for s in servers}),
    }


def show_error(error: VpnCoreError) -> None:
    console.print(f"[red]✗[/red] [bold]{error.code}[/bold]: {error.description}")


def show_servers(servers: List[ServerInfo]) -> None:
    """Print the server list as a table."""
    table = Table(title="VPN Servers", box=box.ROUNDED)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Country", justify="center", style="magenta")
    table.add_column("Quality", justify="center")
    table.add_column("Protocols", style="green")

    for server in servers:
        table.add_row(
            server.id,
            server.name,
            server.country_code,
            server.quality or "-",
            ", ".join(protocol_display_name(p) for p in server.protocols),
        )
    console.print(table)


def show_stats(servers: List[ServerInfo]) -> None:
    """Print per-protocol statistics."""
    summary = summarize_servers(servers)
    total = summary["total"]
    if not total:
        console.print("[yellow]No servers found.[/yellow]")
        return

    table = Table(title="\U0001f4ca Protocols", box=box.ROUNDED)
    table.add_column("Protocol", style="cyan", no_wrap=True)
    table.add_column("Servers", justify="right", style="green bold")
    table.add_column("Percent", justify="right", style="magenta")
    for proto, count in sorted(
        summary["protocols"].items(), key=lambda x: x[1], reverse=True
    ):
        table.add_row(
            protocol_display_name(proto), str(count), f"{count / total * 100:.1f}%"
        )
    console.print(table)
    console.print(
        f"Total servers: [bold]{total}[/bold] • "
        f"Countries: [bold]{summary['countries']}[/bold]"
    )


def configuration_dict(config: ServerConfiguration, show_secrets: bool) -> Dict:
    data = config.to_dict()
    if not show_secrets:
        data["password"] = SECRET_MASK
    return data


def show_configuration(config: ServerConfiguration, show_secrets: bool = False) -> None:
    """Print a server configuration panel."""
    password = config.password if show_secrets else SECRET_MASK
    lines = [
        f"[bold]Server:[/bold] {config.name} ({config.id})",
        f"[bold]Protocol:[/bold] {config.protocol_display_name}",
        f"[bold]Host:[/bold] {config.host}",
        f"[bold]Username:[/bold] {config.username}",
        f"[bold]Password:[/bold] {password}",
        f"[bold]Template:[/bold] {'yes' if config.has_template else 'no'}",
    ]
    console.print(
        Panel("\n".join(lines), title="Server Configuration", box=box.ROUNDED)
    )


def cmd_servers(api: VpnAPI, args: argparse.Namespace) -> int:
    result = asyncio.run(api.get_servers())
    if result.is_err():
        show_error(result.error)
        return 1

    servers = result.value
    if args.protocol:
        servers = [s for s in servers if s.supports(args.protocol)]

    if args.json:
        console.print_json(data=[s.to_dict() for s in servers])
    else:
        show_servers(servers)
        show_stats(servers)
    return 0


def cmd_config(api: VpnAPI, args: argparse.Namespace) -> int:
    result = asyncio.run(api.get_configuration(args.server_id, args.protocol))
    if result.is_err():
        show_error(result.error)
        return 1

    if args.json:
        console.print_json(data=configuration_dict(result.value, args.show_secrets))
    else:
        show_configuration(result.value, show_secrets=args.show_secrets)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vpncore-kit",
        description="Query the vpn-core native library",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  vpncore-kit servers                       # table + protocol stats
  vpncore-kit servers -p ikev2 --json       # IKEv2 servers as JSON
  vpncore-kit config 1 openvpn              # configuration for server 1
  vpncore-kit --library ./libvpncore.so servers
        """,
    )
    parser.add_argument(
        "--library", help="path to the vpn-core library (default: $VPNCORE_LIBRARY)"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    servers = subparsers.add_parser("servers", help="list available servers")
    servers.add_argument("-p", "--protocol", help="only servers supporting PROTOCOL")
    servers.add_argument("--json", action="store_true", help="print JSON")
    servers.set_defaults(handler=cmd_servers)

    config = subparsers.add_parser("config", help="get a server configuration")
    config.add_argument("server_id", help="server ID from the server list")
    config.add_argument("protocol", help="VPN protocol (openvpn, ikev2)")
    config.add_argument("--json", action="store_true", help="print JSON")
    config.add_argument(
        "--show-secrets", action="store_true", help="print the password in clear"
    )
    config.set_defaults(handler=cmd_config)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    api = build_api(args.library)
    sys.exit(args.handler(api, args))


if __name__ == "__main__":
    main()
