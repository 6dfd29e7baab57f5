"""CLI entrypoint — Typer-based command interface.

Commands:
    tailscale-mcp serve    — Start the MCP server
    tailscale-mcp tools    — List the tools and prompts the server exposes
    tailscale-mcp call     — One-shot tool call, printing tailscale's output
"""

from __future__ import annotations

import asyncio
import json
from typing import Any

import structlog
import typer

app = typer.Typer(
    name="tailscale-mcp",
    help="Tailscale MCP — read-only tailscale commands for AI agents",
)

logger = structlog.get_logger()


def _parse_arg(pair: str) -> tuple[str, Any]:
    """Parse a key=value pair. Values that are JSON literals keep their type."""
    key, sep, raw = pair.partition("=")
    if not sep or not key.strip():
        raise typer.BadParameter(f"expected key=value, got: {pair}")
    try:
        value: Any = json.loads(raw)
    except ValueError:
        value = raw
    if not isinstance(value, (str, bool, int, float)):
        value = raw
    return key.strip(), value


@app.command()
def serve(
    transport: str = typer.Option(None, help="MCP transport: stdio, http or sse"),
    host: str = typer.Option(None, help="Bind host for http/sse transports"),
    port: int = typer.Option(None, help="Bind port for http/sse transports"),
) -> None:
    """Start the Tailscale MCP server."""
    from tailscale_mcp.config import VALID_TRANSPORTS, get_settings
    from tailscale_mcp.log_config import configure_logging
    from tailscale_mcp.mcp_server.server import create_mcp_server

    settings = get_settings()
    selected = (transport or settings.mcp_transport).lower()
    if selected not in VALID_TRANSPORTS:
        raise typer.BadParameter(
            f"must be one of {', '.join(VALID_TRANSPORTS)}, got: {transport}",
            param_hint="--transport",
        )

    configure_logging(log_level=settings.log_level, log_format=settings.log_format)
    mcp = create_mcp_server(settings)

    async def _run() -> None:
        await logger.ainfo(
            "Tailscale MCP server started",
            transport=selected,
            version=settings.mcp_server_version,
        )
        if selected == "stdio":
            await mcp.run_async(transport="stdio")
        else:
            await mcp.run_async(
                transport=selected,
                host=host or settings.mcp_server_host,
                port=port or settings.mcp_server_port,
            )

    asyncio.run(_run())


@app.command()
def tools() -> None:
    """List every tool and prompt the MCP server registers."""
    from tailscale_mcp.mcp_server.tools import TOOLS
    from tailscale_mcp.prompts import PROMPTS

    typer.echo("Tools:")
    for name, meta in TOOLS.items():
        typer.echo(f"  {name:<26} {meta['description']}")
    typer.echo("Prompts:")
    for name, meta in PROMPTS.items():
        typer.echo(f"  {name:<26} {meta['description']}")


@app.command()
def call(
    tool_name: str = typer.Argument(help="Tool name (e.g. get-status, ping-host)"),
    arg: list[str] = typer.Option(None, "--arg", "-a", help="Tool argument as key=value (repeatable)"),
) -> None:
    """One-shot tool call — run a tool once and print tailscale's output."""
    from tailscale_mcp.config import get_settings
    from tailscale_mcp.errors import GatewayError
    from tailscale_mcp.gateway import create_gateway
    from tailscale_mcp.log_config import configure_logging

    settings = get_settings()
    configure_logging(log_level="WARNING", log_format="console")

    arguments = dict(_parse_arg(pair) for pair in (arg or []))
    gateway = create_gateway(settings)

    try:
        output = asyncio.run(gateway.execute(tool_name, arguments))
    except GatewayError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(output, nl=False)


if __name__ == "__main__":
    app()
