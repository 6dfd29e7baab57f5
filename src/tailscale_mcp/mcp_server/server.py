"""FastMCP server — exposes read-only tailscale commands to AI agents via MCP.

Each tool call flows through: handler → TailscaleGateway.execute() → tailscale.
Each prompt runs its gateway calls and returns a single user message.
"""

from __future__ import annotations

from typing import Annotated, Any

import structlog
from fastmcp import FastMCP
from fastmcp.exceptions import PromptError, ToolError
from fastmcp.prompts import Prompt
from mcp.types import PromptMessage
from pydantic import Field, PrivateAttr

from tailscale_mcp.config import Settings
from tailscale_mcp.errors import GatewayError, PromptCompositionError
from tailscale_mcp.gateway import TailscaleGateway, create_gateway
from tailscale_mcp.mcp_server.tools import TOOLS
from tailscale_mcp.prompts import PROMPTS

logger = structlog.get_logger()


def create_mcp_server(
    settings: Settings | None = None,
    gateway: TailscaleGateway | None = None,
) -> FastMCP:
    """Create and configure the MCP server with all tools and prompts registered.

    Args:
        settings: Application settings. If None, loads from environment.
        gateway: Gateway to run tool calls through. If None, one is built
            for the configured tailscale binary.

    Returns:
        A configured FastMCP instance ready to serve.
    """
    if settings is None:
        from tailscale_mcp.config import get_settings
        settings = get_settings()

    if gateway is None:
        gateway = create_gateway(settings)

    mcp = FastMCP(
        name=settings.mcp_server_name,
        version=settings.mcp_server_version,
        instructions=(
            "Read-only access to the local tailscale CLI. "
            "Only diagnostic subcommands can be run; nothing changes tailnet state."
        ),
    )

    _register_tools(mcp, gateway)
    for prompt_name, prompt_meta in PROMPTS.items():
        _register_prompt(mcp, prompt_name, prompt_meta, gateway)

    logger.info(
        "mcp_server_ready",
        tools_registered=len(TOOLS),
        prompts_registered=len(PROMPTS),
        tailscale_binary=settings.tailscale_binary,
    )

    return mcp


def _register_tools(mcp: FastMCP, gateway: TailscaleGateway) -> None:
    """Register every tailscale tool on the MCP server."""

    async def call(tool_name: str, **arguments: Any) -> str:
        # Unset optionals are left out of the argument bag
        bag = {k: v for k, v in arguments.items() if v is not None}
        try:
            return await gateway.execute(tool_name, bag)
        except GatewayError as exc:
            raise ToolError(str(exc)) from exc

    @mcp.tool(name="tailscale", description=TOOLS["tailscale"]["description"])
    async def run_command(
        command: Annotated[
            str, Field(description="The tailscale subcommand to run (e.g., status, ip, netcheck)")
        ],
        args: Annotated[
            str | None, Field(description="Optional arguments for the command")
        ] = None,
    ) -> str:
        return await call("tailscale", command=command, args=args)

    @mcp.tool(name="get-ip", description=TOOLS["get-ip"]["description"])
    async def get_ip() -> str:
        return await call("get-ip")

    @mcp.tool(name="get-status", description=TOOLS["get-status"]["description"])
    async def get_status(
        active: Annotated[
            bool | None, Field(description="Filter output to only peers with active sessions")
        ] = None,
        json: Annotated[bool | None, Field(description="output in JSON format")] = None,
    ) -> str:
        return await call("get-status", active=active, json=json)

    @mcp.tool(name="network-check", description=TOOLS["network-check"]["description"])
    async def network_check() -> str:
        return await call("network-check")

    @mcp.tool(name="list-exit-nodes", description=TOOLS["list-exit-nodes"]["description"])
    async def list_exit_nodes() -> str:
        return await call("list-exit-nodes")

    @mcp.tool(name="ip-lookup", description=TOOLS["ip-lookup"]["description"])
    async def ip_lookup(
        ip: Annotated[str, Field(description="The Tailscale IP address to look up")],
    ) -> str:
        return await call("ip-lookup", ip=ip)

    @mcp.tool(name="ping-host", description=TOOLS["ping-host"]["description"])
    async def ping_host(
        host: Annotated[str, Field(description="The Tailscale host to ping (hostname or IP)")],
        count: Annotated[
            int | None, Field(description="Number of pings to send (default: 1)")
        ] = None,
    ) -> str:
        return await call("ping-host", host=host, count=count)

    @mcp.tool(name="dns-status", description=TOOLS["dns-status"]["description"])
    async def dns_status() -> str:
        return await call("dns-status")


class GatewayPrompt(Prompt):
    """A canned prompt rendered from live gateway output.

    Composition failures are raised as PromptError so the cause text reaches
    the client unmasked.
    """

    _compose: Any = PrivateAttr()
    _gateway: Any = PrivateAttr()

    def __init__(self, *, compose: Any, gateway: TailscaleGateway, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._compose = compose
        self._gateway = gateway

    async def render(self, arguments: dict[str, Any] | None = None) -> list[PromptMessage]:
        try:
            return await self._compose(self._gateway)
        except PromptCompositionError as exc:
            raise PromptError(str(exc)) from exc


def _register_prompt(
    mcp: FastMCP,
    prompt_name: str,
    prompt_meta: dict[str, Any],
    gateway: TailscaleGateway,
) -> None:
    """Register a single canned prompt on the MCP server."""
    mcp.add_prompt(
        GatewayPrompt(
            name=prompt_name,
            description=prompt_meta["description"],
            compose=prompt_meta["render"],
            gateway=gateway,
        )
    )
