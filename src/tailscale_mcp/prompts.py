"""Canned diagnostic prompts built from live tailscale output.

Each prompt runs one or two gateway calls and drops their output verbatim
into a fixed template. If any call fails the prompt fails; nothing partial
is returned.
"""

from __future__ import annotations

from typing import Any

import structlog
from mcp.types import PromptMessage, TextContent

from tailscale_mcp.errors import GatewayError, PromptCompositionError, format_failure
from tailscale_mcp.gateway import TailscaleGateway

logger = structlog.get_logger()

DIAGNOSE_NETWORK_TEMPLATE = """\
Please analyze the following Tailscale network diagnostic information and provide insights:

## Network Check Results:
{netcheck}

## Tailscale Status:
{status}

What does this information tell us about the Tailscale network connectivity? \
Are there any issues that need to be addressed?"""

ANALYZE_PEERS_TEMPLATE = """\
Please analyze the following peers in my Tailscale network:

{status}

Can you provide a summary of the devices in my tailnet, their connection status, \
and any notable information?"""

EXIT_NODE_TEMPLATE = """\
Here are the available exit nodes in my tailnet:

{exit_nodes}

Based on this information, what would you recommend for choosing an exit node? \
Please explain the factors to consider when selecting an exit node and provide \
specific recommendations based on the available nodes."""


def user_message(text: str) -> list[PromptMessage]:
    """Wrap prompt text as a single user-role text message."""
    return [PromptMessage(role="user", content=TextContent(type="text", text=text))]


async def _collect(
    gateway: TailscaleGateway,
    prompt_name: str,
    tool_name: str,
    failure_context: str,
    arguments: dict[str, Any] | None = None,
) -> str:
    """Run one gateway call on behalf of a prompt."""
    try:
        return await gateway.execute(tool_name, arguments)
    except GatewayError as exc:
        await logger.awarning(
            "prompt_failed",
            prompt_name=prompt_name,
            tool_name=tool_name,
            error=exc.cause,
        )
        raise PromptCompositionError(
            prompt_name, format_failure(failure_context, exc.cause, exc.output)
        ) from exc


async def diagnose_network(gateway: TailscaleGateway) -> list[PromptMessage]:
    netcheck = await _collect(gateway, "diagnose-network", "network-check", "failed to run netcheck")
    status = await _collect(gateway, "diagnose-network", "get-status", "failed to get status")
    return user_message(DIAGNOSE_NETWORK_TEMPLATE.format(netcheck=netcheck, status=status))


async def analyze_peers(gateway: TailscaleGateway) -> list[PromptMessage]:
    status = await _collect(gateway, "analyze-peers", "get-status", "failed to get peers")
    return user_message(ANALYZE_PEERS_TEMPLATE.format(status=status))


async def exit_node_recommendations(gateway: TailscaleGateway) -> list[PromptMessage]:
    exit_nodes = await _collect(
        gateway, "exit-node-recommendations", "list-exit-nodes", "failed to list exit nodes"
    )
    return user_message(EXIT_NODE_TEMPLATE.format(exit_nodes=exit_nodes))


# Prompt metadata for registration
PROMPTS: dict[str, dict[str, Any]] = {
    "diagnose-network": {
        "description": "Diagnose Tailscale network connectivity issues",
        "render": diagnose_network,
    },
    "analyze-peers": {
        "description": "Get information about peers in your tailnet",
        "render": analyze_peers,
    },
    "exit-node-recommendations": {
        "description": "Get recommendations for exit nodes",
        "render": exit_node_recommendations,
    },
}
