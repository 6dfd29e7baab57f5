"""MCP tool definitions — all read-only tailscale subcommands.

Parameter schemas live on the handler signatures in server.py; FastMCP
derives the JSON schema from them.
"""

from __future__ import annotations

# Tool metadata for registration
TOOLS = {
    "tailscale": {
        "description": "Run a tailscale command",
    },
    "get-ip": {
        "description": "Get Tailscale IP addresses",
    },
    "get-status": {
        "description": "Get Tailscale status",
    },
    "network-check": {
        "description": "Check Tailscale network connectivity",
    },
    "list-exit-nodes": {
        "description": "List available Tailscale exit nodes",
    },
    "ip-lookup": {
        "description": "Look up information about a Tailscale IP",
    },
    "ping-host": {
        "description": "Ping a Tailscale host",
    },
    "dns-status": {
        "description": "Get DNS diagnostic information",
    },
}
