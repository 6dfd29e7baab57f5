"""Tailscale MCP — read-only tailscale CLI commands exposed to AI agents over MCP."""

__version__ = "0.0.1"
