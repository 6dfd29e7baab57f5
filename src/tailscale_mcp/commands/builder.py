"""Argument-vector construction for tailscale subcommands.

SECURITY-CRITICAL: only read-only subcommands are ever built. The raw
`tailscale` tool is checked against SAFE_COMMANDS; every other tool
hard-codes its subcommand. Argument vectors go straight to exec, never
through a shell.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from tailscale_mcp.errors import CommandValidationError

# Read-only tailscale subcommands the raw tool may run
SAFE_COMMANDS: frozenset[str] = frozenset({
    "netcheck",
    "ip",
    "dns",
    "status",
    "metrics",
    "ping",
    "version",
    "exit-node",
    "whois",
})


@dataclass(frozen=True)
class BuiltCommand:
    """A validated argument vector ready to hand to the runner.

    Attributes:
        tool_name: The MCP tool that produced this command.
        argv: Arguments passed to the tailscale binary, subcommand first.
        failure_context: Prefix for the error reported if the call fails.
    """

    tool_name: str
    argv: tuple[str, ...]
    failure_context: str


def get_str(arguments: Mapping[str, Any], key: str, default: str | None = None) -> str | None:
    """Return arguments[key] if it is a string, else the default."""
    value = arguments.get(key)
    return value if isinstance(value, str) else default


def get_bool(arguments: Mapping[str, Any], key: str, default: bool = False) -> bool:
    """Return arguments[key] if it is a bool, else the default."""
    value = arguments.get(key)
    return value if isinstance(value, bool) else default


def get_number(arguments: Mapping[str, Any], key: str) -> float | None:
    """Return arguments[key] if it is a finite int or float (not a bool), else None."""
    value = arguments.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return value


def require_str(arguments: Mapping[str, Any], key: str) -> str:
    """Return a required, non-empty string argument.

    Raises:
        CommandValidationError: If the key is absent, empty or not a string.
    """
    value = get_str(arguments, key)
    if not value:
        raise CommandValidationError(f"missing required parameter: {key}")
    return value


def build_raw_command(arguments: Mapping[str, Any]) -> BuiltCommand:
    """Build `tailscale <command> [args...]` for an allow-listed command."""
    command = get_str(arguments, "command")
    if command is None:
        raise CommandValidationError("missing required parameter: command")
    if command not in SAFE_COMMANDS:
        raise CommandValidationError(
            f"unsafe command '{command}' not allowed - only read-only commands permitted"
        )

    argv = [command]
    extra = get_str(arguments, "args")
    if extra:
        argv.extend(extra.split())

    return BuiltCommand("tailscale", tuple(argv), "command failed")


def build_get_ip(arguments: Mapping[str, Any]) -> BuiltCommand:
    return BuiltCommand("get-ip", ("ip",), "failed to get Tailscale IP")


def build_get_status(arguments: Mapping[str, Any]) -> BuiltCommand:
    """Build `tailscale status [--active] [--json]`."""
    argv = ["status"]
    if get_bool(arguments, "active"):
        argv.append("--active")
    if get_bool(arguments, "json"):
        argv.append("--json")
    return BuiltCommand("get-status", tuple(argv), "failed to get Tailscale status")


def build_network_check(arguments: Mapping[str, Any]) -> BuiltCommand:
    return BuiltCommand("network-check", ("netcheck",), "network check failed")


def build_list_exit_nodes(arguments: Mapping[str, Any]) -> BuiltCommand:
    return BuiltCommand("list-exit-nodes", ("exit-node", "list"), "failed to list exit nodes")


def build_ip_lookup(arguments: Mapping[str, Any]) -> BuiltCommand:
    ip = require_str(arguments, "ip")
    return BuiltCommand("ip-lookup", ("whois", ip), f"failed to look up IP {ip}")


def build_ping_host(arguments: Mapping[str, Any]) -> BuiltCommand:
    """Build `tailscale ping <host> [-c <count>]`.

    The count is only honoured when it is a number greater than zero; it is
    truncated to an integer.
    """
    host = require_str(arguments, "host")
    argv = ["ping", host]
    count = get_number(arguments, "count")
    if count is not None and count > 0:
        argv.extend(["-c", str(int(count))])
    return BuiltCommand("ping-host", tuple(argv), "ping failed")


def build_dns_status(arguments: Mapping[str, Any]) -> BuiltCommand:
    return BuiltCommand("dns-status", ("dns", "status"), "failed to get DNS status")


BuildFn = Callable[[Mapping[str, Any]], BuiltCommand]


class CommandBuilder:
    """Maps tool names to the functions that build their argument vectors."""

    def __init__(self) -> None:
        self._builders: dict[str, BuildFn] = {}

    def register(self, tool_name: str, build_fn: BuildFn) -> None:
        """Register the builder for a tool."""
        self._builders[tool_name] = build_fn

    @property
    def tool_names(self) -> list[str]:
        """Registered tool names, in registration order."""
        return list(self._builders)

    def build(self, tool_name: str, arguments: Mapping[str, Any]) -> BuiltCommand:
        """Build a validated command for a tool call.

        Args:
            tool_name: The MCP tool name.
            arguments: The call's argument bag. Unknown keys are ignored.

        Returns:
            The BuiltCommand to run.

        Raises:
            CommandValidationError: If the tool is unknown or arguments are invalid.
        """
        build_fn = self._builders.get(tool_name)
        if build_fn is None:
            raise CommandValidationError(f"unknown tool: {tool_name}")
        return build_fn(arguments)


def create_default_command_builder() -> CommandBuilder:
    """Create a CommandBuilder with every tailscale tool registered."""
    builder = CommandBuilder()
    builder.register("tailscale", build_raw_command)
    builder.register("get-ip", build_get_ip)
    builder.register("get-status", build_get_status)
    builder.register("network-check", build_network_check)
    builder.register("list-exit-nodes", build_list_exit_nodes)
    builder.register("ip-lookup", build_ip_lookup)
    builder.register("ping-host", build_ping_host)
    builder.register("dns-status", build_dns_status)
    return builder
