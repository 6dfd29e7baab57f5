"""Command gateway — turns a tool call into exactly one tailscale invocation.

Every MCP tool call flows through TailscaleGateway.execute():

1. The CommandBuilder validates the call and builds the argument vector
2. The CommandRunner spawns tailscale and waits for it to exit
3. Output is returned verbatim, or the failure becomes a GatewayError

The gateway holds no per-call state and never retries.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog

from tailscale_mcp.commands.builder import CommandBuilder, create_default_command_builder
from tailscale_mcp.commands.runner import CommandRunner
from tailscale_mcp.config import Settings
from tailscale_mcp.errors import (
    CommandExecutionError,
    CommandSpawnError,
    CommandValidationError,
    GatewayError,
    format_failure,
)

logger = structlog.get_logger()


class TailscaleGateway:
    """Validates tool calls and runs them against the tailscale CLI.

    Args:
        command_builder: Builds validated argument vectors from tool calls.
        runner: Spawns the tailscale binary.
    """

    def __init__(self, command_builder: CommandBuilder, runner: CommandRunner) -> None:
        self._builder = command_builder
        self._runner = runner

    @property
    def tool_names(self) -> list[str]:
        return self._builder.tool_names

    async def execute(self, tool_name: str, arguments: Mapping[str, Any] | None = None) -> str:
        """Run a tool call and return the captured output.

        Args:
            tool_name: The MCP tool name (e.g. "get-status").
            arguments: The call's argument bag.

        Returns:
            Merged stdout/stderr of the tailscale process, unmodified.

        Raises:
            GatewayError: On validation failure, spawn failure or non-zero exit.
        """
        try:
            command = self._builder.build(tool_name, arguments or {})
        except CommandValidationError as exc:
            await logger.awarning(
                "command_validation_failed",
                tool_name=tool_name,
                error=str(exc),
            )
            raise GatewayError(tool_name, str(exc), cause=str(exc)) from exc

        try:
            result = await self._runner.run(command.argv)
        except CommandSpawnError as exc:
            await logger.aerror(
                "command_spawn_failed",
                tool_name=tool_name,
                argv=list(command.argv),
                error=str(exc),
            )
            raise GatewayError(
                tool_name,
                format_failure(command.failure_context, str(exc)),
                cause=str(exc),
            ) from exc
        except CommandExecutionError as exc:
            await logger.awarning(
                "command_failed",
                tool_name=tool_name,
                argv=list(command.argv),
                returncode=exc.returncode,
            )
            raise GatewayError(
                tool_name,
                format_failure(command.failure_context, str(exc), exc.output),
                cause=str(exc),
                output=exc.output or None,
            ) from exc

        return result.output


def create_gateway(settings: Settings) -> TailscaleGateway:
    """Create a gateway wired to the configured tailscale binary."""
    return TailscaleGateway(
        command_builder=create_default_command_builder(),
        runner=CommandRunner(binary=settings.tailscale_binary),
    )
