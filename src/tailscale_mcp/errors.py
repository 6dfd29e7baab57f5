"""Exception hierarchy for the Tailscale MCP gateway.

Validation errors are raised before any process is spawned. Spawn and
execution errors come from the command runner. Gateway and prompt errors
are the boundary errors handed back to MCP clients.
"""

from __future__ import annotations


def format_failure(context: str, cause: str, output: str | None = None) -> str:
    """Render a failure as '<context>: <cause>' plus captured output, if any."""
    message = f"{context}: {cause}"
    if output:
        message += f"\nOutput: {output}"
    return message


class TailscaleMCPError(Exception):
    """Base class for all gateway errors."""


class CommandValidationError(TailscaleMCPError):
    """Raised when a tool call is rejected before spawning a process."""


class CommandSpawnError(TailscaleMCPError):
    """Raised when the tailscale executable cannot be started."""


class CommandExecutionError(TailscaleMCPError):
    """Raised when the tailscale process exits with a non-zero status.

    Attributes:
        returncode: The process exit code.
        output: Merged stdout/stderr captured before exit.
    """

    def __init__(self, returncode: int, output: str = "") -> None:
        super().__init__(f"exit status {returncode}")
        self.returncode = returncode
        self.output = output


class GatewayError(TailscaleMCPError):
    """A failed tool call, as reported to the MCP client.

    Attributes:
        tool_name: The tool that failed.
        cause: Human-readable cause (validation text, spawn error or exit status).
        output: Output captured from the process, if any.
    """

    def __init__(
        self,
        tool_name: str,
        message: str,
        cause: str,
        output: str | None = None,
    ) -> None:
        super().__init__(message)
        self.tool_name = tool_name
        self.cause = cause
        self.output = output


class PromptCompositionError(TailscaleMCPError):
    """Raised when any invocation behind a prompt fails."""

    def __init__(self, prompt_name: str, message: str) -> None:
        super().__init__(message)
        self.prompt_name = prompt_name
