"""Async wrapper around the tailscale executable.

One child process per call. stdout and stderr are merged into a single
blob. There is no timeout: a hung tailscale process hangs the call.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Sequence
from dataclasses import dataclass

import structlog

from tailscale_mcp.errors import CommandExecutionError, CommandSpawnError

logger = structlog.get_logger()


@dataclass(frozen=True)
class CommandResult:
    """Result of a tailscale invocation that exited with status zero."""

    output: str
    returncode: int
    elapsed_seconds: float
    argv: tuple[str, ...]


class CommandRunner:
    """Runs the tailscale binary and captures its combined output.

    Args:
        binary: Executable name or path. Bare names are resolved via PATH.
    """

    def __init__(self, binary: str = "tailscale") -> None:
        self._binary = binary

    @property
    def binary(self) -> str:
        """The executable this runner invokes."""
        return self._binary

    async def run(self, argv: Sequence[str]) -> CommandResult:
        """Run `<binary> *argv` and wait for it to exit.

        Args:
            argv: Arguments after the binary name, subcommand first.

        Returns:
            A CommandResult with the merged stdout/stderr text.

        Raises:
            CommandSpawnError: If the executable cannot be started.
            CommandExecutionError: If the process exits non-zero.
        """
        args = tuple(argv)
        start = time.monotonic()
        try:
            process = await asyncio.create_subprocess_exec(
                self._binary,
                *args,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
        except OSError as exc:
            reason = exc.strerror or str(exc)
            raise CommandSpawnError(
                f"exec: \"{self._binary}\": {reason}"
            ) from exc

        raw_output, _ = await process.communicate()
        output = (raw_output or b"").decode("utf-8", errors="replace")
        elapsed = time.monotonic() - start
        returncode = process.returncode if process.returncode is not None else -1

        await logger.adebug(
            "command_completed",
            binary=self._binary,
            argv=list(args),
            returncode=returncode,
            elapsed_seconds=round(elapsed, 3),
        )

        if returncode != 0:
            raise CommandExecutionError(returncode, output)

        return CommandResult(
            output=output,
            returncode=returncode,
            elapsed_seconds=elapsed,
            argv=args,
        )
