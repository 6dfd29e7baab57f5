"""Shared test fixtures for the tailscale-mcp test suite.

Provides a recording fake runner (no real processes) and a gateway factory.
"""

from collections.abc import Callable, Sequence

import pytest
import structlog

from tailscale_mcp.commands.builder import create_default_command_builder
from tailscale_mcp.commands.runner import CommandResult
from tailscale_mcp.gateway import TailscaleGateway


class FakeRunner:
    """Records every argument vector and replays canned output or errors."""

    binary = "tailscale"

    def __init__(
        self,
        outputs: dict[tuple[str, ...], str] | None = None,
        failures: dict[tuple[str, ...], Exception] | None = None,
    ) -> None:
        self.calls: list[tuple[str, ...]] = []
        self._outputs = outputs or {}
        self._failures = failures or {}

    async def run(self, argv: Sequence[str]) -> CommandResult:
        args = tuple(argv)
        self.calls.append(args)
        if args in self._failures:
            raise self._failures[args]
        return CommandResult(
            output=self._outputs.get(args, ""),
            returncode=0,
            elapsed_seconds=0.0,
            argv=args,
        )


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Undo any configure_logging() call so loggers never hold a closed stream."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def make_gateway() -> Callable[..., tuple[TailscaleGateway, FakeRunner]]:
    """Factory for a gateway backed by a FakeRunner."""

    def _make(
        outputs: dict[tuple[str, ...], str] | None = None,
        failures: dict[tuple[str, ...], Exception] | None = None,
    ) -> tuple[TailscaleGateway, FakeRunner]:
        runner = FakeRunner(outputs=outputs, failures=failures)
        gateway = TailscaleGateway(
            command_builder=create_default_command_builder(),
            runner=runner,  # type: ignore[arg-type]
        )
        return gateway, runner

    return _make
