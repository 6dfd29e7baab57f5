"""Tests for argument-vector construction and the read-only allow-list."""

from __future__ import annotations

import pytest

from tailscale_mcp.commands.builder import (
    SAFE_COMMANDS,
    CommandBuilder,
    build_get_status,
    build_ping_host,
    build_raw_command,
    create_default_command_builder,
    get_bool,
    get_number,
    get_str,
    require_str,
)
from tailscale_mcp.errors import CommandValidationError


class TestTypedLookup:
    """Argument-bag access with typed defaults."""

    def test_get_str_present(self) -> None:
        assert get_str({"ip": "100.64.0.1"}, "ip") == "100.64.0.1"

    def test_get_str_wrong_type_uses_default(self) -> None:
        assert get_str({"ip": 42}, "ip") is None
        assert get_str({"ip": 42}, "ip", default="x") == "x"

    def test_get_bool_absent_is_false(self) -> None:
        assert get_bool({}, "active") is False

    def test_get_bool_ignores_truthy_strings(self) -> None:
        assert get_bool({"active": "yes"}, "active") is False

    def test_get_number_accepts_int_and_float(self) -> None:
        assert get_number({"count": 3}, "count") == 3
        assert get_number({"count": 2.7}, "count") == 2.7

    def test_get_number_rejects_bool(self) -> None:
        assert get_number({"count": True}, "count") is None

    @pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
    def test_get_number_rejects_non_finite(self, value: float) -> None:
        assert get_number({"count": value}, "count") is None

    def test_require_str_missing(self) -> None:
        with pytest.raises(CommandValidationError, match="missing required parameter: host"):
            require_str({}, "host")

    def test_require_str_empty(self) -> None:
        with pytest.raises(CommandValidationError, match="missing required parameter: host"):
            require_str({"host": ""}, "host")


class TestRawCommand:
    """The `tailscale` pass-through tool."""

    def test_allow_list_contents(self) -> None:
        assert SAFE_COMMANDS == {
            "netcheck", "ip", "dns", "status", "metrics",
            "ping", "version", "exit-node", "whois",
        }

    @pytest.mark.parametrize("command", sorted(SAFE_COMMANDS))
    def test_every_safe_command_builds(self, command: str) -> None:
        assert build_raw_command({"command": command}).argv == (command,)

    @pytest.mark.parametrize("command", ["shutdown", "up", "down", "logout", "set", "STATUS", "status "])
    def test_unsafe_command_rejected(self, command: str) -> None:
        with pytest.raises(CommandValidationError, match="not allowed - only read-only commands permitted"):
            build_raw_command({"command": command})

    def test_unsafe_message_exact(self) -> None:
        with pytest.raises(CommandValidationError) as exc_info:
            build_raw_command({"command": "shutdown"})
        assert str(exc_info.value) == (
            "unsafe command 'shutdown' not allowed - only read-only commands permitted"
        )

    def test_missing_command(self) -> None:
        with pytest.raises(CommandValidationError, match="missing required parameter: command"):
            build_raw_command({"args": "--json"})

    def test_empty_command_hits_allow_list(self) -> None:
        with pytest.raises(CommandValidationError) as exc_info:
            build_raw_command({"command": ""})
        assert str(exc_info.value) == (
            "unsafe command '' not allowed - only read-only commands permitted"
        )

    def test_empty_args_adds_nothing(self) -> None:
        assert build_raw_command({"command": "status", "args": ""}).argv == ("status",)

    def test_args_split_in_order(self) -> None:
        built = build_raw_command({"command": "ping", "args": "  peer-1   -c 3\t--verbose "})
        assert built.argv == ("ping", "peer-1", "-c", "3", "--verbose")

    def test_args_split_is_idempotent(self) -> None:
        args = "list  --filter=US"
        once = build_raw_command({"command": "exit-node", "args": args}).argv
        again = build_raw_command({"command": "exit-node", "args": " ".join(once[1:])}).argv
        assert once == again

    def test_non_string_args_ignored(self) -> None:
        assert build_raw_command({"command": "version", "args": 5}).argv == ("version",)

    def test_failure_context(self) -> None:
        assert build_raw_command({"command": "ip"}).failure_context == "command failed"


class TestFixedTools:
    """Tools with hard-coded subcommands."""

    def test_status_plain(self) -> None:
        assert build_get_status({}).argv == ("status",)

    def test_status_active_only(self) -> None:
        assert build_get_status({"active": True}).argv == ("status", "--active")

    def test_status_json_only(self) -> None:
        assert build_get_status({"json": True}).argv == ("status", "--json")

    def test_status_active_and_json_in_order(self) -> None:
        built = build_get_status({"json": True, "active": True})
        assert built.argv == ("status", "--active", "--json")

    def test_status_false_flags(self) -> None:
        assert build_get_status({"active": False, "json": False}).argv == ("status",)

    def test_ping_without_count(self) -> None:
        assert build_ping_host({"host": "peer-1"}).argv == ("ping", "peer-1")

    def test_ping_zero_count_omitted(self) -> None:
        assert build_ping_host({"host": "peer-1", "count": 0}).argv == ("ping", "peer-1")

    def test_ping_negative_count_omitted(self) -> None:
        assert build_ping_host({"host": "peer-1", "count": -2}).argv == ("ping", "peer-1")

    def test_ping_count(self) -> None:
        built = build_ping_host({"host": "100.64.0.2", "count": 3})
        assert built.argv == ("ping", "100.64.0.2", "-c", "3")

    def test_ping_float_count_truncated(self) -> None:
        built = build_ping_host({"host": "peer-1", "count": 3.9})
        assert built.argv == ("ping", "peer-1", "-c", "3")

    @pytest.mark.parametrize("count", [float("inf"), float("nan")])
    def test_ping_non_finite_count_omitted(self, count: float) -> None:
        assert build_ping_host({"host": "peer-1", "count": count}).argv == ("ping", "peer-1")

    def test_ping_requires_host(self) -> None:
        with pytest.raises(CommandValidationError, match="missing required parameter: host"):
            build_ping_host({"count": 3})


class TestCommandBuilder:
    """Registry lookups through CommandBuilder.build()."""

    @pytest.fixture
    def builder(self) -> CommandBuilder:
        return create_default_command_builder()

    def test_all_tools_registered(self, builder: CommandBuilder) -> None:
        assert builder.tool_names == [
            "tailscale", "get-ip", "get-status", "network-check",
            "list-exit-nodes", "ip-lookup", "ping-host", "dns-status",
        ]

    @pytest.mark.parametrize(
        ("tool_name", "expected"),
        [
            ("get-ip", ("ip",)),
            ("network-check", ("netcheck",)),
            ("list-exit-nodes", ("exit-node", "list")),
            ("dns-status", ("dns", "status")),
        ],
    )
    def test_argumentless_tools(self, builder: CommandBuilder, tool_name: str, expected: tuple) -> None:
        assert builder.build(tool_name, {}).argv == expected

    def test_ip_lookup(self, builder: CommandBuilder) -> None:
        built = builder.build("ip-lookup", {"ip": "100.64.0.7"})
        assert built.argv == ("whois", "100.64.0.7")
        assert built.failure_context == "failed to look up IP 100.64.0.7"

    def test_ip_lookup_requires_ip(self, builder: CommandBuilder) -> None:
        with pytest.raises(CommandValidationError, match="missing required parameter: ip"):
            builder.build("ip-lookup", {})

    def test_extra_keys_ignored(self, builder: CommandBuilder) -> None:
        assert builder.build("get-ip", {"unexpected": "value"}).argv == ("ip",)

    def test_unknown_tool(self, builder: CommandBuilder) -> None:
        with pytest.raises(CommandValidationError, match="unknown tool: up"):
            builder.build("up", {})

    def test_built_command_records_tool(self, builder: CommandBuilder) -> None:
        assert builder.build("dns-status", {}).tool_name == "dns-status"
