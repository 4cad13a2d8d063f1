"""Tests for lessbuild status command."""

from __future__ import annotations

import json
import os
from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner

from buildless.cache.factory import CacheClientFactory
from buildless.cli import status as status_module
from buildless.cli.main import cli
from buildless.config import loader
from buildless.config.constants import AgentPaths, WellKnown
from buildless.core.logging import get_log_file_path

InstallAgent = Callable[..., AgentPaths]

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, constants: WellKnown) -> None:
    """Isolate env, global config and rendezvous files."""
    for key in list(os.environ):
        if key.upper().startswith("BUILDLESS__"):
            monkeypatch.delenv(key)
    monkeypatch.setattr(loader, "GLOBAL_CONFIG_PATH", tmp_path / "global.yaml")
    monkeypatch.setattr(
        status_module,
        "CacheClientFactory",
        lambda: CacheClientFactory(constants=constants, platform="linux"),
    )


class TestStatusCommand:
    """Tests for status command."""

    def test_given_no_agent_when_status_then_global_endpoint(self) -> None:
        result = runner.invoke(cli, ["status"])

        assert result.exit_code == 0, result.output
        assert "Agent: not detected" in result.output
        assert "Transport: https" in result.output
        assert "Endpoint: https://global.less.build:443 (global)" in result.output
        assert "Root: /cache/generic" in result.output
        assert "API key: not set" in result.output

    def test_given_running_agent_when_status_then_agent_shown(
        self, install_agent: InstallAgent
    ) -> None:
        install_agent(port=5001, pid=321)

        result = runner.invoke(cli, ["status"])

        assert result.exit_code == 0, result.output
        assert "Agent: running (PID 321, port 5001)" in result.output
        assert "Endpoint: http://local.less.build:5001 (agent)" in result.output

    def test_given_no_agent_flag_when_status_then_agent_ignored(
        self, install_agent: InstallAgent
    ) -> None:
        install_agent(port=5001)

        result = runner.invoke(cli, ["status", "--no-agent", "--transport", "resp"])

        assert result.exit_code == 0, result.output
        assert "Endpoint: rediss://global.less.build:6379 (global)" in result.output

    def test_given_json_flag_when_status_then_json_output(self) -> None:
        result = runner.invoke(
            cli, ["status", "--json", "--transport", "resp", "--endpoint", "redis://a:pw@h:1"]
        )

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["transport"] == "resp"
        assert data["source"] == "explicit"
        assert data["url"] == "redis://a:***@h:1"
        assert data["agent"] is None

    def test_given_api_key_env_when_status_then_key_not_printed(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("BUILDLESS__CACHE__API_KEY", "k-secret")

        result = runner.invoke(cli, ["status"])

        assert result.exit_code == 0, result.output
        assert "API key: configured" in result.output
        assert "k-secret" not in result.output

    def test_given_gha_transport_when_status_then_error(self) -> None:
        result = runner.invoke(cli, ["status", "--transport", "gha"])

        assert result.exit_code != 0
        assert "TRANSPORT_NOT_IMPLEMENTED" in result.output

    def test_given_config_file_when_status_then_used(self, tmp_path: Path) -> None:
        config = tmp_path / "custom.yaml"
        config.write_text("cache:\n  endpoint: https://cache.example.com\n")

        result = runner.invoke(cli, ["status", "--config", str(config)])

        assert result.exit_code == 0, result.output
        assert "Endpoint: https://cache.example.com (explicit)" in result.output

    def test_given_logging_section_when_status_then_outputs_applied(self, tmp_path: Path) -> None:
        """The logging section of the config file drives the log outputs."""
        log_file = tmp_path / "logs" / "lessbuild.log"
        config = tmp_path / "custom.yaml"
        config.write_text(
            "logging:\n"
            "  level: DEBUG\n"
            "  outputs:\n"
            f"    - destination: {log_file}\n"
            "      format: json\n"
        )

        result = runner.invoke(cli, ["status", "--config", str(config)])

        assert result.exit_code == 0, result.output
        assert get_log_file_path() == log_file
        events = [json.loads(line)["event"] for line in log_file.read_text().splitlines()]
        assert "agent_probe" in events
