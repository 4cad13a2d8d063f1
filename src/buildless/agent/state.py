"""Local agent discovery via rendezvous files.

The agent publishes two files: a service-instance marker (installed) and a
JSON config (running). Both are untrusted local state. A missing or malformed
config means "no agent" and never fails resolution.
"""

from __future__ import annotations

import sys
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from buildless.config.constants import PORT_MAX, PORT_MIN, WELL_KNOWN, AgentPaths, WellKnown
from buildless.core.errors import PlatformError

PID_MAX = 2**32 - 1

_UNIX_PLATFORMS = ("linux", "darwin", "freebsd", "openbsd", "netbsd", "sunos", "aix", "cygwin")


class AgentEndpoint(BaseModel):
    """One interface exposed by the agent."""

    model_config = ConfigDict(frozen=True, strict=True)

    port: int = Field(ge=PORT_MIN, le=PORT_MAX)
    socket: str | None = None


class AgentConfig(BaseModel):
    """Agent-reported configuration from buildless-agent.json."""

    model_config = ConfigDict(frozen=True, strict=True)

    pid: int = Field(ge=0, le=PID_MAX)
    port: int = Field(ge=PORT_MIN, le=PORT_MAX)
    socket: str | None = None
    control: AgentEndpoint | None = None


def agent_paths(platform: str = sys.platform, constants: WellKnown = WELL_KNOWN) -> AgentPaths:
    """Rendezvous file locations for the host platform.

    Raises:
        PlatformError: On platforms other than Windows and Unix-likes.
    """
    if platform == "win32":
        return constants.agent_paths_windows
    if platform.startswith(_UNIX_PLATFORMS):
        return constants.agent_paths_unix
    raise PlatformError.unsupported(platform)


def read_agent_config(path: Path) -> AgentConfig | None:
    """Parse the agent config file. Missing or invalid files yield None."""
    try:
        return AgentConfig.model_validate_json(path.read_bytes())
    except (OSError, ValidationError):
        return None


def probe_agent(paths: AgentPaths, use_agent: bool | None = None) -> AgentConfig | None:
    """Point-in-time probe for a usable local agent.

    The agent is usable when agent use is enabled (unset means enabled), both
    rendezvous files exist, and the config parses.
    """
    if use_agent is False:
        return None
    if not (paths.instance.exists() and paths.config.exists()):
        return None
    return read_agent_config(paths.config)
