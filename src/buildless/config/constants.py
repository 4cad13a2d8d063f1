"""Well-known Buildless constants.

These are protocol constants of the Buildless service and agent, not user
configuration. They live in a single immutable table so resolution code can be
exercised against a substituted table in tests.

For configurable values, see models.py (CacheConfig, LoggingConfig).
"""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, slots=True)
class AgentPaths:
    """Rendezvous files published by the local agent."""

    instance: Path
    """Service-instance marker; existence means the agent is installed."""

    config: Path
    """Agent JSON config; existence means the agent is running."""


@dataclass(frozen=True, slots=True)
class WellKnown:
    """Hostnames, ports and paths of the Buildless service."""

    # =========================================================================
    # Local agent
    # =========================================================================

    local_host: str = "local.less.build"
    local_port_control: int = 42010
    """Agent control channel. Never valid for data traffic."""

    local_port_http: int = 42011
    local_port_resp: int = 42012

    # =========================================================================
    # Global hosted service
    # =========================================================================

    global_host: str = "global.less.build"
    global_port_https: int = 443
    global_port_resp: int = 6379

    # =========================================================================
    # Protocol details
    # =========================================================================

    http_prefix: str = "/cache/generic"
    """Storage root for the object-store transport."""

    apikey_username: str = "apikey"
    """Username paired with an API key in basic auth and redis URLs."""

    # =========================================================================
    # Rendezvous files
    # =========================================================================

    agent_paths_unix: AgentPaths = field(
        default_factory=lambda: AgentPaths(
            instance=Path("/var/tmp/buildless/buildless-service.id"),
            config=Path("/var/tmp/buildless/buildless-agent.json"),
        )
    )
    agent_paths_windows: AgentPaths = field(
        default_factory=lambda: AgentPaths(
            instance=Path("C:\\ProgramData\\buildless\\buildless-service.id"),
            config=Path("C:\\ProgramData\\buildless\\buildless-agent.json"),
        )
    )


WELL_KNOWN = WellKnown()
"""Process-wide constants table."""

PORT_MIN = 0
PORT_MAX = 65535
"""Valid port range."""
