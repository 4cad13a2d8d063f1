"""Local agent discovery."""

from buildless.agent.state import (
    AgentConfig,
    AgentEndpoint,
    agent_paths,
    probe_agent,
    read_agent_config,
)

__all__ = [
    "AgentConfig",
    "AgentEndpoint",
    "agent_paths",
    "probe_agent",
    "read_agent_config",
]
