"""Endpoint resolution: explicit endpoint > local agent > global service."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from urllib.parse import urlsplit

from buildless.agent.state import AgentConfig
from buildless.config.constants import WELL_KNOWN, WellKnown
from buildless.config.models import TransportKind
from buildless.core.errors import TransportError


class EndpointSource(StrEnum):
    EXPLICIT = "explicit"
    AGENT = "agent"
    GLOBAL = "global"


@dataclass(frozen=True, slots=True)
class ResolvedEndpoint:
    """Network target for one transport, before credentials are attached."""

    transport: TransportKind
    source: EndpointSource
    scheme: str
    host: str
    port: int | None
    path_prefix: str = ""
    raw: str | None = None
    """Explicit endpoint exactly as the caller gave it."""

    @property
    def url(self) -> str:
        if self.raw is not None:
            return self.raw
        return f"{self.scheme}://{self.host}:{self.port}"


def validate_port(
    port: int,
    transport: TransportKind,  # noqa: ARG001
    constants: WellKnown = WELL_KNOWN,
) -> bool:
    """Whether an agent-reported port may carry data traffic."""
    return port != constants.local_port_control


def _explicit(transport: TransportKind, endpoint: str, path_prefix: str) -> ResolvedEndpoint:
    parts = urlsplit(endpoint)
    try:
        port = parts.port
    except ValueError:
        # Kept verbatim; the transport builder rejects it
        port = None
    return ResolvedEndpoint(
        transport=transport,
        source=EndpointSource.EXPLICIT,
        scheme=parts.scheme,
        host=parts.hostname or "",
        port=port,
        path_prefix=path_prefix,
        raw=endpoint,
    )


def resolve_endpoint(
    transport: TransportKind,
    endpoint: str | None = None,
    use_agent: bool = True,
    agent: AgentConfig | None = None,
    constants: WellKnown = WELL_KNOWN,
) -> ResolvedEndpoint:
    """Pick exactly one endpoint source for the transport.

    Precedence:
    1. explicit endpoint, verbatim
    2. local agent, when enabled and its config parsed; an agent port equal to
       the control port is replaced by the transport's local data port
    3. global hosted service

    Raises:
        TransportError: For the platform-native transport.
    """
    if transport is TransportKind.PLATFORM_NATIVE:
        raise TransportError.not_implemented(transport.value)
    transport = transport.resolved()

    if transport is TransportKind.HTTP_OBJECT_STORE:
        path_prefix = constants.http_prefix
        local_scheme, local_port = "http", constants.local_port_http
        global_scheme, global_port = "https", constants.global_port_https
    else:
        # Agent traffic stays on the machine; direct-to-global is TLS
        path_prefix = ""
        local_scheme, local_port = "redis", constants.local_port_resp
        global_scheme, global_port = "rediss", constants.global_port_resp

    if endpoint is not None:
        return _explicit(transport, endpoint, path_prefix)

    if use_agent and agent is not None:
        port = agent.port if validate_port(agent.port, transport, constants) else local_port
        return ResolvedEndpoint(
            transport=transport,
            source=EndpointSource.AGENT,
            scheme=local_scheme,
            host=constants.local_host,
            port=port,
            path_prefix=path_prefix,
        )

    return ResolvedEndpoint(
        transport=transport,
        source=EndpointSource.GLOBAL,
        scheme=global_scheme,
        host=constants.global_host,
        port=global_port,
        path_prefix=path_prefix,
    )
