"""Cache client factory.

Orchestrates one client build:

    START -> AGENT_PROBE -> ENDPOINT_RESOLVED -> CREDENTIALS_ATTACHED -> CLIENT_BUILT

Any step may raise, which aborts the build (FAILED). Nothing is retried and no
state is kept between builds; each build re-probes the agent rendezvous files.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import StrEnum
from typing import TypeAlias, assert_never

import redis
import structlog

from buildless.agent.state import AgentConfig, agent_paths, probe_agent
from buildless.cache.credentials import attach_http, attach_resp
from buildless.cache.endpoint import ResolvedEndpoint, resolve_endpoint
from buildless.cache.transports import (
    DEFAULT_TIMEOUT_SEC,
    ObjectStoreClient,
    build_kv_client,
    build_object_store,
)
from buildless.config.constants import WELL_KNOWN, WellKnown
from buildless.config.models import CacheConfig, TransportKind
from buildless.core.errors import TransportError

logger = structlog.get_logger()

CacheClient: TypeAlias = ObjectStoreClient | redis.Redis


class BuildStage(StrEnum):
    START = "start"
    AGENT_PROBE = "agent_probe"
    ENDPOINT_RESOLVED = "endpoint_resolved"
    CREDENTIALS_ATTACHED = "credentials_attached"
    CLIENT_BUILT = "client_built"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class Resolution:
    """Outcome of everything up to client construction."""

    transport: TransportKind
    agent: AgentConfig | None
    endpoint: ResolvedEndpoint


@dataclass(frozen=True)
class CacheClientFactory:
    """Builds cache client handles.

    Holds only the constants table and the platform name; both are
    substitutable for tests.
    """

    constants: WellKnown = WELL_KNOWN
    platform: str = sys.platform

    def resolve(
        self,
        use_agent: bool | None = None,
        transport: TransportKind | None = None,
        endpoint: str | None = None,
    ) -> Resolution:
        """Probe the agent and pick the endpoint, without building a client.

        Raises:
            PlatformError: Unsupported host platform (before any probing).
            TransportError: Platform-native transport requested.
        """
        kind = transport or TransportKind.AUTO
        paths = agent_paths(self.platform, self.constants)

        _enter(BuildStage.AGENT_PROBE)
        agent = probe_agent(paths, use_agent)
        logger.debug("agent_probe", agent_found=agent is not None, config=str(paths.config))

        resolved = resolve_endpoint(
            kind,
            endpoint=endpoint,
            use_agent=agent is not None,
            agent=agent,
            constants=self.constants,
        )
        _enter(BuildStage.ENDPOINT_RESOLVED)
        logger.debug(
            "endpoint_resolved",
            transport=resolved.transport.value,
            source=resolved.source.value,
            host=resolved.host,
            port=resolved.port,
        )
        return Resolution(transport=resolved.transport, agent=agent, endpoint=resolved)

    def build(
        self,
        use_agent: bool | None = None,
        transport: TransportKind | None = None,
        endpoint: str | None = None,
        api_key: str | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT_SEC,
    ) -> CacheClient:
        """Resolve the backend and build its client handle.

        Raises:
            PlatformError: Unsupported host platform.
            TransportError: Platform-native transport requested.
            BackendError: The transport builder rejected the configuration.
        """
        _enter(BuildStage.START)
        try:
            client = self._build(use_agent, transport, endpoint, api_key, timeout)
        except Exception:
            _enter(BuildStage.FAILED)
            raise
        _enter(BuildStage.CLIENT_BUILT)
        return client

    def _build(
        self,
        use_agent: bool | None,
        transport: TransportKind | None,
        endpoint: str | None,
        api_key: str | None,
        timeout: float,
    ) -> CacheClient:
        resolution = self.resolve(use_agent, transport, endpoint)
        kind = resolution.transport

        if kind is TransportKind.HTTP_OBJECT_STORE:
            target = attach_http(resolution.endpoint, api_key, self.constants)
            _enter(BuildStage.CREDENTIALS_ATTACHED)
            return build_object_store(target, timeout=timeout)
        if kind is TransportKind.RESP_KEY_VALUE:
            url = attach_resp(resolution.endpoint, api_key, self.constants)
            _enter(BuildStage.CREDENTIALS_ATTACHED)
            return build_kv_client(url, timeout=timeout)
        if kind is TransportKind.AUTO or kind is TransportKind.PLATFORM_NATIVE:
            # resolve() normalizes AUTO and rejects PLATFORM_NATIVE
            raise TransportError.not_implemented(kind.value)
        assert_never(kind)


def _enter(stage: BuildStage) -> None:
    logger.debug("cache_client_stage", stage=stage.value)


def build_cache_client(
    config: CacheConfig,
    *,
    constants: WellKnown = WELL_KNOWN,
    platform: str = sys.platform,
) -> CacheClient:
    """Build the cache client described by a CacheConfig."""
    factory = CacheClientFactory(constants=constants, platform=platform)
    return factory.build(
        use_agent=config.use_agent,
        transport=config.transport,
        endpoint=config.endpoint,
        api_key=config.api_key,
        timeout=config.timeout_sec,
    )
