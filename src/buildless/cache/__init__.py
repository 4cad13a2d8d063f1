"""Cache backend resolution and client construction."""

from buildless.cache.credentials import (
    Credentials,
    ObjectStoreTarget,
    attach_http,
    attach_resp,
    credentials_for,
)
from buildless.cache.endpoint import (
    EndpointSource,
    ResolvedEndpoint,
    resolve_endpoint,
    validate_port,
)
from buildless.cache.factory import (
    BuildStage,
    CacheClient,
    CacheClientFactory,
    Resolution,
    build_cache_client,
)
from buildless.cache.transports import ObjectStoreClient, build_kv_client, build_object_store

__all__ = [
    "BuildStage",
    "CacheClient",
    "CacheClientFactory",
    "Credentials",
    "EndpointSource",
    "ObjectStoreClient",
    "ObjectStoreTarget",
    "Resolution",
    "ResolvedEndpoint",
    "attach_http",
    "attach_resp",
    "build_cache_client",
    "build_kv_client",
    "build_object_store",
    "credentials_for",
    "resolve_endpoint",
    "validate_port",
]
