"""Buildless - remote build cache client resolution."""

from buildless.cache.factory import CacheClientFactory, build_cache_client
from buildless.config.models import CacheConfig, TransportKind

__version__ = "0.1.0"

__all__ = [
    "CacheClientFactory",
    "CacheConfig",
    "TransportKind",
    "build_cache_client",
    "__version__",
]
