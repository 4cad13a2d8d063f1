"""Client handles for the two cache transports.

The object store is a WebDAV-style HTTP file store rooted at the configured
prefix; it is served by an httpx client with structlog request/response
hooks. The key-value transport is a redis-py client built from a connection
URL. Neither builder opens a connection.
"""

from __future__ import annotations

from types import TracebackType

import httpx
import redis
import structlog

from buildless.cache.credentials import ObjectStoreTarget
from buildless.core.errors import BackendError

logger = structlog.get_logger()

DEFAULT_TIMEOUT_SEC = 30.0


def _log_request(request: httpx.Request) -> None:
    logger.debug("object_store_request", method=request.method, url=str(request.url))


def _log_response(response: httpx.Response) -> None:
    request = response.request
    log = logger.debug if response.is_success or response.status_code == 404 else logger.warning
    log(
        "object_store_response",
        method=request.method,
        url=str(request.url),
        status=response.status_code,
    )


class ObjectStoreClient:
    """Cache entries as files under the store root.

    Keys are paths relative to the root; a leading slash is ignored.
    """

    def __init__(self, client: httpx.Client, target: ObjectStoreTarget) -> None:
        self._client = client
        self.target = target

    @property
    def base_url(self) -> str:
        return str(self._client.base_url)

    def read(self, key: str) -> bytes | None:
        """Entry contents, or None when the entry does not exist."""
        response = self._client.get(key)
        if response.status_code == 404:
            return None
        response.raise_for_status()
        return response.content

    def write(self, key: str, data: bytes) -> None:
        response = self._client.put(key, content=data)
        response.raise_for_status()

    def exists(self, key: str) -> bool:
        response = self._client.head(key)
        if response.status_code == 404:
            return False
        response.raise_for_status()
        return True

    def delete(self, key: str) -> None:
        """Remove an entry. Missing entries are not an error."""
        response = self._client.delete(key)
        if response.status_code != 404:
            response.raise_for_status()

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> ObjectStoreClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def build_object_store(
    target: ObjectStoreTarget,
    *,
    timeout: float = DEFAULT_TIMEOUT_SEC,
    transport: httpx.BaseTransport | None = None,
) -> ObjectStoreClient:
    """Build the object-store handle for a configured target.

    Raises:
        BackendError: If the endpoint is not an absolute http(s) URL.
    """
    shown = redact_url(target.endpoint)
    try:
        url = httpx.URL(target.endpoint)
    except httpx.InvalidURL as e:
        raise BackendError.build_failed("https", shown, str(e)) from e
    if url.scheme not in ("http", "https"):
        raise BackendError.build_failed("https", shown, f"unsupported scheme '{url.scheme}'")
    if not url.host:
        raise BackendError.build_failed("https", shown, "missing host")

    auth = None
    username, secret = target.credentials.username, target.credentials.secret
    if username is not None and secret is not None:
        auth = httpx.BasicAuth(username, secret)

    client = httpx.Client(
        base_url=str(url).rstrip("/") + target.root,
        auth=auth,
        timeout=timeout,
        transport=transport,
        event_hooks={"request": [_log_request], "response": [_log_response]},
    )
    return ObjectStoreClient(client, target)


def redact_url(url: str) -> str:
    """Connection URL with any password masked."""
    scheme, sep, rest = url.partition("://")
    # Keys are spliced unescaped, so the password may itself contain "/".
    userinfo, at, location = rest.rpartition("@")
    if not sep or not at:
        return url
    user, colon, _ = userinfo.partition(":")
    masked = f"{user}:***" if colon else user
    return f"{scheme}://{masked}@{location}"


def build_kv_client(url: str, *, timeout: float = DEFAULT_TIMEOUT_SEC) -> redis.Redis:
    """Build the key-value handle from a redis connection URL.

    Raises:
        BackendError: If redis-py rejects the URL.
    """
    try:
        return redis.Redis.from_url(
            url,
            socket_timeout=timeout,
            socket_connect_timeout=timeout,
        )
    except ValueError as e:
        raise BackendError.build_failed("resp", redact_url(url), str(e)) from e
