"""API key attachment for both transports."""

from __future__ import annotations

from dataclasses import dataclass, field

from buildless.cache.endpoint import ResolvedEndpoint
from buildless.config.constants import WELL_KNOWN, WellKnown


@dataclass(frozen=True, slots=True)
class Credentials:
    username: str | None = None
    secret: str | None = field(default=None, repr=False)

    @property
    def present(self) -> bool:
        return self.username is not None and self.secret is not None


@dataclass(frozen=True, slots=True)
class ObjectStoreTarget:
    """Configured object-store target: endpoint, storage root, credentials."""

    endpoint: str
    root: str
    credentials: Credentials = field(default_factory=Credentials)


def credentials_for(api_key: str | None, constants: WellKnown = WELL_KNOWN) -> Credentials:
    if api_key is None:
        return Credentials()
    return Credentials(username=constants.apikey_username, secret=api_key)


def attach_http(
    endpoint: ResolvedEndpoint,
    api_key: str | None,
    constants: WellKnown = WELL_KNOWN,
) -> ObjectStoreTarget:
    """Object-store target with basic-auth credentials when a key is given."""
    return ObjectStoreTarget(
        endpoint=endpoint.url,
        root=endpoint.path_prefix,
        credentials=credentials_for(api_key, constants),
    )


def attach_resp(
    endpoint: ResolvedEndpoint,
    api_key: str | None,
    constants: WellKnown = WELL_KNOWN,
) -> str:
    """Redis connection string, with ``apikey:<key>@`` spliced in when a key is given.

    The key is inserted as-is; characters that need URL escaping are the
    caller's responsibility. An explicit URI that already carries userinfo is
    returned unchanged.
    """
    creds = credentials_for(api_key, constants)
    url = endpoint.url
    if not creds.present:
        return url
    scheme, sep, rest = url.partition("://")
    if not sep or "@" in rest.split("/", 1)[0]:
        return url
    return f"{scheme}://{creds.username}:{creds.secret}@{rest}"
