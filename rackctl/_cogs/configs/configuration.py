"""
All configuration flags, options, settings to fine-tune the client.

All settings are grouped semantically just for convenience
(instead of a flat mega-object with all the values in it).

Some of the settings are flags, some are scalars, some are optional,
some are not (but all of them have reasonable defaults).

The settings are created once per :class:`APIContext` and can be modified
between the requests: every request reads them anew.
"""
import dataclasses

from rackctl._cogs.structs import credentials


@dataclasses.dataclass
class NetworkingSettings:

    request_timeout: float | None = 5 * 60  # == aiohttp.client.DEFAULT_TIMEOUT
    """
    A timeout for the whole API request (in seconds): from sending to reading.
    Set to ``None`` to disable and to rely on the server-side timeouts.
    """

    connect_timeout: float | None = None
    """
    A timeout for the connection establishment (in seconds),
    as part of the whole request time. ``None`` means no separate limit.
    """


@dataclasses.dataclass
class CachingSettings:

    enabled: bool = False
    """
    Should the cacheable reads (listings, limits, versions) be served
    from the in-memory response cache while the cached values are fresh?

    Disabled by default: every read goes to the API.
    Individual requests can bypass the cache with ``RequestOptions(cache=False)``.
    """

    ttl: float = 60.0
    """
    For how long (in seconds) a cached response is considered fresh.
    """


@dataclasses.dataclass
class AuthenticationSettings:

    auth_url: str = credentials.DEFAULT_AUTH_URL
    """
    The authentication service to exchange the API keys for the tokens.
    Used only if the credentials do not specify their own URL.
    """

    user_agent: str | None = None
    """
    The ``User-Agent`` header to self-identify with.
    If ``None``, it is ``rackctl/<version>``.
    """


@dataclasses.dataclass
class ClientSettings:
    networking: NetworkingSettings = dataclasses.field(default_factory=NetworkingSettings)
    caching: CachingSettings = dataclasses.field(default_factory=CachingSettings)
    authentication: AuthenticationSettings = dataclasses.field(default_factory=AuthenticationSettings)
