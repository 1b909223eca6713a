import logging
import urllib.parse
from collections.abc import Mapping
from types import TracebackType

import aiohttp

from rackctl._cogs.clients import errors
from rackctl._cogs.configs import configuration
from rackctl._cogs.helpers import typedefs, versions
from rackctl._cogs.structs import caches, credentials, options as options_

logger = logging.getLogger(__name__)


class APIContext:
    """
    A container for an aiohttp session, the credentials, and the caches.

    The context is created once by the caller, and is then passed explicitly
    to every API operation. It is the only state of the client: there are no
    global sessions, tokens, or caches -- several independent contexts
    (e.g. for different accounts) can co-exist in the same process.

    The login happens transparently on the first request if there is
    no authenticated session yet (see :meth:`ensure_authenticated`).
    If the token is already known, it can be provided as ``login_info``.

    The context must be closed after use to release the HTTP connections,
    either explicitly with :meth:`close`, or via ``async with``.
    """

    # The explicit state of the client; nothing is stored globally.
    settings: configuration.ClientSettings
    credentials: credentials.ConnectionInfo | None
    login_info: credentials.LoginInfo | None
    cache: caches.ResponseCache
    logger: typedefs.Logger

    def __init__(
            self,
            info: credentials.ConnectionInfo | None = None,
            *,
            settings: configuration.ClientSettings | None = None,
            login_info: credentials.LoginInfo | None = None,
            session: aiohttp.ClientSession | None = None,
            cache: caches.ResponseCache | None = None,
            logger: typedefs.Logger | None = None,
    ) -> None:
        super().__init__()
        self.settings = settings if settings is not None else configuration.ClientSettings()
        self.credentials = info
        self.login_info = login_info
        self.cache = cache if cache is not None else caches.ResponseCache()
        self.logger = logger if logger is not None else logging.getLogger('rackctl.api')
        self._session = session
        self._own_session = session is None

    async def __aenter__(self) -> "APIContext":
        return self

    async def __aexit__(
            self,
            exc_type: type[BaseException] | None,
            exc_val: BaseException | None,
            exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    @property
    def session(self) -> aiohttp.ClientSession:
        # Created on first use only: aiohttp needs a running event loop for that.
        if self._session is None:
            self._session = self.make_aiohttp_session()
        return self._session

    def make_aiohttp_session(self) -> aiohttp.ClientSession:
        user_agent = self.settings.authentication.user_agent
        user_agent = user_agent or f'rackctl/{versions.version or "unknown"}'
        return aiohttp.ClientSession(
            headers={
                'User-Agent': user_agent,
                'Accept': 'application/json',
            },
        )

    async def ensure_authenticated(
            self,
            options: options_.RequestOptions | None = None,
    ) -> credentials.LoginInfo:
        """
        Login if there is no authenticated session yet; return the session.
        """
        if self.login_info is None:
            if self.credentials is None:
                raise credentials.LoginError("Neither credentials nor a token are provided.")
            self.login_info = await login(
                self.credentials,
                session=self.session,
                settings=self.settings,
                headers=options.headers if options is not None else None,
            )
        return self.login_info

    def invalidate(self) -> None:
        """
        Forget the current session, so that the next request logs in again.

        Normally called when the token is not accepted by the API anymore.
        """
        if self.login_info is not None:
            self.logger.debug("Dropping the session token; will re-login on the next request.")
        self.login_info = None

    def build_url(self, path: str, *, no_service_path: bool = False) -> str:
        if self.login_info is None:
            raise RuntimeError("The URLs can be built only for the authenticated sessions.")
        endpoint = self.login_info.endpoint.rstrip('/')
        if no_service_path:
            parsed = urllib.parse.urlsplit(endpoint)
            endpoint = f'{parsed.scheme}://{parsed.netloc}'
        return endpoint + '/' + path.lstrip('/')

    async def close(self) -> None:
        # Only close what we have opened: the user-provided sessions are the user's concern.
        if self._session is not None and self._own_session:
            await self._session.close()
        self._session = None


async def login(
        info: credentials.ConnectionInfo,
        *,
        session: aiohttp.ClientSession,
        settings: configuration.ClientSettings,
        headers: Mapping[str, str] | None = None,
) -> credentials.LoginInfo:
    """
    Exchange the username & the API key for a token and the management endpoint.

    The authentication service responds with an empty body, and passes
    all the information in the headers of the response.
    """
    auth_url = info.auth_url or settings.authentication.auth_url
    logger.debug(f"Logging in as {info.username!r} via {auth_url}")

    response = await session.get(
        auth_url,
        headers=dict(headers or {}, **{
            'X-Auth-User': info.username,
            'X-Auth-Key': info.api_key,
        }),
        timeout=make_timeout(settings),
    )
    async with response:
        try:
            await errors.check_response(response)
        except errors.APIUnauthorizedError as e:
            raise credentials.LoginError(f"The credentials are not accepted for {info.username!r}.") from e
        except errors.APIError as e:
            raise credentials.LoginError(f"The authentication service has failed: {e}") from e

        token = response.headers.get('X-Auth-Token')
        endpoint = response.headers.get('X-Server-Management-Url')
        if not token or not endpoint:
            raise credentials.LoginError("Invalid response from the authentication service.")

        logger.debug(f"Logged in as {info.username!r}; the endpoint is {endpoint}")
        return credentials.LoginInfo(
            endpoint=endpoint,
            token=token,
            storage_url=response.headers.get('X-Storage-Url'),
            cdn_url=response.headers.get('X-CDN-Management-Url'),
        )


def make_timeout(settings: configuration.ClientSettings) -> aiohttp.ClientTimeout:
    return aiohttp.ClientTimeout(
        total=settings.networking.request_timeout,
        sock_connect=settings.networking.connect_timeout,
    )
