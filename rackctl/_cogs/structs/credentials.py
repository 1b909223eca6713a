"""
Authentication-related structures.

The API uses a token-based authentication: the username & the API key
are exchanged for a session token and the management endpoint (the URL
of the account-specific API root) in a separate login handshake.

For that, two minimally sufficient data structures are introduced:
the credentials as provided by the users, and the login information
as received from the authentication service.
"""
import dataclasses

DEFAULT_AUTH_URL = 'https://auth.api.rackspacecloud.com/v1.0'


class LoginError(Exception):
    """ Raised when the client cannot login to the API. """


@dataclasses.dataclass(frozen=True)
class ConnectionInfo:
    """
    The credentials to login with, and where to login to.
    """
    username: str
    api_key: str
    auth_url: str | None = None  # None means the settings' default.

    def __repr__(self) -> str:
        # Never leak the API key into the logs or tracebacks.
        return f'{self.__class__.__name__}(username={self.username!r}, auth_url={self.auth_url!r})'


@dataclasses.dataclass(frozen=True)
class LoginInfo:
    """
    The authenticated session: where to send the requests and with which token.
    """
    endpoint: str  # e.g. "https://servers.api.rackspacecloud.com/v1.0/12345"
    token: str
    storage_url: str | None = None
    cdn_url: str | None = None

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}(endpoint={self.endpoint!r})'
