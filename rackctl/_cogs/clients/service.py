"""
The service-wide information: the API versions and the account's limits.
"""
import dataclasses

from rackctl._cogs.clients import api, auth
from rackctl._cogs.structs import bodies
from rackctl._cogs.structs.options import RequestOptions


async def list_api_versions(
        *,
        context: auth.APIContext,
        options: RequestOptions | None = None,
) -> bodies.Result:
    """
    List all API versions supported by the service endpoint.

    E.g.: ``{"versions": [{"id": "v1.0", "status": "BETA"}]}``.
    Cacheable, with the key ``/``.
    """
    options = dataclasses.replace(options or RequestOptions(), no_service_path=True)
    return await api.api_or_cache('get', '/', context=context, options=options)


async def list_limits(
        *,
        context: auth.APIContext,
        options: RequestOptions | None = None,
) -> bodies.Result:
    """
    Get the rate limits and the absolute limits of the account.

    E.g.: ``{"limits": {"absolute": {"maxNumServers": 25, ...}, "rate": [...]}}``.
    Cacheable, with the key ``/limits``.
    """
    return await api.api_or_cache('get', '/limits', context=context, options=options)
