"""
The request dispatcher: the only place where the API requests are made.

All API operations are expressed as ``(method, path, options, payload)``
and go through :func:`api` (always live) or :func:`api_or_cache`
(live or cached, for the idempotent reads explicitly marked as cacheable).

The dispatcher makes no retries of any kind: every request either succeeds
or fails as a whole, and the failures are escalated to the caller.
The only recovery is implicit: an unauthorized request drops the token,
so that the next request logs in anew.
"""
from collections.abc import Mapping
from typing import Any

import aiohttp

from rackctl._cogs.clients import auth, errors
from rackctl._cogs.helpers import loggers
from rackctl._cogs.structs import bodies
from rackctl._cogs.structs.options import RequestOptions

CACHEABLE_METHODS = frozenset({'get'})


async def request(
        method: str,
        path: str,  # relative to the management endpoint.
        *,
        context: auth.APIContext,
        options: RequestOptions | None = None,
        payload: object | None = None,
) -> aiohttp.ClientResponse:
    """
    Make a raw authenticated request, check for errors, but do not parse it.
    """
    options = options if options is not None else RequestOptions()
    login_info = await context.ensure_authenticated(options)
    url = context.build_url(path, no_service_path=options.no_service_path)
    query = options.build_query()
    headers = dict(options.headers, **{'X-Auth-Token': login_info.token})

    response = await context.session.request(
        method=method.upper(),
        url=url,
        params=query or None,
        json=payload,
        headers=headers,
        timeout=auth.make_timeout(context.settings),
    )
    try:
        await errors.check_response(response)  # but do not parse it!
    except errors.APIUnauthorizedError:
        context.invalidate()  # the token has expired or was revoked.
        raise
    return response


async def api(
        method: str,
        path: str,
        *,
        context: auth.APIContext,
        options: RequestOptions | None = None,
        payload: object | None = None,
) -> bodies.Result:
    """
    Perform a live request and decode its result. The cache is never used.

    The result is either the decoded JSON body, or ``True`` for the bodiless
    successes (e.g. "202 Accepted" of the server actions), or :data:`NO_CHANGE`
    if the server reports no changes since the requested moment.
    """
    logger = loggers.RequestLogger(context.logger, method=method, path=path)
    logger.debug("Requesting the API.")
    response = await request(method, path, context=context, options=options, payload=payload)
    async with response:
        if response.status == 304:
            logger.debug("Nothing has changed since the requested moment.")
            return bodies.NO_CHANGE
        result = await response.json(content_type=None)
    logger.debug(f"Got a response: {response.status}")
    return True if result is None else result


async def api_or_cache(
        method: str,
        path: str,
        *,
        context: auth.APIContext,
        options: RequestOptions | None = None,
        payload: object | None = None,
) -> bodies.Result:
    """
    Serve the result from the cache if possible, or perform a live request.

    Only the idempotent reads without query parameters are cacheable,
    and only if the caching is enabled in the settings. The cache is keyed
    by the path: e.g., ``/images`` & ``/images/detail`` are independent.

    With ``RequestOptions(cache=False)``, the cached value is not used,
    but the live result replaces it for the next requests.
    """
    options = options if options is not None else RequestOptions()
    if not is_cacheable(method, context=context, options=options, payload=payload):
        return await api(method, path, context=context, options=options, payload=payload)

    logger = loggers.RequestLogger(context.logger, method=method, path=path)
    key = cache_key(path)
    if options.cache:
        entry = context.cache.get(key)
        if entry is not None:
            logger.debug("Served from the cache.")
            return entry.value

    result = await api(method, path, context=context, options=options, payload=payload)
    if result is not bodies.NO_CHANGE:
        context.cache.put(key, result, ttl=context.settings.caching.ttl)
        logger.debug(f"Cached for {context.settings.caching.ttl}s.")
    return result


def is_cacheable(
        method: str,
        *,
        context: auth.APIContext,
        options: RequestOptions,
        payload: object | None = None,
) -> bool:
    return (
        context.settings.caching.enabled and
        method.lower() in CACHEABLE_METHODS and
        payload is None and
        not options.build_query()
    )


def cache_key(path: str) -> str:
    return '/' + path.strip('/')


async def get(
        path: str,
        *,
        context: auth.APIContext,
        options: RequestOptions | None = None,
) -> Any:
    return await api('get', path, context=context, options=options)


async def post(
        path: str,
        *,
        context: auth.APIContext,
        options: RequestOptions | None = None,
        payload: Mapping[str, Any] | None = None,
) -> Any:
    return await api('post', path, context=context, options=options, payload=payload)


async def put(
        path: str,
        *,
        context: auth.APIContext,
        options: RequestOptions | None = None,
        payload: Mapping[str, Any] | None = None,
) -> Any:
    return await api('put', path, context=context, options=options, payload=payload)


async def delete(
        path: str,
        *,
        context: auth.APIContext,
        options: RequestOptions | None = None,
) -> Any:
    return await api('delete', path, context=context, options=options)
