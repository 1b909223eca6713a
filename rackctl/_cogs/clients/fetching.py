import inspect
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from rackctl._cogs.clients import api, auth
from rackctl._cogs.helpers import loggers
from rackctl._cogs.structs import bodies
from rackctl._cogs.structs.options import RequestOptions

# A per-page callback: returns a truthy value to continue, a falsy one to stop.
PageCallback = Callable[[bodies.RawBody], bool | Awaitable[bool]]


async def incrementally_list_resources(
        path: str,
        offset: int | None = None,
        limit: int | None = None,
        callback: PageCallback | None = None,
        *,
        context: auth.APIContext,
        options: RequestOptions | None = None,
) -> bodies.RawBody | bodies.NoChange:
    """
    List the resources page by page, and feed every page to the callback.

    The pages are requested with the ``offset`` & ``limit`` query parameters.
    The offset is advanced by the number of items actually returned.
    The listing continues while the pages are full (i.e. of ``limit`` items)
    and the callback returns a truthy value; it stops on an empty page,
    on a short page (the end of data), or on a falsy result of the callback.

    Without a limit, only one (unbounded) page is requested: the server
    decides how many items to return, so there is no way to detect the end.

    The callback can be a regular function or a coroutine function.
    Without a callback, all the pages are fetched until the end of data.

    The result is the accumulated listing in the same format as the pages,
    e.g. ``{"images": [...all items of all pages...]}``, or :data:`NO_CHANGE`
    if nothing has changed since the requested moment (``options.since``).
    """
    options = options if options is not None else RequestOptions()
    logger = loggers.RequestLogger(context.logger, method='get', path=path)
    key = resource_key(path)
    items: list[Any] = []
    offset = offset or 0

    while True:
        query = dict(offset=offset) if limit is None else dict(offset=offset, limit=limit)
        page = await api.api('get', path, context=context, options=options.with_query(**query))
        if page is bodies.NO_CHANGE:
            logger.debug(f"Nothing has changed at offset={offset}; stopping.")
            return bodies.NO_CHANGE if not items else {key: items}
        if not isinstance(page, Mapping):
            raise TypeError(f"A listing is expected, got {type(page).__name__}: {page!r}")

        page_items = page.get(key) or []
        items.extend(page_items)
        logger.debug(f"Got {len(page_items)} items at offset={offset} with limit={limit}.")

        if callback is not None:
            proceed = callback(page)
            if inspect.isawaitable(proceed):
                proceed = await proceed
            if not proceed:
                break

        if limit is None or not page_items or len(page_items) < limit:
            break

        offset += len(page_items)

    return {key: items}


def resource_key(path: str) -> str:
    """
    Get the key of the items in the listing by the listing's path.

    E.g.: ``/images`` & ``/images/detail`` -> ``images``,
    ``/shared_ip_groups/detail`` -> ``sharedIpGroups``.
    """
    name = path.strip('/').split('/', 1)[0]
    head, *tail = name.split('_')
    return head.lower() + ''.join(word.capitalize() for word in tail)
