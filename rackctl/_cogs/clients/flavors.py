from rackctl._cogs.clients import api, auth, fetching
from rackctl._cogs.structs import bodies
from rackctl._cogs.structs.options import RequestOptions, detailed_path


async def list_flavors(
        *,
        context: auth.APIContext,
        options: RequestOptions | None = None,
) -> bodies.Result:
    """
    List the flavors, either brief (ids & names) or detailed (with RAM & disk).

    Cacheable, with the keys ``/flavors`` & ``/flavors/detail``.
    """
    path = detailed_path('/flavors', options)
    return await api.api_or_cache('get', path, context=context, options=options)


async def incrementally_list_flavors(
        offset: int | None = None,
        limit: int | None = None,
        callback: fetching.PageCallback | None = None,
        *,
        context: auth.APIContext,
        options: RequestOptions | None = None,
) -> bodies.RawBody | bodies.NoChange:
    path = detailed_path('/flavors', options)
    return await fetching.incrementally_list_resources(
        path, offset, limit, callback, context=context, options=options)


async def get_flavor(
        flavor_id: int | str,
        *,
        context: auth.APIContext,
        options: RequestOptions | None = None,
) -> bodies.Result:
    return await api.get(f'/flavors/{flavor_id}', context=context, options=options)
