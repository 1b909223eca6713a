from typing import Any

from rackctl._cogs.clients import api, auth, fetching
from rackctl._cogs.structs import bodies
from rackctl._cogs.structs.options import RequestOptions, detailed_path


async def list_shared_ip_groups(
        *,
        context: auth.APIContext,
        options: RequestOptions | None = None,
) -> bodies.Result:
    """
    List the shared IP groups, either brief or detailed (with the servers).

    Cacheable, with the keys ``/shared_ip_groups`` & ``/shared_ip_groups/detail``.
    """
    path = detailed_path('/shared_ip_groups', options)
    return await api.api_or_cache('get', path, context=context, options=options)


async def incrementally_list_shared_ip_groups(
        offset: int | None = None,
        limit: int | None = None,
        callback: fetching.PageCallback | None = None,
        *,
        context: auth.APIContext,
        options: RequestOptions | None = None,
) -> bodies.RawBody | bodies.NoChange:
    path = detailed_path('/shared_ip_groups', options)
    return await fetching.incrementally_list_resources(
        path, offset, limit, callback, context=context, options=options)


async def create_shared_ip_group(
        name: str,
        server_id: int | str | None = None,
        *,
        context: auth.APIContext,
        options: RequestOptions | None = None,
) -> bodies.Result:
    """
    Create a new shared IP group, optionally with the server's IP address in it.
    """
    group: dict[str, Any] = {'name': name}
    if server_id is not None:
        group['server'] = server_id
    payload = {'sharedIpGroup': group}
    return await api.post('/shared_ip_groups', payload=payload, context=context, options=options)


async def get_shared_ip_group(
        shared_ip_group_id: int | str,
        *,
        context: auth.APIContext,
        options: RequestOptions | None = None,
) -> bodies.Result:
    path = f'/shared_ip_groups/{shared_ip_group_id}'
    return await api.get(path, context=context, options=options)


async def delete_shared_ip_group(
        shared_ip_group_id: int | str,
        *,
        context: auth.APIContext,
        options: RequestOptions | None = None,
) -> bodies.Result:
    path = f'/shared_ip_groups/{shared_ip_group_id}'
    return await api.delete(path, context=context, options=options)
