"""
The servers and the actions on them.

Most of the actions are asynchronous on the server side: the API accepts
them with an empty "202 Accepted" response (the result is then ``True``),
and the server's status changes over time, e.g.::

    ACTIVE -> QUEUE_RESIZE -> PREP_RESIZE -> RESIZE -> VERIFY_RESIZE

The progress can be observed with :func:`get_server`.
"""
import base64
from collections.abc import Mapping
from typing import Any, Literal

from rackctl._cogs.clients import api, auth, fetching
from rackctl._cogs.structs import bodies
from rackctl._cogs.structs.options import RequestOptions, detailed_path

RebootType = Literal['soft', 'hard']


async def list_servers(
        *,
        context: auth.APIContext,
        options: RequestOptions | None = None,
) -> bodies.Result:
    """
    List the servers, either brief (ids & names) or detailed.

    Cacheable, with the keys ``/servers`` & ``/servers/detail``.
    """
    path = detailed_path('/servers', options)
    return await api.api_or_cache('get', path, context=context, options=options)


async def incrementally_list_servers(
        offset: int | None = None,
        limit: int | None = None,
        callback: fetching.PageCallback | None = None,
        *,
        context: auth.APIContext,
        options: RequestOptions | None = None,
) -> bodies.RawBody | bodies.NoChange:
    path = detailed_path('/servers', options)
    return await fetching.incrementally_list_resources(
        path, offset, limit, callback, context=context, options=options)


async def create_server(
        name: str,
        image_id: int | str,
        flavor_id: int | str,
        *,
        password: str | None = None,
        metadata: Mapping[str, str] | None = None,
        personalities: Mapping[str, str | bytes] | None = None,
        context: auth.APIContext,
        options: RequestOptions | None = None,
) -> bodies.Result:
    """
    Launch a new server from an image with a flavor.

    The personalities are the files to inject into the server's filesystem:
    a mapping of the file paths to the files' contents (sent base64-encoded).
    """
    server: dict[str, Any] = {
        'name': name,
        'imageId': image_id,
        'flavorId': flavor_id,
    }
    if password:
        server['adminPass'] = password
    if metadata:
        server['metadata'] = dict(metadata)
    if personalities:
        server['personality'] = [
            {'path': path, 'contents': _encode_contents(contents)}
            for path, contents in personalities.items()
        ]
    return await api.post('/servers', payload={'server': server}, context=context, options=options)


async def get_server(
        server_id: int | str,
        *,
        context: auth.APIContext,
        options: RequestOptions | None = None,
) -> bodies.Result:
    return await api.get(f'/servers/{server_id}', context=context, options=options)


async def update_server(
        server_id: int | str,
        *,
        name: str | None = None,
        password: str | None = None,
        context: auth.APIContext,
        options: RequestOptions | None = None,
) -> bodies.Result:
    """ Change the server's name and/or the admin password. """
    server: dict[str, Any] = {}
    if name:
        server['name'] = name
    if password:
        server['adminPass'] = password
    path = f'/servers/{server_id}'
    return await api.put(path, payload={'server': server}, context=context, options=options)


async def reboot_server(
        server_id: int | str,
        type: RebootType = 'soft',
        *,
        context: auth.APIContext,
        options: RequestOptions | None = None,
) -> bodies.Result:
    """ Reboot the server: softly (OS-level) or hardly (power cycle). """
    payload = {'reboot': {'type': type.upper()}}
    path = f'/servers/{server_id}/actions/reboot'
    return await api.post(path, payload=payload, context=context, options=options)


async def rebuild_server(
        server_id: int | str,
        image_id: int | str,
        *,
        context: auth.APIContext,
        options: RequestOptions | None = None,
) -> bodies.Result:
    payload = {'rebuild': {'imageId': image_id}}
    path = f'/servers/{server_id}/actions/rebuild'
    return await api.post(path, payload=payload, context=context, options=options)


async def resize_server(
        server_id: int | str,
        flavor_id: int | str,
        *,
        context: auth.APIContext,
        options: RequestOptions | None = None,
) -> bodies.Result:
    """ Resize the server; it must be confirmed or reverted in VERIFY_RESIZE. """
    payload = {'resize': {'flavorId': flavor_id}}
    path = f'/servers/{server_id}/actions/resize'
    return await api.post(path, payload=payload, context=context, options=options)


async def confirm_resized_server(
        server_id: int | str,
        *,
        context: auth.APIContext,
        options: RequestOptions | None = None,
) -> bodies.Result:
    path = f'/servers/{server_id}/actions/resize'
    return await api.put(path, context=context, options=options)


async def revert_resized_server(
        server_id: int | str,
        *,
        context: auth.APIContext,
        options: RequestOptions | None = None,
) -> bodies.Result:
    path = f'/servers/{server_id}/actions/resize'
    return await api.delete(path, context=context, options=options)


async def share_ip_address(
        server_id: int | str,
        shared_ip_group_id: int | str,
        address: str,
        *,
        context: auth.APIContext,
        options: RequestOptions | None = None,
) -> bodies.Result:
    """
    Share an IP address of another server in the shared IP group with this server.
    """
    payload = {'shareIp': {'sharedIpGroupId': shared_ip_group_id, 'addr': address}}
    path = f'/servers/{server_id}/actions/share_ip'
    return await api.post(path, payload=payload, context=context, options=options)


async def unshare_ip_address(
        server_id: int | str,
        address: str,
        *,
        context: auth.APIContext,
        options: RequestOptions | None = None,
) -> bodies.Result:
    payload = {'unshareIp': {'addr': address}}
    path = f'/servers/{server_id}/actions/unshare_ip'
    return await api.post(path, payload=payload, context=context, options=options)


async def delete_server(
        server_id: int | str,
        *,
        context: auth.APIContext,
        options: RequestOptions | None = None,
) -> bodies.Result:
    return await api.delete(f'/servers/{server_id}', context=context, options=options)


def _encode_contents(contents: str | bytes) -> str:
    data = contents.encode('utf-8') if isinstance(contents, str) else contents
    return base64.b64encode(data).decode('ascii')
