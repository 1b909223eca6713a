from rackctl._cogs.clients import api, auth, fetching
from rackctl._cogs.structs import bodies
from rackctl._cogs.structs.options import RequestOptions, detailed_path


async def list_images(
        *,
        context: auth.APIContext,
        options: RequestOptions | None = None,
) -> bodies.Result:
    """
    List the images, either brief (ids & names) or detailed (with statuses).

    Cacheable, with the keys ``/images`` & ``/images/detail``.
    """
    path = detailed_path('/images', options)
    return await api.api_or_cache('get', path, context=context, options=options)


async def incrementally_list_images(
        offset: int | None = None,
        limit: int | None = None,
        callback: fetching.PageCallback | None = None,
        *,
        context: auth.APIContext,
        options: RequestOptions | None = None,
) -> bodies.RawBody | bodies.NoChange:
    path = detailed_path('/images', options)
    return await fetching.incrementally_list_resources(
        path, offset, limit, callback, context=context, options=options)


async def get_image(
        image_id: int | str,
        *,
        context: auth.APIContext,
        options: RequestOptions | None = None,
) -> bodies.Result:
    return await api.get(f'/images/{image_id}', context=context, options=options)


async def create_image(
        server_id: int | str,
        name: str,
        *,
        context: auth.APIContext,
        options: RequestOptions | None = None,
) -> bodies.Result:
    """ Create an image from the server's current state. """
    payload = {'image': {'name': name}}
    path = f'/servers/{server_id}/actions/create_image'
    return await api.post(path, payload=payload, context=context, options=options)
