"""
The backup schedules of the servers.

The daily schedules are the 2-hour windows in GMT, e.g. ``H_0400_0600``.
The weekly schedules are the days of the week, e.g. ``SUNDAY``.
Both are optional: the server's backups are made only if ``enabled``.
"""
from typing import Any

from rackctl._cogs.clients import api, auth
from rackctl._cogs.structs import bodies
from rackctl._cogs.structs.options import RequestOptions


async def get_backup_schedule(
        server_id: int | str,
        *,
        context: auth.APIContext,
        options: RequestOptions | None = None,
) -> bodies.Result:
    path = f'/servers/{server_id}/backup_schedule'
    return await api.get(path, context=context, options=options)


async def update_backup_schedule(
        server_id: int | str,
        enabled: bool,
        daily: str | None = None,
        weekly: str | None = None,
        *,
        context: auth.APIContext,
        options: RequestOptions | None = None,
) -> bodies.Result:
    schedule: dict[str, Any] = {'enabled': enabled}
    if daily:
        schedule['daily'] = daily
    if weekly:
        schedule['weekly'] = weekly
    path = f'/servers/{server_id}/backup_schedule'
    return await api.post(path, payload={'backupSchedule': schedule}, context=context, options=options)


async def delete_backup_schedule(
        server_id: int | str,
        *,
        context: auth.APIContext,
        options: RequestOptions | None = None,
) -> bodies.Result:
    path = f'/servers/{server_id}/backup_schedule'
    return await api.delete(path, context=context, options=options)
