import asyncio
import dataclasses
import datetime
import functools
import json
import math
from collections.abc import Awaitable, Callable
from typing import Any

import click
import iso8601

from rackctl._cogs.clients import auth, backups, errors, flavors, images, servers, service, sharedips
from rackctl._cogs.configs import configuration, loading
from rackctl._cogs.helpers import loggers
from rackctl._cogs.structs import bodies, credentials
from rackctl._cogs.structs.options import RequestOptions


@dataclasses.dataclass()
class CLIControls:
    """ CLI controls, which are impossible to pass via CLI (used in embedding & tests). """
    info: credentials.ConnectionInfo | None = None
    login_info: credentials.LoginInfo | None = None
    settings: configuration.ClientSettings | None = None


class LogFormatParamType(click.Choice):

    def __init__(self) -> None:
        super().__init__(choices=[v.name.lower() for v in loggers.LogFormat])

    def convert(self, value: Any, param: Any, ctx: Any) -> loggers.LogFormat:
        if isinstance(value, loggers.LogFormat):
            return value
        else:
            name: str = super().convert(value, param, ctx)
            return loggers.LogFormat[name.upper()]


class TimestampParamType(click.ParamType):
    name = 'timestamp'

    def convert(self, value: Any, param: Any, ctx: Any) -> int | float | datetime.datetime:
        if isinstance(value, (int, float, datetime.datetime)):
            return value
        try:
            return int(value)
        except ValueError:
            pass
        try:
            number = float(value)
        except ValueError:
            pass
        else:
            if math.isfinite(number):
                return number
            self.fail(f"{value!r} is not a finite number of epoch seconds.", param, ctx)
        try:
            return iso8601.parse_date(value)
        except iso8601.ParseError:
            self.fail(f"{value!r} is neither an ISO-8601 time nor epoch seconds.", param, ctx)


def logging_options(fn: Callable[..., Any]) -> Callable[..., Any]:
    """ A decorator to configure logging in all commands the same way."""
    @click.option('-v', '--verbose', is_flag=True)
    @click.option('-d', '--debug', is_flag=True)
    @click.option('-q', '--quiet', is_flag=True)
    @click.option('--log-format', type=LogFormatParamType(), default='full')
    @click.option('--log-refkey', type=str)
    @click.option('--log-prefix/--no-log-prefix', default=None)
    @functools.wraps(fn)  # to preserve other opts/args
    def wrapper(verbose: bool, quiet: bool, debug: bool,
                log_format: loggers.LogFormat = loggers.LogFormat.FULL,
                log_prefix: bool | None = False,
                log_refkey: str | None = None,
                *args: Any, **kwargs: Any) -> Any:
        loggers.configure(debug=debug, verbose=verbose, quiet=quiet,
                          log_format=log_format, log_refkey=log_refkey, log_prefix=log_prefix)
        return fn(*args, **kwargs)

    return wrapper


pass_controls = click.make_pass_decorator(CLIControls, ensure=True)


@click.version_option(prog_name='rackctl')
@click.group(name='rackctl', context_settings=dict(
    auto_envvar_prefix='RACKCTL',
))
@click.option('-u', '--username', type=str)
@click.option('-k', '--api-key', type=str)
@click.option('--auth-url', type=str)
@click.option('-c', '--config', 'config_path', type=click.Path(exists=True, dir_okay=False))
@click.option('--cache/--no-cache', 'caching', default=None)
@pass_controls
def main(
        __controls: CLIControls,
        username: str | None,
        api_key: str | None,
        auth_url: str | None,
        config_path: str | None,
        caching: bool | None,
) -> None:
    try:
        config = loading.read_config(config_path) if config_path else {}
        __controls.settings = loading.load_settings(config, __controls.settings)
        info = loading.load_credentials(config, username=username, api_key=api_key, auth_url=auth_url)
    except loading.ConfigError as e:
        raise click.UsageError(str(e))
    if caching is not None:
        __controls.settings.caching.enabled = caching
    if info is not None:
        __controls.info = info


@main.command()
@logging_options
@pass_controls
def login(__controls: CLIControls) -> None:
    """ Authenticate and show the management endpoint & the token. """
    async def fn(context: auth.APIContext) -> Any:
        login_info = await context.ensure_authenticated()
        return {'endpoint': login_info.endpoint, 'token': login_info.token}
    execute(__controls, fn)


@main.command()
@logging_options
@pass_controls
def versions(__controls: CLIControls) -> None:
    """ List the API versions supported by the service. """
    execute(__controls, lambda context: service.list_api_versions(context=context))


@main.command()
@logging_options
@pass_controls
def limits(__controls: CLIControls) -> None:
    """ Show the rate & absolute limits of the account. """
    execute(__controls, lambda context: service.list_limits(context=context))


LISTERS = {
    'images': (images.list_images, images.incrementally_list_images),
    'flavors': (flavors.list_flavors, flavors.incrementally_list_flavors),
    'servers': (servers.list_servers, servers.incrementally_list_servers),
    'shared-ip-groups': (sharedips.list_shared_ip_groups, sharedips.incrementally_list_shared_ip_groups),
}

GETTERS = {
    'image': images.get_image,
    'flavor': flavors.get_flavor,
    'server': servers.get_server,
    'shared-ip-group': sharedips.get_shared_ip_group,
    'backup-schedule': backups.get_backup_schedule,
}

DELETERS = {
    'server': servers.delete_server,
    'shared-ip-group': sharedips.delete_shared_ip_group,
    'backup-schedule': backups.delete_backup_schedule,
}


@main.command(name='list')
@logging_options
@click.option('--detail', is_flag=True)
@click.option('--since', type=TimestampParamType(), help="Only the changes since: ISO-8601 or epoch seconds.")
@click.option('--offset', type=int)
@click.option('--limit', type=int)
@click.argument('kind', type=click.Choice(sorted(LISTERS)))
@pass_controls
def list_(
        __controls: CLIControls,
        kind: str,
        detail: bool,
        since: int | float | datetime.datetime | None,
        offset: int | None,
        limit: int | None,
) -> None:
    """ List the resources of a kind, entirely or page by page. """
    options = RequestOptions(detail=detail, since=since)
    list_fn, incrementally_list_fn = LISTERS[kind]
    if offset is None and limit is None:
        execute(__controls, lambda context: list_fn(context=context, options=options))
    else:
        execute(__controls, lambda context: incrementally_list_fn(
            offset, limit, context=context, options=options))


@main.command()
@logging_options
@click.argument('kind', type=click.Choice(sorted(GETTERS)))
@click.argument('id', type=str)
@pass_controls
def get(__controls: CLIControls, kind: str, id: str) -> None:
    """ Show one resource by its id (for backup schedules, the server's id). """
    get_fn = GETTERS[kind]
    execute(__controls, lambda context: get_fn(id, context=context))


@main.command()
@logging_options
@click.option('--hard', is_flag=True, help="Power-cycle instead of an OS-level reboot.")
@click.argument('server_id', type=str)
@pass_controls
def reboot(__controls: CLIControls, server_id: str, hard: bool) -> None:
    """ Reboot a server. """
    type_: servers.RebootType = 'hard' if hard else 'soft'
    execute(__controls, lambda context: servers.reboot_server(server_id, type_, context=context))


@main.command()
@logging_options
@click.argument('kind', type=click.Choice(sorted(DELETERS)))
@click.argument('id', type=str)
@pass_controls
def delete(__controls: CLIControls, kind: str, id: str) -> None:
    """ Delete one resource by its id (for backup schedules, the server's id). """
    delete_fn = DELETERS[kind]
    execute(__controls, lambda context: delete_fn(id, context=context))


def execute(
        controls: CLIControls,
        fn: Callable[[auth.APIContext], Awaitable[Any]],
) -> None:
    """ Run one API operation in a fresh context, and print its result as JSON. """
    if controls.info is None and controls.login_info is None:
        raise click.UsageError("No credentials: use --username & --api-key, or --config.")

    async def _execute() -> Any:
        async with auth.APIContext(
            controls.info,
            settings=controls.settings,
            login_info=controls.login_info,
        ) as context:
            return await fn(context)

    try:
        result = asyncio.run(_execute())
    except (errors.APIError, credentials.LoginError) as e:
        raise click.ClickException(str(e))

    if result is bodies.NO_CHANGE:
        click.echo("Nothing has changed.", err=True)
    else:
        click.echo(json.dumps(result, indent=2, sort_keys=True))
