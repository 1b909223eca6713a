import functools
import logging

import click.testing
import pytest

from rackctl._cogs.structs.credentials import LoginInfo
from rackctl.cli import CLIControls, main


@pytest.fixture(autouse=True)
def _restore_root_logger():
    logger = logging.getLogger()
    handlers = logger.handlers[:]
    level = logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


@pytest.fixture(autouse=True)
def _no_envvars(monkeypatch):
    for name in ['RACKCTL_USERNAME', 'RACKCTL_API_KEY', 'RACKCTL_AUTH_URL', 'RACKCTL_CONFIG_PATH',
                 'RACKCTL_CACHING']:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def runner():
    runner = click.testing.CliRunner()
    return runner


@pytest.fixture()
def controls():
    login_info = LoginInfo(endpoint='https://fake-host/v1.0/12345', token='fake-token')
    return CLIControls(login_info=login_info)


@pytest.fixture()
def invoke(runner, controls):
    return functools.partial(runner.invoke, main, obj=controls)


@pytest.fixture()
def api(mocker):
    """ The live requests, with the results as set by the tests. """
    return mocker.patch('rackctl._cogs.clients.api.api', return_value={'result': 'ok'})


@pytest.fixture()
def api_or_cache(mocker):
    """ The cacheable requests, with the results as set by the tests. """
    return mocker.patch('rackctl._cogs.clients.api.api_or_cache', return_value={'result': 'ok'})
