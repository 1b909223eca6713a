import json
import logging
import re
from unittest.mock import AsyncMock, Mock

import aiohttp.web
import pytest
from aresponses import ResponsesMockServer

from rackctl._cogs.clients.auth import APIContext
from rackctl._cogs.configs.configuration import ClientSettings
from rackctl._cogs.structs.credentials import ConnectionInfo, LoginInfo


@pytest.fixture()
async def aresponses():
    async with ResponsesMockServer() as server:
        yield server


@pytest.fixture()
def settings():
    return ClientSettings()


#
# Mocks for the API endpoints.
#
# 1. We do not test the client library, we test the layers on top of it,
#    so everything low-level should be mocked and assumed to be functional.
# 2. No external calls must be made under any circumstances.
#    The unit-tests must be fully isolated from the environment.
#

@pytest.fixture()
def hostname():
    """ A fake hostname to be used in all aiohttp/aresponses tests. """
    return 'fake-host'


@pytest.fixture()
def service_path():
    """ The account-specific path of the management endpoint. """
    return '/v1.0/12345'


@pytest.fixture()
def fake_info(hostname):
    return ConnectionInfo(username='jdoe', api_key='secret-key', auth_url=f'https://{hostname}/auth')


@pytest.fixture()
def fake_login(hostname, service_path):
    return LoginInfo(endpoint=f'https://{hostname}{service_path}', token='fake-token')


@pytest.fixture()
async def context(fake_info, fake_login, settings):
    """ An already authenticated context: no login requests are expected. """
    context = APIContext(fake_info, settings=settings, login_info=fake_login)
    async with context:
        yield context


@pytest.fixture()
def resp_mocker(aresponses):
    """
    A factory of server-side callbacks for `aresponses` with mocking/spying.

    The value of the fixture is a function, which return a coroutine mock.
    That coroutine mock should be passed to `aresponses.add` as a response
    callback function. When called, it calls the mock defined by the function's
    arguments (specifically, return_value or side_effects).

    The request bodies can be read inside of the handler only, so they are
    preserved in the mock's ``.payloads`` list (in the order of requests).

    Sample usage::

        def test_me(resp_mocker):
            response = aiohttp.web.json_response({'a': 'b'})
            callback = resp_mocker(return_value=response)
            aresponses.add(hostname, '/path/', 'get', callback)
            do_something()
            assert callback.called
            assert callback.call_count == 1
            assert callback.payloads == [None]
    """
    def resp_maker(*args, **kwargs):
        actual_response = Mock(*args, **kwargs)
        payloads = []

        async def resp_mock_effect(request):
            text = await request.text()
            try:
                payloads.append(json.loads(text) if text else None)
            except json.JSONDecodeError:
                payloads.append(text)
            return actual_response()

        mock = AsyncMock(side_effect=resp_mock_effect)
        mock.payloads = payloads
        return mock
    return resp_maker


@pytest.fixture()
def api_mock(resp_mocker, aresponses, hostname, service_path):
    """
    A shortcut to mock one API endpoint relative to the service path.

    Sample usage::

        async def test_me(api_mock, context):
            callback = api_mock('get', '/images', {'images': []})
            await list_images(context=context)
            assert callback.call_count == 1
    """
    def mock_endpoint(method, path, body=None, *, status=None, headers=None):
        if body is None:
            response = aiohttp.web.Response(status=status or 204, headers=headers)
        else:
            response = aiohttp.web.json_response(body, status=status or 200, headers=headers)
        callback = resp_mocker(return_value=response)
        aresponses.add(hostname, service_path + path, method, callback)
        return callback
    return mock_endpoint


#
# Helpers for the logging checks.
#

@pytest.fixture()
def assert_logs(caplog):
    """
    A function to assert the logs are present (by pattern).

    The listed message patterns MUST be present, in the order specified.
    Some other log messages can also be present, but they are ignored.
    """
    def assert_logs_fn(patterns, prohibited=[], strict=False):
        __traceback_hide__ = True
        remaining_patterns = list(patterns)
        for message in caplog.messages:
            # The expected pattern is at position 0.
            # Looking-ahead: if one of the following patterns matches, while the
            # 0th does not, then the log message is missing, and we fail the test.
            for idx, pattern in enumerate(remaining_patterns):
                m = re.search(pattern, message)
                if m:
                    if idx == 0:
                        remaining_patterns[:1] = []
                        break  # out of `remaining_patterns` cycle
                    else:
                        skipped_patterns = remaining_patterns[:idx]
                        raise AssertionError(f"Few patterns were skipped: {skipped_patterns!r}")
                elif strict:
                    raise AssertionError(f"Unexpected log message: {message!r}")

            # Check that the prohibited patterns do not appear in any message.
            for pattern in prohibited:
                m = re.search(pattern, message)
                if m:
                    raise AssertionError(f"Prohibited log pattern found: {message!r} ~ {pattern!r}")

        # If all patterns have been matched in order, we are done.
        # if some are left, but the messages are over, then we fail.
        if remaining_patterns:
            raise AssertionError(f"Few patterns were missed: {remaining_patterns!r}")

    return assert_logs_fn


@pytest.fixture()
def debug_logs(caplog):
    caplog.set_level(logging.DEBUG, logger='rackctl')
    return caplog
