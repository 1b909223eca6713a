import json
import logging.handlers

import pytest

from rackctl._cogs.helpers.loggers import RequestJsonFormatter, RequestLogger, RequestTextFormatter


@pytest.fixture()
def record():
    handler = logging.handlers.BufferingHandler(capacity=100)
    logger = logging.getLogger('rackctl.tests.formatters')
    logger.addHandler(handler)
    try:
        RequestLogger(logger, method='get', path='/images/detail').info("hello")
    finally:
        logger.removeHandler(handler)
    return handler.buffer[0]


@pytest.fixture()
def plain_record():
    return logging.LogRecord('rackctl.tests', logging.INFO, __file__, 1, "hello", (), None)


def test_prefixing_text_formatter_adds_prefixes(record):
    formatter = RequestTextFormatter(prefixed=True)
    formatted = formatter.format(record)
    assert formatted == '[GET /images/detail] hello'


def test_prefixing_json_formatter_adds_prefixes(record):
    formatter = RequestJsonFormatter(prefixed=True)
    formatted = formatter.format(record)
    decoded = json.loads(formatted)
    assert decoded['message'] == '[GET /images/detail] hello'


def test_prefixing_does_not_alter_the_record(record):
    formatter = RequestTextFormatter(prefixed=True)
    formatter.format(record)
    assert record.msg == "hello"


def test_prefixing_text_formatter_without_a_reference(plain_record):
    formatter = RequestTextFormatter(prefixed=True)
    formatted = formatter.format(plain_record)
    assert formatted == 'hello'


def test_regular_text_formatter_omits_prefixes(record):
    formatter = RequestTextFormatter(prefixed=False)
    formatted = formatter.format(record)
    assert formatted == 'hello'


def test_regular_json_formatter_omits_prefixes(record):
    formatter = RequestJsonFormatter()
    formatted = formatter.format(record)
    decoded = json.loads(formatted)
    assert decoded['message'] == 'hello'


def test_json_formatter_adds_the_reference(record):
    formatter = RequestJsonFormatter()
    formatted = formatter.format(record)
    decoded = json.loads(formatted)
    assert decoded['request'] == {'method': 'GET', 'path': '/images/detail'}
    assert 'api_ref' not in decoded


def test_json_formatter_with_a_custom_refkey(record):
    formatter = RequestJsonFormatter(refkey='api')
    formatted = formatter.format(record)
    decoded = json.loads(formatted)
    assert decoded['api'] == {'method': 'GET', 'path': '/images/detail'}
    assert 'request' not in decoded


def test_json_formatter_without_a_reference(plain_record):
    formatter = RequestJsonFormatter()
    formatted = formatter.format(plain_record)
    decoded = json.loads(formatted)
    assert decoded['message'] == 'hello'
    assert 'request' not in decoded


@pytest.mark.parametrize('level, severity', [
    (logging.DEBUG, 'debug'),
    (logging.INFO, 'info'),
    (logging.WARNING, 'warn'),
    (logging.ERROR, 'error'),
    (logging.CRITICAL, 'fatal'),
])
def test_json_formatter_adds_the_severity(level, severity):
    record = logging.LogRecord('rackctl.tests', level, __file__, 1, "hello", (), None)
    formatter = RequestJsonFormatter()
    decoded = json.loads(formatter.format(record))
    assert decoded['severity'] == severity


def test_json_formatter_adds_a_timestamp(record):
    formatter = RequestJsonFormatter()
    decoded = json.loads(formatter.format(record))
    assert 'timestamp' in decoded


def test_json_formatter_keeps_its_own_output_prefix(record):
    formatter = RequestJsonFormatter(prefix='@cee: ', prefixed=True)
    formatted = formatter.format(record)
    assert formatted.startswith('@cee: ')
    decoded = json.loads(formatted.removeprefix('@cee: '))
    assert decoded['message'] == '[GET /images/detail] hello'
