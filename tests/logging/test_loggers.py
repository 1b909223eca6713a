import logging

from rackctl._cogs.helpers.loggers import RequestLogger


def test_extras_from_the_request(caplog):
    logger = RequestLogger(logging.getLogger('rackctl.tests'), method='post', path='/servers')
    logger.info("hello")

    assert len(caplog.records) == 1
    assert hasattr(caplog.records[0], 'api_ref')
    assert caplog.records[0].api_ref == {'method': 'POST', 'path': '/servers'}


def test_extras_are_merged_with_the_message_extras(caplog):
    logger = RequestLogger(logging.getLogger('rackctl.tests'), method='get', path='/images')
    logger.info("hello", extra={'attempt': 1})

    assert len(caplog.records) == 1
    assert caplog.records[0].api_ref == {'method': 'GET', 'path': '/images'}
    assert caplog.records[0].attempt == 1


def test_loggers_can_be_nested(caplog):
    adapter = RequestLogger(logging.getLogger('rackctl.tests'), method='get', path='/a')
    logger = RequestLogger(adapter, method='get', path='/b')
    logger.info("hello")

    assert len(caplog.records) == 1
    assert caplog.records[0].api_ref == {'method': 'GET', 'path': '/b'}
