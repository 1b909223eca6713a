"""
Logging setup for the client and the command-line tool.

The library itself only logs into its own named loggers (``rackctl.*``)
and never configures the handlers: this is the application's decision.
The command-line tool calls :func:`configure` with its logging options.

Requests are logged via :class:`RequestLogger`, which carries a reference
to the request (method & path) in every log record. The formatters render
it either as a prefix (text formats) or as a separate field (JSON format).
"""
import copy
import enum
import logging
from collections.abc import MutableMapping
from typing import Any

from pythonjsonlogger.core import RESERVED_ATTRS
from pythonjsonlogger.json import JsonFormatter

from rackctl._cogs.helpers import typedefs

# A key for request references in JSON logs, as seen by the log parsers.
DEFAULT_JSON_REFKEY = 'request'


class LogFormat(enum.Enum):
    """ Log formats, as specified on CLI. """
    PLAIN = '%(message)s'
    FULL = '[%(asctime)s] %(name)-20.20s [%(levelname)-8.8s] %(message)s'
    JSON = '-json-'  # not used for formatting, only for detection


# The upper bounds of the levels, as used by the log collectors' severities.
SEVERITIES = [
    (logging.DEBUG, 'debug'),
    (logging.INFO, 'info'),
    (logging.WARNING, 'warn'),
    (logging.ERROR, 'error'),
]


class RequestFormatter(logging.Formatter):
    """
    A base of all own formatters: optionally prepends the request reference.

    With the prefix, a message logged via :class:`RequestLogger` is rendered
    as ``[GET /servers/detail] the message``; other messages are untouched.
    """
    prefixed: bool = False

    def format(self, record: logging.LogRecord) -> str:
        ref = getattr(record, 'api_ref', None)
        if self.prefixed and ref:
            record = copy.copy(record)  # shallow
            record.msg = f"[{ref['method']} {ref['path']}] {record.msg}"
        return super().format(record)


class RequestTextFormatter(RequestFormatter):
    def __init__(self, fmt: str | None = None, *, prefixed: bool = True) -> None:
        super().__init__(fmt)
        self.prefixed = prefixed


class RequestJsonFormatter(RequestFormatter, JsonFormatter):
    def __init__(
            self,
            *args: Any,
            refkey: str | None = None,
            prefixed: bool = False,
            **kwargs: Any,
    ) -> None:
        reserved_attrs = set(kwargs.pop('reserved_attrs', RESERVED_ATTRS)) | {'api_ref'}
        kwargs.setdefault('timestamp', True)
        super().__init__(*args, reserved_attrs=reserved_attrs, **kwargs)
        self.prefixed = prefixed
        self.refkey: str = refkey or DEFAULT_JSON_REFKEY

    def add_fields(
            self,
            log_record: dict[str, Any],
            record: logging.LogRecord,
            message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        if hasattr(record, 'api_ref'):
            log_record[self.refkey] = getattr(record, 'api_ref')
        log_record.setdefault('severity', next(
            (name for level, name in SEVERITIES if record.levelno <= level), 'fatal'))


class RequestLogger(logging.LoggerAdapter):  # type: ignore[type-arg]
    """
    A logger/adapter to carry the request identifiers for formatting.

    Constructed for every dispatched request or listing, so that all messages
    about that request (cache decisions, pages, responses) are attributable.
    """

    def __init__(self, logger: typedefs.Logger, *, method: str, path: str) -> None:
        super().__init__(logger, dict(
            api_ref=dict(
                method=method.upper(),
                path=path,
            ),
        ))

    def process(
            self,
            msg: str,
            kwargs: MutableMapping[str, Any],
    ) -> tuple[str, MutableMapping[str, Any]]:
        # Native logging overwrites the message's extra with the adapter's extra.
        # We merge them, so that both message's & adapter's extras are available.
        kwargs["extra"] = dict(self.extra or {}, **kwargs.get('extra', {}))
        return msg, kwargs


class _RackctlStreamHandler(logging.StreamHandler):  # type: ignore[type-arg]
    pass


def configure(
        debug: bool | None = None,
        verbose: bool | None = None,
        quiet: bool | None = None,
        log_format: LogFormat | str = LogFormat.FULL,
        log_prefix: bool | None = False,
        log_refkey: str | None = None,
) -> None:
    log_level = 'DEBUG' if debug or verbose else 'WARNING' if quiet else 'INFO'
    formatter = make_formatter(log_format=log_format, log_prefix=log_prefix, log_refkey=log_refkey)
    handler = _RackctlStreamHandler()
    handler.setFormatter(formatter)
    logger = logging.getLogger()
    logger.handlers[:] = [h for h in logger.handlers if not isinstance(h, _RackctlStreamHandler)]
    logger.addHandler(handler)
    logger.setLevel(log_level)

    # Prevent the low-level logging unless in the debug mode. Keep only the client's messages.
    # For no-propagation loggers, add a dummy null handler to prevent printing the messages.
    for name in ['asyncio', 'aiohttp']:
        logger = logging.getLogger(name)
        logger.propagate = bool(debug)
        if not debug:
            logger.handlers[:] = [logging.NullHandler()]


def make_formatter(
        log_format: LogFormat | str = LogFormat.FULL,
        log_prefix: bool | None = False,
        log_refkey: str | None = None,
) -> RequestFormatter:
    prefixed = log_prefix if log_prefix is not None else log_format is not LogFormat.JSON
    match log_format:
        case LogFormat.JSON:
            return RequestJsonFormatter(refkey=log_refkey, prefixed=prefixed)
        case LogFormat():
            return RequestTextFormatter(log_format.value, prefixed=prefixed)
        case str():
            return RequestTextFormatter(log_format, prefixed=prefixed)
        case _:
            raise ValueError(f"Unsupported log format: {log_format!r}")
