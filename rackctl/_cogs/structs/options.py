"""
Per-request options of the API operations.

Every operation accepts the same set of options, even if some of them make
no sense for some operations (e.g. ``detail=True`` for a single server).
Such options are silently ignored where they are not applicable.

The options are immutable: the operations that need to adjust them
(e.g. the paginator for the offsets) make modified copies.
"""
import dataclasses
import datetime
from collections.abc import Mapping

import iso8601

DETAIL_SUFFIX = '/detail'

Timestamp = datetime.datetime | int | float | str


@dataclasses.dataclass(frozen=True)
class RequestOptions:

    detail: bool = False
    """
    Should the listings be requested in the detailed (verbose) form?
    If so, the path gets the ``/detail`` suffix, e.g. ``/images/detail``.
    """

    cache: bool = True
    """
    Can the cacheable reads be served from the response cache?

    Only has an effect if the caching is enabled in the settings.
    If ``False``, the live call is made, and its result refreshes the cache.
    """

    since: Timestamp | None = None
    """
    Request only the changes since this moment (``changes-since=`` queries).

    If nothing has changed, the result is :data:`NO_CHANGE`.
    Datetimes without the timezone are considered to be in UTC.
    Numbers are the seconds since the epoch. Strings are ISO-8601 datetimes.
    """

    query: Mapping[str, str | int] = dataclasses.field(default_factory=dict)
    """
    Extra query parameters (e.g. ``offset`` & ``limit`` of the pagination).
    """

    headers: Mapping[str, str] = dataclasses.field(default_factory=dict)
    """
    Extra HTTP headers to send with the request.
    """

    no_service_path: bool = False
    """
    Should the path be addressed from the root of the management endpoint's
    host (e.g. ``https://host/``) instead of the account's service path
    (e.g. ``https://host/v1.0/12345/``)? Used for the API versions discovery.
    """

    def with_query(self, **query: str | int) -> "RequestOptions":
        return dataclasses.replace(self, query=dict(self.query, **query))

    def build_query(self) -> dict[str, str]:
        query = {key: str(val) for key, val in self.query.items()}
        if self.since is not None:
            query['changes-since'] = str(epoch_seconds(self.since))
        return query


def detailed_path(path: str, options: RequestOptions | None = None) -> str:
    """ Convert the summary path to the detail path if requested. """
    if options is not None and options.detail:
        return path.rstrip('/') + DETAIL_SUFFIX
    return path


def epoch_seconds(value: Timestamp) -> int:
    match value:
        case datetime.datetime():
            if value.tzinfo is None:
                value = value.replace(tzinfo=datetime.timezone.utc)
            return int(value.timestamp())
        case bool():
            raise TypeError(f"Unsupported timestamp: {value!r}")
        case int() | float():
            return int(value)
        case str():
            return int(iso8601.parse_date(value).timestamp())
        case _:
            raise TypeError(f"Unsupported timestamp: {value!r}")
