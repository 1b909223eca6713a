"""
All the structures coming from/to the management API.

The API speaks plain JSON objects: a single entity is wrapped into its kind
(``{"server": {...}}``), a listing is wrapped into the plural kind
(``{"servers": [...]}``), and a fault is wrapped into the fault's name
(``{"itemNotFound": {...}}``).

For type-checking, only the fields used by the client itself are declared.
All other fields are passed through as they are, and are typed as ``Any``.
"""
import enum
from collections.abc import Mapping
from typing import Any, TypedDict, Union

RawBody = Mapping[str, Any]


class RawFault(TypedDict, total=False):
    code: int
    message: str
    details: str
    retryAfter: str


# The only key is the fault's name, e.g. "itemNotFound" or "overLimit".
RawFaultBody = Mapping[str, RawFault]


# A "nothing has changed since" marker as returned by the conditional reads.
# See: https://www.python.org/dev/peps/pep-0484/#support-for-singleton-types-in-unions
class NoChange(enum.Enum):
    token = enum.auto()

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return 'NO_CHANGE'


NO_CHANGE = NoChange.token

# What a dispatched request can result in: a decoded body, a mere success
# of the bodiless responses (e.g. "202 Accepted" of the actions), or no changes.
Result = Union[RawBody, list[Any], bool, NoChange]
