"""
Rudimentary type [re-]definitions used across the codebase.

Some StdLib types are generics only in the type-sheds, not at runtime
(e.g. ``logging.LoggerAdapter``), so they are defined here once
in a way that is acceptable for both mypy and the interpreter.
"""
import logging
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    LoggerAdapter = logging.LoggerAdapter[Any]
else:
    LoggerAdapter = logging.LoggerAdapter

# As publicly exposed: we only promise that it is based on one of the built-in loggable classes.
Logger = Union[logging.Logger, LoggerAdapter]
