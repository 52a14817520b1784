"""fallible: success and failure as explicit values.

Public API:
    - Success / Failure / Result: the two variants and their union
    - ok() / err(): variant constructors
    - wrap() / wrap_async(): turn raising operations into Results
    - is_result(): variant type guard
    - attempt(): bounded async retry over Result-producing operations
    - AttemptPolicy / resolve_policy(): retry configuration
"""

from __future__ import annotations

import logging

from fallible.config import resolve_policy
from fallible.errors import ConfigurationError, FallibleError, UnwrapError
from fallible.result import (
    Failure,
    Result,
    Success,
    err,
    is_result,
    ok,
    wrap,
    wrap_async,
)
from fallible.retry import AttemptPolicy, attempt

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("fallible")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("fallible").addHandler(logging.NullHandler())

__all__ = [
    "AttemptPolicy",
    "ConfigurationError",
    "Failure",
    "FallibleError",
    "Result",
    "Success",
    "UnwrapError",
    "attempt",
    "err",
    "is_result",
    "ok",
    "resolve_policy",
    "wrap",
    "wrap_async",
]
