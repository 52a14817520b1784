"""Exception hierarchy for fallible."""

from __future__ import annotations

from typing import Any


class FallibleError(Exception):
    """Base exception for all fallible errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class UnwrapError(FallibleError):
    """A value was extracted from the wrong variant.

    Raised by ``unwrap()``/``expect()`` on a Failure and by ``expect_err()`` on
    a Success. These signal a broken caller assumption, not an operational
    failure, so the offending variant is kept for inspection.
    """

    def __init__(
        self,
        message: str,
        *,
        result: Any = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.result = result


class ConfigurationError(FallibleError):
    """Retry configuration validation or resolution failed."""
