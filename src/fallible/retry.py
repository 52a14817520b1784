"""Bounded async retry over Result-producing operations.

Design goals:
- Retry decisions come from the Result channel only
- Explicit state (policy + attempt counter)
- Raised exceptions are never retried; they propagate to the caller
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, replace
import logging
from typing import TYPE_CHECKING, Any

from fallible.errors import ConfigurationError
from fallible.result import Failure

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from fallible.result import Result

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttemptPolicy:
    """How many times to call an operation and how long to wait in between.

    ``timeout`` is the delay before the second call, in milliseconds. It is
    not a deadline for individual calls.
    """

    attempts: int = 3
    timeout: float = 1000
    backoff: float = 0.5

    def __post_init__(self) -> None:
        """Validate invariants to keep retry behavior predictable."""
        if self.attempts < 1:
            raise ConfigurationError(
                f"attempts must be >= 1, got {self.attempts}",
                hint="attempts counts the first call, so 1 disables retries.",
            )
        if self.timeout < 0:
            raise ConfigurationError(
                f"timeout must be >= 0, got {self.timeout}",
                hint="timeout is the delay between calls in milliseconds.",
            )
        if self.backoff < 0:
            raise ConfigurationError(
                f"backoff must be >= 0, got {self.backoff}",
                hint="Use 0 for a constant delay between calls.",
            )


def compute_delay_ms(policy: AttemptPolicy, attempt_count: int) -> float:
    """Delay before the call following call number ``attempt_count`` (>= 2).

    The first wait is always ``policy.timeout``; later waits grow with the
    count of calls made so far: ``timeout * (1 + backoff) ** attempt_count``.
    """
    return policy.timeout * (1 + policy.backoff) ** attempt_count


async def attempt[T, E](
    operation: Callable[[], Awaitable[Result[T, E]]],
    *,
    attempts: int | None = None,
    timeout: float | None = None,
    backoff: float | None = None,
    policy: AttemptPolicy | None = None,
) -> Result[T, E]:
    """Call ``operation`` until it succeeds or the attempts run out.

    Args:
        operation: Zero-argument coroutine function returning a Result.
        attempts: Maximum number of calls, including the first.
        timeout: Initial delay between calls in milliseconds.
        backoff: Growth factor applied to the delay.
        policy: Base policy; explicit keyword arguments override its fields.

    Returns:
        The first Success, a Failure already marked ``attempted``, or the
        last Failure once every attempt was used. The ``attempted`` flag is
        never modified here.

    Raises:
        ConfigurationError: The resolved policy is invalid, e.g. ``attempts=0``
            or a negative ``timeout``. This is checked before ``operation`` is
            called, so such values raise instead of falling back to a single
            call.
    """
    base = policy if policy is not None else AttemptPolicy()
    overrides: dict[str, Any] = {
        k: v
        for k, v in (("attempts", attempts), ("timeout", timeout), ("backoff", backoff))
        if v is not None
    }
    policy = replace(base, **overrides) if overrides else base

    count = 1
    delay_ms = policy.timeout
    result = await operation()

    while isinstance(result, Failure):
        if result.attempted:
            log.debug("Failure already attempted; not retrying: %s", result)
            break
        if count >= policy.attempts:
            log.info("Giving up after %d attempt(s): %s", count, result)
            break

        log.debug(
            "Attempt %d/%d failed; retrying in %.1fms",
            count,
            policy.attempts,
            delay_ms,
        )
        await asyncio.sleep(delay_ms / 1000)

        result = await operation()
        count += 1
        delay_ms = compute_delay_ms(policy, count)

    return result


__all__ = ["AttemptPolicy", "attempt", "compute_delay_ms"]
