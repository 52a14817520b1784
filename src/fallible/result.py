"""Result type for explicit success/failure values.

A ``Result[T, E]`` is exactly one of two variants:

- ``Success[T]`` carries the value of an operation that completed.
- ``Failure[E]`` carries the error of an operation that did not.

Transformations (``map``, ``and_then``, ``map_err``) run on one channel and
pass the other through untouched, so a chain of calls never needs to branch.
At the boundary, ``unwrap_or`` extracts a value safely while ``unwrap`` and
``expect`` assert success and raise ``UnwrapError`` when the assertion is
wrong. Both variants support structural pattern matching::

    match fetch_user(user_id):
        case Success(user):
            ...
        case Failure(error):
            ...
"""

from __future__ import annotations

import dataclasses
import traceback
import typing

from fallible._display import to_display_string
from fallible.errors import UnwrapError

if typing.TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterator

T = typing.TypeVar("T")
E = typing.TypeVar("E")

_MUTABLE_FAILURE_FIELDS = frozenset({"attempted"})


def _capture_trace() -> str:
    """Return the caller's stack as text, without frames from this module."""
    frames = traceback.extract_stack()
    while frames and (
        frames[-1].filename == __file__
        # dataclass-generated __init__
        or (frames[-1].filename.startswith("<") and frames[-1].name == "__init__")
    ):
        frames.pop()
    return "".join(traceback.format_list(frames)).rstrip("\n")


@dataclasses.dataclass(frozen=True, slots=True)
class Success[T]:
    """A successful result carrying ``value``."""

    value: T

    @property
    def is_success(self) -> typing.Literal[True]:
        return True

    @property
    def is_failure(self) -> typing.Literal[False]:
        return False

    def __iter__(self) -> Iterator[typing.Any]:
        """Iterate the contained value when it is iterable, else nothing."""
        try:
            return iter(self.value)  # type: ignore[call-overload]
        except TypeError:
            return iter(())

    def __str__(self) -> str:
        return f"Success({to_display_string(self.value)})"

    def unwrap(self) -> T:
        return self.value

    def safe_unwrap(self) -> T:
        """Return the contained value.

        Behaves exactly like ``unwrap()`` but only exists on ``Success``, so a
        type checker rejects the call as soon as the failure channel of the
        surrounding ``Result`` becomes inhabited.
        """
        return self.value

    def unwrap_or(self, fallback: object) -> T:
        del fallback
        return self.value

    def expect(self, msg: str) -> T:
        del msg
        return self.value

    def expect_err(self, msg: str) -> typing.NoReturn:
        raise UnwrapError(msg, result=self)

    def map[U](self, fn: Callable[[T], U]) -> Success[U]:
        return Success(fn(self.value))

    def and_then[R](self, fn: Callable[[T], R]) -> R:
        """Return ``fn(value)``; ``fn`` is expected to produce a Result."""
        return fn(self.value)

    def map_err(self, fn: Callable[[typing.Any], object]) -> Success[T]:
        del fn
        return self


@dataclasses.dataclass(eq=True, unsafe_hash=True, slots=True)
class Failure[E]:
    """A failed result carrying ``error``.

    The caller's stack is captured when the Failure is created and shown by
    ``unwrap()``, ``expect()`` and ``trace``.

    ``attempted`` is the only attribute that may change after construction.
    ``attempt()`` skips retries for a Failure that already has it set, which
    lets nested retry loops avoid retrying the same outcome twice.
    """

    error: E
    attempted: bool = dataclasses.field(default=False, init=False, compare=False)
    _trace: str = dataclasses.field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._trace = _capture_trace()

    def __setattr__(self, name: str, value: object) -> None:
        if name not in _MUTABLE_FAILURE_FIELDS and hasattr(self, name):
            raise dataclasses.FrozenInstanceError(f"cannot assign to field {name!r}")
        object.__setattr__(self, name, value)

    @property
    def is_success(self) -> typing.Literal[False]:
        return False

    @property
    def is_failure(self) -> typing.Literal[True]:
        return True

    @property
    def trace(self) -> str:
        """Display string followed by the stack captured at construction."""
        return f"{self}\n{self._trace}"

    def __iter__(self) -> Iterator[typing.Any]:
        return iter(())

    def __str__(self) -> str:
        return f"Failure({to_display_string(self.error)})"

    def _raise(self, message: str) -> typing.NoReturn:
        exc = UnwrapError(message, result=self)
        if isinstance(self.error, BaseException):
            raise exc from self.error
        raise exc

    def unwrap(self) -> typing.NoReturn:
        self._raise(
            f"Tried to unwrap Failure: {to_display_string(self.error)}\n{self._trace}"
        )

    def unwrap_or[U](self, fallback: U | Callable[[E], U]) -> U:
        """Return ``fallback``, or ``fallback(error)`` when it is callable."""
        if callable(fallback):
            return fallback(self.error)
        return fallback

    def expect(self, msg: str) -> typing.NoReturn:
        self._raise(f"{msg} - Failure: {to_display_string(self.error)}\n{self._trace}")

    def expect_err(self, msg: str) -> E:
        del msg
        return self.error

    def map(self, fn: Callable[[typing.Any], object]) -> Failure[E]:
        del fn
        return self

    def and_then(self, fn: Callable[[typing.Any], object]) -> Failure[E]:
        del fn
        return self

    def map_err[F](self, fn: Callable[[E], F]) -> Failure[F]:
        return Failure(fn(self.error))


Result = Success[T] | Failure[E]


def ok[T](value: T) -> Success[T]:
    return Success(value)


def err[E](error: E) -> Failure[E]:
    return Failure(error)


def wrap[T](operation: Callable[[], T]) -> Result[T, Exception]:
    """Run ``operation`` and capture its outcome.

    The return value becomes a ``Success``; a raised exception becomes a
    ``Failure`` holding that exact exception object.
    """
    try:
        return Success(operation())
    except Exception as exc:
        return Failure(exc)


async def wrap_async[T](
    operation: Callable[[], Awaitable[T]],
) -> Result[T, Exception]:
    """Await ``operation()`` and capture its outcome.

    Raising before an awaitable is produced and raising while it is awaited
    both yield a ``Failure``. Cancellation is not captured.
    """
    try:
        pending = operation()
    except Exception as exc:
        return Failure(exc)
    try:
        return Success(await pending)
    except Exception as exc:
        return Failure(exc)


def is_result(
    value: object,
) -> typing.TypeGuard[Success[typing.Any] | Failure[typing.Any]]:
    """Return True only for instances of the two Result variants."""
    return isinstance(value, (Success, Failure))


__all__ = [
    "Failure",
    "Result",
    "Success",
    "err",
    "is_result",
    "ok",
    "wrap",
    "wrap_async",
]
