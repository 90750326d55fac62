"""Scripted responses produced by an expectation on successive calls.

A :class:`ResponseSequence` holds producers in registration order. Each
invocation consumes the producer under the cursor; once the last producer is
reached it is repeated for every further call.
"""

from __future__ import annotations

import dataclasses as dc
import inspect
import typing as t

from .errors import ContractViolationError


@dc.dataclass(frozen=True, slots=True)
class Returned:
    """Outcome carrying a value for the caller."""

    value: object


@dc.dataclass(frozen=True, slots=True)
class Raised:
    """Outcome carrying an error to raise at the caller."""

    error: BaseException


type Outcome = Returned | Raised


@dc.dataclass(frozen=True, slots=True)
class Value:
    """Return ``value`` unchanged."""

    value: object

    def produce(self) -> Outcome:
        """Return the stored value."""
        return Returned(self.value)


@dc.dataclass(frozen=True, slots=True)
class Deferred:
    """Return the result of calling ``compute`` at invocation time."""

    compute: t.Callable[[], object]

    def __post_init__(self) -> None:
        """Reject non-callables early."""
        if not callable(self.compute):
            msg = f"Deferred requires a callable, got {type(self.compute).__name__}"
            raise ContractViolationError(msg)

    def produce(self) -> Outcome:
        """Run ``compute`` and return its result."""
        return Returned(self.compute())


@dc.dataclass(frozen=True, slots=True)
class Raise:
    """Raise ``error`` with an optional ``message``.

    ``error`` is either an exception class, instantiated on every call, or
    an exception instance raised as is.
    """

    error: type[BaseException] | BaseException = RuntimeError
    message: str | None = None

    def __post_init__(self) -> None:
        """Validate the error kind and message combination."""
        if isinstance(self.error, BaseException):
            if self.message is not None:
                msg = "message cannot be combined with an exception instance"
                raise ContractViolationError(msg)
            return
        if not (isinstance(self.error, type) and issubclass(self.error, BaseException)):
            msg = f"cannot raise {self.error!r}: not an exception class or instance"
            raise ContractViolationError(msg)

    def produce(self) -> Outcome:
        """Build the error to raise."""
        if isinstance(self.error, BaseException):
            return Raised(self.error)
        if self.message is None:
            return Raised(self.error())
        return Raised(self.error(self.message))


type Producer = Value | Deferred | Raise

_NO_RESPONSE: t.Final[Value] = Value(None)


def _takes_no_arguments(value: object) -> bool:
    """Return ``True`` for callables that can be invoked without arguments."""
    if isinstance(value, type) or not callable(value):
        return False
    try:
        inspect.signature(value).bind()
    except (TypeError, ValueError):
        return False
    return True


def as_producer(value: object) -> Producer:
    """Wrap *value* for a response script.

    Producers are returned unchanged. Functions, lambdas and partials that
    need no arguments become :class:`Deferred`; anything else is a
    :class:`Value`. Use ``Value(func)`` to return such a callable itself.
    """
    if isinstance(value, Value | Deferred | Raise):
        return value
    if _takes_no_arguments(value):
        return Deferred(t.cast("t.Callable[[], object]", value))
    return Value(value)


class ResponseSequence:
    """Append-only list of producers with a clamped cursor."""

    __slots__ = ("_cursor", "_producers")

    def __init__(self, producers: t.Iterable[Producer] = ()) -> None:
        self._producers: list[Producer] = list(producers)
        self._cursor = 0

    def __len__(self) -> int:
        """Return the number of registered producers."""
        return len(self._producers)

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"ResponseSequence({self._producers!r}, cursor={self._cursor})"

    @property
    def producers(self) -> tuple[Producer, ...]:
        """Return the registered producers in order."""
        return tuple(self._producers)

    @property
    def cursor(self) -> int:
        """Return the index of the producer used by the next call."""
        return self._cursor

    def append(self, producers: t.Iterable[Producer]) -> None:
        """Add *producers* after the existing ones."""
        self._producers.extend(producers)

    def next(self) -> Outcome:
        """Consume one step of the script and return its outcome."""
        if not self._producers:
            return _NO_RESPONSE.produce()
        producer = self._producers[self._cursor]
        self._cursor = min(self._cursor + 1, len(self._producers) - 1)
        return producer.produce()


__all__ = [
    "Deferred",
    "Outcome",
    "Producer",
    "Raise",
    "Raised",
    "ResponseSequence",
    "Returned",
    "Value",
    "as_producer",
]
