"""Argument matchers deciding whether a call's arguments fit an expectation."""

from __future__ import annotations

import dataclasses as dc
import typing as t

from .pretty import format_args

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .comparators import Comparator

type Args = tuple[object, ...]
type Kwargs = t.Mapping[str, object]


class ArgumentMatcher(t.Protocol):
    """Decide whether a call's arguments are acceptable."""

    def matches(self, args: Args, kwargs: Kwargs) -> bool:
        """Return ``True`` if the arguments satisfy this matcher."""
        ...

    def describe(self) -> str | None:
        """Return the expected argument list, or ``None`` for any arguments."""
        ...


@dc.dataclass(frozen=True, slots=True)
class AnyArgs:
    """Accept every argument list."""

    def matches(self, args: Args, kwargs: Kwargs) -> bool:
        """Return ``True`` for any arguments."""
        return True

    def describe(self) -> str | None:
        """Return ``None``; signatures show the bare method name."""
        return None


@dc.dataclass(frozen=True, slots=True)
class ExactArgs:
    """Accept only arguments equal to ``args`` and ``kwargs``."""

    args: tuple[object, ...] = ()
    kwargs: t.Mapping[str, object] = dc.field(default_factory=dict)

    def matches(self, args: Args, kwargs: Kwargs) -> bool:
        """Compare positionally and by keyword using ``==``."""
        if tuple(args) != tuple(self.args):
            return False
        return dict(kwargs) == dict(self.kwargs)

    def describe(self) -> str | None:
        """Render the expected argument list."""
        return format_args(self.args, self.kwargs)


@dc.dataclass(frozen=True, slots=True)
class PredicateArgs:
    """Accept arguments for which ``func(*args, **kwargs)`` is truthy.

    Exceptions raised by ``func`` are not caught.
    """

    func: t.Callable[..., object]

    def matches(self, args: Args, kwargs: Kwargs) -> bool:
        """Call ``func`` with the actual arguments."""
        return bool(self.func(*args, **kwargs))

    def describe(self) -> str | None:
        """Name the predicate in place of an argument list."""
        name = getattr(self.func, "__qualname__", None) or repr(self.func)
        return f"<where {name}>"


@dc.dataclass(frozen=True, slots=True)
class ComparatorArgs:
    """Validate each argument with its own comparator."""

    comparators: tuple[Comparator, ...] = ()
    kw_comparators: t.Mapping[str, Comparator] = dc.field(default_factory=dict)

    def matches(self, args: Args, kwargs: Kwargs) -> bool:
        """Require one comparator per argument and every comparator to accept."""
        if len(args) != len(self.comparators):
            return False
        if set(kwargs) != set(self.kw_comparators):
            return False
        for arg, comparator in zip(args, self.comparators, strict=True):
            if not comparator(arg):
                return False
        return all(
            comparator(kwargs[key]) for key, comparator in self.kw_comparators.items()
        )

    def describe(self) -> str | None:
        """Render the comparators in argument position."""
        return format_args(self.comparators, self.kw_comparators)


__all__ = [
    "AnyArgs",
    "ArgumentMatcher",
    "ComparatorArgs",
    "ExactArgs",
    "PredicateArgs",
]
