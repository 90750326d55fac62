"""The expectation object: matching, invocation counting and verification."""

from __future__ import annotations

import logging
import typing as t

from .backtrace import LIB_DIRECTORY, capture_trace, filter_trace, format_trace
from .cardinality import NEVER, ONCE, Cardinality
from .errors import ContractViolationError, VerificationError
from .matchers import AnyArgs, ComparatorArgs, ExactArgs, PredicateArgs
from .pretty import format_call, format_sections, pretty_print
from .responses import Deferred, Raise, Raised, ResponseSequence, as_producer

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    import traceback

    from .comparators import Comparator
    from .matchers import ArgumentMatcher

logger = logging.getLogger(__name__)

_UNSET = object()


class Expectation:
    """A rule describing how one method may be called and how it responds.

    Expectations are created by a container such as :class:`~callmox.Mock`
    and configured through chained calls::

        mock.expects("fetch").with_args(1).returns("a", "b").then().raises(KeyError)

    Every configuration method returns the expectation itself. Cardinality and
    argument setters replace the previous setting; ``returns`` and ``raises``
    append to the response script.
    """

    def __init__(
        self,
        owner: object,
        method_name: str,
        origin: t.Sequence[traceback.FrameSummary] | None = None,
    ) -> None:
        self.owner = owner
        self._method_name = method_name
        self.origin = list(origin) if origin is not None else capture_trace()
        self.cardinality = ONCE
        self.matcher: ArgumentMatcher = AnyArgs()
        self.responses = ResponseSequence()
        self.yield_args: tuple[object, ...] | None = None
        self._invoked_count = 0

    def __repr__(self) -> str:
        """Return a debug representation."""
        return (
            f"Expectation({self.signature}, expected={self.cardinality}, "
            f"invoked={self._invoked_count})"
        )

    @property
    def method_name(self) -> str:
        """Return the name of the expected method."""
        return self._method_name

    @property
    def invoked_count(self) -> int:
        """Return how many calls this expectation has accepted."""
        return self._invoked_count

    @property
    def signature(self) -> str:
        """Return the method name with the expected arguments, if any."""
        return format_call(self._method_name, self.matcher.describe())

    # ------------------------------------------------------------------
    # Cardinality
    # ------------------------------------------------------------------
    def times(
        self, count: int, maximum: int | None | object = _UNSET
    ) -> Expectation:
        """Require exactly *count* calls, or ``count..maximum`` calls.

        ``times(3)`` means exactly three calls. ``times(2, 4)`` accepts two to
        four calls and ``times(2, None)`` accepts two or more.
        """
        if maximum is _UNSET:
            self.cardinality = Cardinality.exactly(count)
        else:
            self.cardinality = Cardinality.between(count, t.cast("int | None", maximum))
        return self

    def once(self) -> Expectation:
        """Require exactly one call (the default)."""
        return self.times(1)

    def never(self) -> Expectation:
        """Forbid any call."""
        self.cardinality = NEVER
        return self

    def at_least(self, count: int) -> Expectation:
        """Require *count* or more calls."""
        self.cardinality = Cardinality.at_least(count)
        return self

    def at_least_once(self) -> Expectation:
        """Require one or more calls."""
        return self.at_least(1)

    def at_most(self, count: int) -> Expectation:
        """Allow up to *count* calls."""
        self.cardinality = Cardinality.at_most(count)
        return self

    def at_most_once(self) -> Expectation:
        """Allow zero or one call."""
        return self.at_most(1)

    # ------------------------------------------------------------------
    # Arguments
    # ------------------------------------------------------------------
    def with_args(
        self,
        *args: object,
        where: t.Callable[..., object] | None = None,
        **kwargs: object,
    ) -> Expectation:
        """Require arguments equal to ``args``/``kwargs``, or satisfying ``where``.

        ``where`` is called with the actual arguments and the call matches when
        it returns a truthy value. It cannot be combined with fixed arguments.
        """
        if where is not None:
            if args or kwargs:
                msg = "with_args() accepts fixed arguments or where=, not both"
                raise ContractViolationError(msg)
            return self.with_predicate(where)
        self.matcher = ExactArgs(args, kwargs)
        return self

    def with_predicate(self, func: t.Callable[..., object]) -> Expectation:
        """Accept calls for which ``func(*args, **kwargs)`` is truthy."""
        if not callable(func):
            msg = f"predicate must be callable, got {type(func).__name__}"
            raise ContractViolationError(msg)
        self.matcher = PredicateArgs(func)
        return self

    def with_matching_args(
        self, *comparators: Comparator, **kw_comparators: Comparator
    ) -> Expectation:
        """Use one comparator per argument to validate the call."""
        candidates = (*comparators, *kw_comparators.values())
        not_callable = [repr(c) for c in candidates if not callable(c)]
        if not_callable:
            msg = f"comparators must be callable: {', '.join(not_callable)}"
            raise ContractViolationError(msg)
        self.matcher = ComparatorArgs(comparators, kw_comparators)
        return self

    # ------------------------------------------------------------------
    # Behaviour
    # ------------------------------------------------------------------
    def yields(self, *values: object) -> Expectation:
        """Call the caller's callback with *values* on every invocation."""
        self.yield_args = values
        return self

    def returns(self, *values: object) -> Expectation:
        """Return *values* on consecutive calls, repeating the last one.

        A callable that needs no arguments is called at invocation time and
        its result returned. Wrap it in :class:`~callmox.responses.Value` to
        return the callable itself. Explicit producers are appended as given.
        """
        self.responses.append(as_producer(value) for value in values)
        return self

    def returns_computed(self, *funcs: t.Callable[[], object]) -> Expectation:
        """Return the result of calling each of *funcs* on consecutive calls."""
        self.responses.append([Deferred(func) for func in funcs])
        return self

    def raises(
        self,
        error: type[BaseException] | BaseException = RuntimeError,
        message: str | None = None,
    ) -> Expectation:
        """Raise *error* on the next call in the script."""
        self.responses.append([Raise(error, message)])
        return self

    def then(self) -> Expectation:
        """Return the expectation unchanged; reads well between responses."""
        return self

    # ------------------------------------------------------------------
    # Matching and invocation
    # ------------------------------------------------------------------
    def matches(
        self,
        name: str,
        args: t.Sequence[object] = (),
        kwargs: t.Mapping[str, object] | None = None,
    ) -> bool:
        """Return ``True`` if this expectation accepts the call."""
        if name != self._method_name:
            return False
        if not self.matcher.matches(tuple(args), kwargs or {}):
            return False
        return self.cardinality.allows_more(self._invoked_count)

    def explain_mismatch(
        self,
        name: str,
        args: t.Sequence[object] = (),
        kwargs: t.Mapping[str, object] | None = None,
    ) -> str:
        """Return why :meth:`matches` rejects the call, or an empty string."""
        if name != self._method_name:
            return f"method name {name!r} != {self._method_name!r}"
        if not self.matcher.matches(tuple(args), kwargs or {}):
            return f"arguments do not match {self.signature}"
        if not self.cardinality.allows_more(self._invoked_count):
            return (
                f"already called {self._invoked_count} time(s), "
                f"expected {self.cardinality}"
            )
        return ""

    def invoke(self, callback: t.Callable[..., object] | None = None) -> object:
        """Record one call and produce the next scripted response.

        When yield arguments are configured and *callback* is given, the
        callback runs before the response is produced. Errors from the
        callback and scripted errors propagate to the caller.
        """
        self._invoked_count += 1
        if self.yield_args is not None and callback is not None:
            callback(*self.yield_args)
        outcome = self.responses.next()
        if isinstance(outcome, Raised):
            # Re-raised instances must not accumulate frames across calls.
            raise outcome.error.with_traceback(None)
        return outcome.value

    # ------------------------------------------------------------------
    # Verification
    # ------------------------------------------------------------------
    @property
    def is_satisfied(self) -> bool:
        """Return ``True`` when the call count fits the cardinality."""
        return self.cardinality.is_satisfied(self._invoked_count)

    def verify(
        self, pre_check: t.Callable[[Expectation], object] | None = None
    ) -> None:
        """Raise :class:`VerificationError` unless the call count is acceptable."""
        if pre_check is not None:
            pre_check(self)
        if self.is_satisfied:
            return
        logger.debug("Unsatisfied expectation: %r", self)
        raise self._verification_error()

    def _verification_error(self) -> VerificationError:
        owner = pretty_print(self.owner)
        expected = self.cardinality.describe()
        origin = filter_trace(self.origin, LIB_DIRECTORY)
        msg = format_sections(
            "Unsatisfied expectation.",
            [
                ("Expected", f"{owner}.{self.signature}\nexpected calls: {expected}"),
                ("Observed calls", str(self._invoked_count)),
                ("Declared at", format_trace(origin[-1:])),
            ],
        )
        return VerificationError(
            msg,
            owner=self.owner,
            signature=self.signature,
            expected=expected,
            actual=self._invoked_count,
            origin=origin,
        )


__all__ = ["Expectation"]
