"""Mock objects owning expectations and dispatching calls to them."""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as t

from .backtrace import LIB_DIRECTORY, capture_trace, filter_trace
from .cardinality import ANY_NUMBER
from .errors import UnexpectedInvocationError
from .expectation import Expectation
from .pretty import format_args, format_call, format_sections, numbered

logger = logging.getLogger(__name__)


@dc.dataclass(frozen=True, slots=True)
class MethodProxy:
    """Callable standing in for one method of a :class:`Mock`."""

    mock: Mock = dc.field(repr=False)
    name: str
    callback: t.Callable[..., object] | None = None

    def __call__(self, *args: object, **kwargs: object) -> object:
        """Dispatch the call to the owning mock."""
        return self.mock.dispatch(self.name, args, kwargs, self.callback)

    def with_callback(self, callback: t.Callable[..., object]) -> MethodProxy:
        """Return a proxy passing *callback* to expectations that yield."""
        return dc.replace(self, callback=callback)


class Mock:
    """A test double whose behaviour is defined by expectations.

    Any public attribute that is not part of this class's own API returns a
    :class:`MethodProxy`; calling it is routed through :meth:`dispatch`. Use
    :meth:`dispatch` directly to call a method whose name clashes with the
    mock API (for example ``verify``).
    """

    def __init__(
        self, name: str | None = None, *, stub_everything: bool = False
    ) -> None:
        self.name = name
        self.stub_everything = stub_everything
        self._expectations: list[Expectation] = []

    def __repr__(self) -> str:
        """Return ``Mock('name')`` or ``Mock(0x…)`` for anonymous mocks."""
        if self.name is not None:
            return f"Mock({self.name!r})"
        return f"Mock({id(self):#x})"

    def __getattr__(self, name: str) -> MethodProxy:
        """Return a proxy for method *name*."""
        if name.startswith("_"):
            raise AttributeError(name)
        return MethodProxy(self, name)

    @property
    def expectations(self) -> tuple[Expectation, ...]:
        """Return expectations in registration order."""
        return tuple(self._expectations)

    # ------------------------------------------------------------------
    # Declaring expectations
    # ------------------------------------------------------------------
    def expects(self, method_name: str) -> Expectation:
        """Add an expectation that *method_name* is called exactly once."""
        expectation = Expectation(self, method_name, capture_trace(skip=1))
        self._expectations.append(expectation)
        return expectation

    def stubs(self, method_name: str) -> Expectation:
        """Add an expectation for *method_name* that accepts any call count."""
        expectation = Expectation(self, method_name, capture_trace(skip=1))
        expectation.cardinality = ANY_NUMBER
        self._expectations.append(expectation)
        return expectation

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------
    def find_match(
        self,
        name: str,
        args: t.Sequence[object] = (),
        kwargs: t.Mapping[str, object] | None = None,
    ) -> Expectation | None:
        """Return the most recently added expectation accepting the call."""
        for expectation in reversed(self._expectations):
            if expectation.matches(name, args, kwargs):
                return expectation
        return None

    def dispatch(
        self,
        name: str,
        args: t.Sequence[object] = (),
        kwargs: t.Mapping[str, object] | None = None,
        callback: t.Callable[..., object] | None = None,
    ) -> object:
        """Route a call to the matching expectation and return its response."""
        expectation = self.find_match(name, args, kwargs)
        if expectation is None:
            return self._unexpected(name, args, kwargs or {})
        logger.debug("%r.%s dispatched to %r", self, name, expectation)
        return expectation.invoke(callback)

    def _unexpected(
        self, name: str, args: t.Sequence[object], kwargs: t.Mapping[str, object]
    ) -> object:
        if self.stub_everything:
            logger.debug("%r.%s not expected; stubbed to return None", self, name)
            return None
        call = format_call(name, format_args(args, kwargs))
        candidates = [exp for exp in self._expectations if exp.method_name == name]
        reasons = [
            f"{exp.signature}\n{exp.explain_mismatch(name, args, kwargs)}"
            for exp in candidates
        ]
        msg = format_sections(
            "Unexpected invocation.",
            [
                ("Actual call", f"{self!r}.{call}"),
                ("Expectations for this method", numbered(reasons)),
            ],
        )
        raise UnexpectedInvocationError(
            msg,
            owner=self,
            signature=call,
            origin=filter_trace(capture_trace(), LIB_DIRECTORY),
        )

    # ------------------------------------------------------------------
    # Verification
    # ------------------------------------------------------------------
    def verify(
        self, pre_check: t.Callable[[Expectation], object] | None = None
    ) -> None:
        """Verify every expectation in registration order."""
        for expectation in self._expectations:
            expectation.verify(pre_check)


__all__ = ["MethodProxy", "Mock"]
