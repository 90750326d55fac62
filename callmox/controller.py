"""CallMox controller owning a group of mocks."""

from __future__ import annotations

import enum
import logging
import types  # noqa: TC003
import typing as t

from .errors import LifecycleError
from .mock import Mock

if t.TYPE_CHECKING:
    from .expectation import Expectation

logger = logging.getLogger(__name__)


class Phase(enum.StrEnum):
    """Lifecycle phases for :class:`CallMox`."""

    ACTIVE = "ACTIVE"
    VERIFY = "VERIFY"


class CallMox:
    """Create mocks and verify all of them together."""

    def __init__(self, *, verify_on_exit: bool = True) -> None:
        """Create a new controller.

        Parameters
        ----------
        verify_on_exit:
            When ``True`` (the default), :meth:`__exit__` calls :meth:`verify`
            if the ``with`` block completed without raising.
        """
        self._verify_on_exit = verify_on_exit
        self._phase = Phase.ACTIVE
        self._mocks: list[Mock] = []

    @property
    def phase(self) -> Phase:
        """Return the current lifecycle phase."""
        return self._phase

    @property
    def mocks(self) -> tuple[Mock, ...]:
        """Return the mocks created by this controller."""
        return tuple(self._mocks)

    # ------------------------------------------------------------------
    # Context manager protocol
    # ------------------------------------------------------------------
    def __enter__(self) -> CallMox:
        """Enter the context."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: types.TracebackType | None,
    ) -> None:
        """Exit the context, verifying when configured to."""
        if not self._verify_on_exit or self._phase is not Phase.ACTIVE:
            return
        if exc_type is None:
            self.verify()
            return
        try:
            self.verify()
        except AssertionError as err:
            logger.warning(
                "Verification skipped after %s: %s", exc_type.__name__, err
            )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def mock(self, name: str | None = None, **expected: object) -> Mock:
        """Create a mock expecting one call to each method in *expected*.

        Each keyword names a method and the value it returns.
        """
        dbl = self._new_mock(name)
        for method_name, value in expected.items():
            dbl.expects(method_name).returns(value)
        return dbl

    def stub(self, name: str | None = None, **stubbed: object) -> Mock:
        """Create a mock answering any number of calls to methods in *stubbed*."""
        dbl = self._new_mock(name)
        for method_name, value in stubbed.items():
            dbl.stubs(method_name).returns(value)
        return dbl

    def stub_everything(self, name: str | None = None, **stubbed: object) -> Mock:
        """Create a stub that returns ``None`` for unexpected calls."""
        dbl = self._new_mock(name, stub_everything=True)
        for method_name, value in stubbed.items():
            dbl.stubs(method_name).returns(value)
        return dbl

    def verify(
        self, pre_check: t.Callable[[Expectation], object] | None = None
    ) -> None:
        """Verify every mock and finish the lifecycle.

        The controller moves to :attr:`Phase.VERIFY` even when verification
        fails.
        """
        self._require_phase(Phase.ACTIVE, "verify")
        try:
            for dbl in self._mocks:
                dbl.verify(pre_check)
        finally:
            self._phase = Phase.VERIFY
        logger.debug("Verified %d mock(s)", len(self._mocks))

    def reset(self) -> None:
        """Forget every mock and return to :attr:`Phase.ACTIVE`."""
        self._mocks.clear()
        self._phase = Phase.ACTIVE

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _new_mock(self, name: str | None, *, stub_everything: bool = False) -> Mock:
        self._require_phase(Phase.ACTIVE, "mock")
        dbl = Mock(name, stub_everything=stub_everything)
        self._mocks.append(dbl)
        return dbl

    def _require_phase(self, expected: Phase, action: str) -> None:
        """Ensure we're in ``expected`` phase before executing ``action``."""
        if self._phase != expected:
            msg = (
                f"Cannot call {action}(): not in '{expected.name.lower()}' phase "
                f"(current phase: {self._phase.name.lower()})"
            )
            raise LifecycleError(msg)


__all__ = ["CallMox", "Phase"]
