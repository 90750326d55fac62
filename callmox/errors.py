"""Exception hierarchy for CallMox."""

from __future__ import annotations

import typing as t

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    import traceback


class CallMoxError(Exception):
    """Base class for all CallMox errors."""


class ContractViolationError(CallMoxError, ValueError):
    """Raised when the fluent expectation API is misused."""


class LifecycleError(CallMoxError):
    """Raised when the controller is used outside its valid lifecycle."""


class VerificationError(CallMoxError, AssertionError):
    """Raised when an expectation is not satisfied.

    The structured attributes let callers build their own reports without
    parsing the message. ``origin`` holds the frames where the expectation
    was declared, with frames from inside CallMox removed.
    """

    def __init__(
        self,
        message: str,
        *,
        owner: object = None,
        signature: str = "",
        expected: str = "",
        actual: int | None = None,
        origin: t.Sequence[traceback.FrameSummary] = (),
    ) -> None:
        super().__init__(message)
        self.owner = owner
        self.signature = signature
        self.expected = expected
        self.actual = actual
        self.origin = list(origin)


class UnexpectedInvocationError(VerificationError):
    """Raised when a mock receives a call no expectation accepts."""


__all__ = [
    "CallMoxError",
    "ContractViolationError",
    "LifecycleError",
    "UnexpectedInvocationError",
    "VerificationError",
]
