"""Permitted invocation counts for an expectation."""

from __future__ import annotations

import dataclasses as dc
import typing as t

from ._validators import validate_call_count
from .errors import ContractViolationError


@dc.dataclass(frozen=True, slots=True)
class Cardinality:
    """Closed range ``minimum..maximum`` of allowed invocation counts.

    ``maximum`` is ``None`` when the range has no upper bound. Instances are
    immutable; expectations replace their cardinality wholesale rather than
    adjusting it.
    """

    minimum: int
    maximum: int | None

    def __post_init__(self) -> None:
        """Reject negative bounds and inverted ranges."""
        validate_call_count(self.minimum, name="minimum")
        if self.maximum is None:
            return
        validate_call_count(self.maximum, name="maximum")
        if self.maximum < self.minimum:
            msg = (
                f"maximum ({self.maximum}) must not be lower than "
                f"minimum ({self.minimum})"
            )
            raise ContractViolationError(msg)

    @classmethod
    def exactly(cls, count: int) -> Cardinality:
        """Return a cardinality accepting exactly *count* calls."""
        return cls(count, count)

    @classmethod
    def between(cls, minimum: int, maximum: int | None) -> Cardinality:
        """Return a cardinality accepting ``minimum..maximum`` calls."""
        return cls(minimum, maximum)

    @classmethod
    def at_least(cls, count: int) -> Cardinality:
        """Return an unbounded cardinality starting at *count*."""
        return cls(count, None)

    @classmethod
    def at_most(cls, count: int) -> Cardinality:
        """Return a cardinality accepting ``0..count`` calls."""
        return cls(0, count)

    @property
    def is_bounded(self) -> bool:
        """Return ``True`` when an upper bound exists."""
        return self.maximum is not None

    def is_satisfied(self, count: int) -> bool:
        """Return ``True`` when *count* lies within the permitted range."""
        if count < self.minimum:
            return False
        return self.maximum is None or count <= self.maximum

    def allows_more(self, count: int) -> bool:
        """Return ``True`` if another call is permitted after *count* calls."""
        return self.maximum is None or count < self.maximum

    def describe(self) -> str:
        """Return a short human readable description of the range."""
        if not self.is_bounded:
            return f"at least {self.minimum}"
        if self.minimum == self.maximum:
            return f"exactly {self.minimum}"
        if self.minimum == 0:
            return f"at most {self.maximum}"
        return f"between {self.minimum} and {self.maximum}"

    def __str__(self) -> str:
        """Return :meth:`describe`."""
        return self.describe()


ONCE: t.Final[Cardinality] = Cardinality.exactly(1)
NEVER: t.Final[Cardinality] = Cardinality.exactly(0)
ANY_NUMBER: t.Final[Cardinality] = Cardinality.at_least(0)

__all__ = ["ANY_NUMBER", "NEVER", "ONCE", "Cardinality"]
