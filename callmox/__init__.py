"""Expectation matching and verification for Python test doubles.

Declare how a method should be called, script what it returns or raises,
exercise the code under test, then verify every expectation was met::

    mox = CallMox()
    db = mox.mock("db")
    db.expects("fetch").with_args(42).returns({"id": 42})
    assert db.fetch(42) == {"id": 42}
    mox.verify()
"""

from __future__ import annotations

from .cardinality import Cardinality
from .comparators import Any, Contains, IsA, Predicate, Regex, StartsWith
from .controller import CallMox, Phase
from .errors import (
    CallMoxError,
    ContractViolationError,
    LifecycleError,
    UnexpectedInvocationError,
    VerificationError,
)
from .expectation import Expectation
from .mock import MethodProxy, Mock
from .responses import Deferred, Raise, ResponseSequence, Value

__all__ = [
    "Any",
    "CallMox",
    "CallMoxError",
    "Cardinality",
    "Contains",
    "ContractViolationError",
    "Deferred",
    "Expectation",
    "IsA",
    "LifecycleError",
    "MethodProxy",
    "Mock",
    "Phase",
    "Predicate",
    "Raise",
    "Regex",
    "ResponseSequence",
    "StartsWith",
    "UnexpectedInvocationError",
    "Value",
    "VerificationError",
]
