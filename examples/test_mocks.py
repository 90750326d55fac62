"""Example tests demonstrating strict mocks."""

from __future__ import annotations

import typing as t

import pytest

from callmox.comparators import StartsWith

pytest_plugins = ("callmox.pytest_plugin",)

if t.TYPE_CHECKING:  # pragma: no cover - typing only
    from callmox.controller import CallMox
    from callmox.mock import Mock


def fetch_twice(db: Mock, key: str) -> list[object]:
    """Code under test: read the same key twice."""
    return [db.get(key), db.get(key)]


def test_mock_enforces_args_and_call_count(callmox: CallMox) -> None:
    """Mocks require exact arguments and can enforce call counts."""
    db = callmox.mock("db")
    db.expects("get").with_args("user:1").returns("alice").times(2)

    assert fetch_twice(db, "user:1") == ["alice", "alice"]


def test_mock_with_matching_args(callmox: CallMox) -> None:
    """Mocks can use comparators for flexible argument matching."""
    http = callmox.mock("http")
    http.expects("get").with_matching_args(StartsWith("https://")).returns(200)

    assert http.get("https://example.com") == 200


def test_mock_scripts_a_failure(callmox: CallMox) -> None:
    """Responses can end in an error that repeats on later calls."""
    queue = callmox.mock("queue")
    queue.expects("pop").at_least(2).returns("job-1").then().raises(IndexError)

    assert queue.pop() == "job-1"
    with pytest.raises(IndexError):
        queue.pop()
    with pytest.raises(IndexError):
        queue.pop()


@pytest.mark.callmox(auto_verify=False)
def test_mock_verified_explicitly(callmox: CallMox) -> None:
    """Tests can verify on their own terms and inspect the failure."""
    db = callmox.mock("db")
    db.expects("commit")

    with pytest.raises(AssertionError, match="Unsatisfied expectation"):
        callmox.verify()
