"""Example tests demonstrating stub usage."""

from __future__ import annotations

import typing as t

from callmox.responses import Deferred

pytest_plugins = ("callmox.pytest_plugin",)

if t.TYPE_CHECKING:  # pragma: no cover - typing only
    from callmox.controller import CallMox


def test_stub_returns_canned_value(callmox: CallMox) -> None:
    """Stubs provide canned responses without strict verification."""
    config = callmox.stub("config", get="production")

    assert config.get("env") == "production"
    assert config.get("env") == "production"


def test_stub_that_is_never_called(callmox: CallMox) -> None:
    """Unused stubs do not fail verification."""
    callmox.stub("cache", get=None)


def test_stub_computes_each_response(callmox: CallMox) -> None:
    """Deferred responses are evaluated on every call."""
    counter = iter(range(100))
    ids = callmox.mock("ids")
    ids.stubs("next").returns(Deferred(lambda: next(counter)))

    assert [ids.next(), ids.next(), ids.next()] == [0, 1, 2]


def test_stub_everything(callmox: CallMox) -> None:
    """A stub_everything mock tolerates calls nobody declared."""
    logger = callmox.stub_everything("logger", level=10)

    assert logger.level() == 10
    assert logger.info("hello") is None


def test_stub_yields_to_a_callback(callmox: CallMox) -> None:
    """Yielded values reach the callback passed by the caller."""
    rows = callmox.mock("rows")
    rows.stubs("each").yields("a", "b").returns(2)
    seen: list[object] = []

    def collect(*values: object) -> None:
        seen.extend(values)

    assert rows.each.with_callback(collect)() == 2
    assert seen == ["a", "b"]
