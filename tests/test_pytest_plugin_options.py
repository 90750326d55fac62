"""Tests for the callmox fixture's auto-verify configuration."""

from __future__ import annotations

import textwrap
import tomllib
import typing as t
from pathlib import Path

import pytest

from callmox import pytest_plugin

if t.TYPE_CHECKING:  # pragma: no cover - used for type checking only
    from _pytest.pytester import Pytester


class _StubConfig:
    """Mimic ``pytest.Config`` with controllable option values."""

    __slots__ = ("_cli", "_ini")

    def __init__(self, *, cli: bool | None = None, ini: bool = True) -> None:
        self._cli = cli
        self._ini = ini

    def getoption(self, name: str) -> bool | None:
        assert name == "callmox_auto_verify"
        return self._cli

    def getini(self, name: str) -> bool:
        assert name == "callmox_auto_verify"
        return self._ini


class _StubMarker:
    """Simple marker surrogate exposing keyword arguments."""

    __slots__ = ("kwargs",)

    def __init__(self, **kwargs: object) -> None:
        self.kwargs = kwargs


class _StubNode:
    """Minimal pytest node supporting marker lookup."""

    __slots__ = ("_marker",)

    def __init__(self, marker: _StubMarker | None = None) -> None:
        self._marker = marker

    def get_closest_marker(self, name: str) -> _StubMarker | None:
        return self._marker if name == "callmox" else None


class _StubRequest:
    """Minimal fixture request exposing ``config`` and ``node``."""

    __slots__ = ("config", "node")

    def __init__(self, config: _StubConfig, node: _StubNode) -> None:
        self.config = config
        self.node = node


@pytest.mark.parametrize(
    ("marker", "cli", "ini", "expected"),
    [
        (None, None, True, True),
        (None, None, False, False),
        (None, True, False, True),
        (None, False, True, False),
        (_StubMarker(auto_verify=False), True, True, False),
        (_StubMarker(auto_verify=True), False, False, True),
        (_StubMarker(), False, True, False),
    ],
)
def test_auto_verify_priority(
    marker: _StubMarker | None,
    cli: bool | None,
    *,
    ini: bool,
    expected: bool,
) -> None:
    """Marker beats CLI which beats the ini setting."""
    request = _StubRequest(_StubConfig(cli=cli, ini=ini), _StubNode(marker))
    enabled = pytest_plugin._auto_verify_enabled(
        t.cast("pytest.FixtureRequest", request)
    )
    assert enabled is expected


UNMET_TEST = textwrap.dedent(
    """
    import pytest

    pytest_plugins = ("callmox.pytest_plugin",)

    def test_unmet(callmox):
        callmox.mock("db").expects("fetch")

    @pytest.mark.callmox(auto_verify=False)
    def test_unmet_marker_off(callmox):
        callmox.mock("db").expects("fetch")

    def test_body_fails(callmox):
        callmox.mock("db").expects("fetch")
        assert False
    """
)


def test_ini_disables_auto_verify(pytester: Pytester) -> None:
    """The ini option turns teardown verification off."""
    pytester.makeini("[pytest]\ncallmox_auto_verify = false\n")
    pytester.makepyfile(UNMET_TEST)
    result = pytester.runpytest("-p", "callmox.pytest_plugin")
    result.assert_outcomes(passed=2, failed=1)


def test_cli_overrides_ini(pytester: Pytester) -> None:
    """--callmox-auto-verify re-enables verification despite the ini file."""
    pytester.makeini("[pytest]\ncallmox_auto_verify = false\n")
    pytester.makepyfile(UNMET_TEST)
    result = pytester.runpytest("-p", "callmox.pytest_plugin", "--callmox-auto-verify")
    result.assert_outcomes(passed=2, failed=1, errors=1)


def test_verification_does_not_mask_failed_body(pytester: Pytester) -> None:
    """A failing test body is reported once; verification only logs."""
    pytester.makepyfile(UNMET_TEST)
    result = pytester.runpytest(
        "-p", "callmox.pytest_plugin", "-k", "test_body_fails", "--log-cli-level=ERROR"
    )
    result.assert_outcomes(failed=1)
    result.stdout.fnmatch_lines(["*Error during callmox verification*"])


def test_explicit_verify_skips_teardown(pytester: Pytester) -> None:
    """Tests that verify themselves are not verified again."""
    pytester.makepyfile(
        """
        pytest_plugins = ("callmox.pytest_plugin",)

        def test_explicit(callmox):
            db = callmox.mock("db")
            db.expects("fetch").returns(1)
            assert db.fetch() == 1
            callmox.verify()
        """
    )
    result = pytester.runpytest("-p", "callmox.pytest_plugin")
    result.assert_outcomes(passed=1)


def test_plugin_registered_as_pytest_entry_point() -> None:
    """Installing the distribution loads the plugin under its module name.

    Using the module path as the entry point name lets ``-p`` and
    ``pytest_plugins`` references resolve to the already loaded plugin.
    """
    pyproject = Path(__file__).resolve().parent.parent / "pyproject.toml"
    with pyproject.open("rb") as fh:
        data = tomllib.load(fh)
    entry_points = data["project"]["entry-points"]["pytest11"]
    assert entry_points == {"callmox.pytest_plugin": "callmox.pytest_plugin"}
