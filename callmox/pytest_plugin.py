"""Pytest plugin providing the ``callmox`` fixture."""

from __future__ import annotations

import logging
import typing as t

import pytest

from .controller import CallMox, Phase

logger = logging.getLogger(__name__)


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register command-line and ini options for the plugin."""
    group = parser.getgroup("callmox")
    group.addoption(
        "--callmox-auto-verify",
        action="store_true",
        dest="callmox_auto_verify",
        default=None,
        help=(
            "Verify the callmox fixture during teardown. "
            "Overrides the pytest.ini setting."
        ),
    )
    group.addoption(
        "--no-callmox-auto-verify",
        action="store_false",
        dest="callmox_auto_verify",
        default=None,
        help=(
            "Leave verification of the callmox fixture to the test. "
            "Overrides the pytest.ini setting."
        ),
    )
    parser.addini(
        "callmox_auto_verify",
        "Verify the callmox fixture during teardown.",
        type="bool",
        default=True,
    )


def pytest_configure(config: pytest.Config) -> None:
    """Register plugin-specific markers."""
    config.addinivalue_line(
        "markers",
        (
            "callmox(auto_verify: bool = True): override automatic verify() "
            "during teardown for a single test."
        ),
    )


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(
    item: pytest.Item, call: pytest.CallInfo[t.Any]
) -> t.Generator[None, None, None]:
    """Attach the report of each phase to the test item.

    Teardown uses the call report to decide whether a verification failure
    should fail an otherwise passing test.
    """
    del call
    outcome = yield
    rep = outcome.get_result()
    setattr(item, f"rep_{rep.when}", rep)


def _auto_verify_enabled(request: pytest.FixtureRequest) -> bool:
    """Return whether the fixture should verify during teardown."""
    # Priority order: marker > CLI option > INI setting
    marker = request.node.get_closest_marker("callmox")
    if marker is not None and "auto_verify" in marker.kwargs:
        return bool(marker.kwargs["auto_verify"])

    config = request.config
    cli_value = config.getoption("callmox_auto_verify")
    if cli_value is not None:
        return bool(cli_value)

    return bool(config.getini("callmox_auto_verify"))


def _call_stage_failed(item: pytest.Item) -> bool:
    """Return ``True`` when the test body has already failed."""
    rep_call = getattr(item, "rep_call", None)
    return bool(rep_call and rep_call.failed)


@pytest.fixture
def callmox(request: pytest.FixtureRequest) -> t.Generator[CallMox, None, None]:
    """Provide a :class:`CallMox` controller verified at teardown."""
    mox = CallMox(verify_on_exit=False)
    auto_verify = _auto_verify_enabled(request)
    yield mox
    if not auto_verify or mox.phase is not Phase.ACTIVE:
        return
    try:
        mox.verify()
    except AssertionError as err:
        logger.exception("Error during callmox verification")
        if not _call_stage_failed(request.node):
            pytest.fail(f"{type(err).__name__}: {err}", pytrace=False)


__all__ = ["callmox"]
