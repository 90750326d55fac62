"""Global test configuration and shared fixtures."""

from __future__ import annotations

import pytest

from callmox import CallMox, Mock

pytest_plugins = ("callmox.pytest_plugin",)


@pytest.fixture
def mox() -> CallMox:
    """Return a controller that leaves verification to the test."""
    return CallMox(verify_on_exit=False)


@pytest.fixture
def db(mox: CallMox) -> Mock:
    """Return a named mock owned by :func:`mox`."""
    return mox.mock("db")
