"""pytest-bdd steps exercising mocks."""

from __future__ import annotations

import shlex
import typing as t

from pytest_bdd import parsers, when

from tests.helpers.outcomes import call_outcome

if t.TYPE_CHECKING:  # pragma: no cover - typing only
    from callmox.mock import Mock


@when(parsers.cfparse('I call "{method}" {count:d} times'))
def call_repeatedly(mock: Mock, outcomes: list[str], method: str, count: int) -> None:
    """Call *method* without arguments *count* times."""
    outcomes.extend(call_outcome(mock, method) for _ in range(count))


@when(parsers.cfparse('I call "{method}" with arguments "{args}"'))
def call_with_arguments(
    mock: Mock, outcomes: list[str], method: str, args: str
) -> None:
    """Call *method* once with whitespace separated arguments."""
    outcomes.append(call_outcome(mock, method, shlex.split(args)))


@when(parsers.cfparse('I call "{method}" with a callback {count:d} times'))
def call_with_callback(
    mock: Mock, callback_log: list[str], method: str, count: int
) -> None:
    """Call *method* passing a callback that logs yielded values."""

    def callback(*values: object) -> None:
        callback_log.extend(str(value) for value in values)

    for _ in range(count):
        callback_log.append(call_outcome(mock, method, callback=callback))
