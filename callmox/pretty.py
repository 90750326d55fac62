"""Readable rendering of values, argument lists and failure messages."""

from __future__ import annotations

import typing as t
from textwrap import indent

_REPR_FIELD_LIMIT: t.Final[int] = 256


def _shorten(text: str, limit: int = _REPR_FIELD_LIMIT) -> str:
    if limit <= 0:
        return ""
    if len(text) <= limit:
        return text
    return f"{text[: limit - 1]}…"


def pretty_print(value: object, *, limit: int = _REPR_FIELD_LIMIT) -> str:
    """Return ``repr(value)`` truncated to *limit* characters."""
    return _shorten(repr(value), limit)


def format_args(
    args: t.Sequence[object],
    kwargs: t.Mapping[str, object] | None = None,
) -> str:
    """Render positional and keyword arguments as they appear in a call."""
    parts = [pretty_print(arg) for arg in args]
    if kwargs:
        parts.extend(f"{key}={pretty_print(value)}" for key, value in kwargs.items())
    return ", ".join(parts)


def format_call(name: str, args_repr: str | None) -> str:
    """Return ``name(args)`` or the bare *name* when *args_repr* is ``None``."""
    if args_repr is None:
        return name
    return f"{name}({args_repr})"


def numbered(entries: t.Sequence[str], *, start: int = 1) -> str:
    """Return *entries* as a numbered list, continuing multi-line entries."""
    if not entries:
        return "(none)"
    lines: list[str] = []
    for index, entry in enumerate(entries, start=start):
        entry_lines = entry.splitlines() or [""]
        lines.append(f"{index}. {entry_lines[0]}")
        lines.extend(f"   {extra}" for extra in entry_lines[1:])
    return "\n".join(lines)


def format_sections(title: str, sections: list[tuple[str, str]]) -> str:
    """Join *title* and labelled, indented sections; empty bodies are skipped."""
    parts = [title]
    for label, body in sections:
        if not body:
            continue
        parts.append("")
        parts.append(f"{label}:")
        parts.append(indent(body, "  "))
    return "\n".join(parts)


__all__ = [
    "format_args",
    "format_call",
    "format_sections",
    "numbered",
    "pretty_print",
]
