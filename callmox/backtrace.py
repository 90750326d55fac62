"""Capture and filter call-site stack traces for diagnostics."""

from __future__ import annotations

import os
import traceback
import typing as t
from pathlib import Path

type Trace = list[traceback.FrameSummary]

LIB_DIRECTORY: t.Final[str] = str(Path(__file__).resolve().parent) + os.sep


def capture_trace(skip: int = 0) -> Trace:
    """Return the current stack, innermost frame last.

    ``skip`` drops that many frames from the inner end in addition to the
    frame of this function.
    """
    frames = traceback.extract_stack()
    return frames[: len(frames) - 1 - skip]


def _resolve(filename: str) -> str:
    try:
        return str(Path(filename).resolve())
    except (OSError, RuntimeError):
        return filename


def filter_trace(
    trace: t.Iterable[traceback.FrameSummary], exclude_prefix: str
) -> Trace:
    """Drop frames whose file lives under *exclude_prefix*."""
    return [
        frame
        for frame in trace
        if not _resolve(frame.filename).startswith(exclude_prefix)
    ]


def format_trace(trace: t.Iterable[traceback.FrameSummary]) -> str:
    """Render *trace* as ``file:line in function`` lines, innermost last."""
    return "\n".join(
        f"{frame.filename}:{frame.lineno} in {frame.name}" for frame in trace
    )


__all__ = ["LIB_DIRECTORY", "Trace", "capture_trace", "filter_trace", "format_trace"]
