"""Trace persistence: writes the raw fetched trace as JSON text."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .errors import PersistFailure

logger = logging.getLogger(__name__)


def serialize_trace(trace: Any) -> str:
    """Return the compact JSON text of a raw trace.

    The same text is written by ``persist_trace`` and scanned by the
    substring instruction counter.
    """
    return json.dumps(trace, separators=(",", ":"))


def persist_trace(
    trace: Any, path: str | Path, report: list[str] | None = None
) -> None:
    """Write an exact JSON copy of ``trace`` to ``path``.

    Args:
        trace: The raw trace structure as fetched.
        path: Destination file.
        report: Lines already rendered from this trace; attached to the
            ``PersistFailure`` so a failed write does not lose them.
    """
    text = serialize_trace(trace)
    try:
        Path(path).write_text(text, encoding="utf-8")
    except OSError as exc:
        raise PersistFailure(str(path), str(exc), report=report) from exc
    logger.info("Wrote trace (%d bytes) to %s", len(text), path)
