"""Exceptions raised while fetching, normalizing and persisting traces."""

from __future__ import annotations


class GasspectError(Exception):
    """Base class for all gasspect failures."""

    pass


class FetchFailure(GasspectError):
    """Raised when the trace source is unreachable or answers with an error."""

    def __init__(self, tx_hash: str, reason: str):
        super().__init__(f"Failed to fetch trace for {tx_hash}: {reason}")
        self.tx_hash = tx_hash
        self.reason = reason


class TraceMalformed(GasspectError):
    """Raised when an instruction lacks the stack/memory a decoding rule needs.

    ``required`` is the 1-indexed stack position (or the memory extent in
    bytes) the rule asked for, ``actual`` what the record actually holds.
    Both are ``None`` when the record itself failed validation.
    """

    def __init__(
        self,
        index: int,
        op: str,
        what: str,
        required: int | None = None,
        actual: int | None = None,
    ):
        detail = what
        if required is not None:
            detail = f"needs {what} {required}, has {actual}"
        super().__init__(f"Malformed trace at instruction {index} ({op}): {detail}")
        self.index = index
        self.op = op
        self.what = what
        self.required = required
        self.actual = actual


class PersistFailure(GasspectError):
    """Raised when writing the raw trace fails.

    ``report`` holds the already-rendered lines when the failure happened
    after the report was computed.
    """

    def __init__(self, path: str, reason: str, report: list[str] | None = None):
        super().__init__(f"Failed to write trace to {path}: {reason}")
        self.path = path
        self.reason = reason
        self.report = report
