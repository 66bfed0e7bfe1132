"""Composable API functions for instruction profiling and gas reports.

``profile_evm`` and ``gasspect_evm`` fetch a trace through a TraceSource;
``annotate_trace`` and ``gasspect`` are the pure building blocks they use.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Sequence

from pydantic import ValidationError

from .addresser import CallTreeAddresser
from .counter import count_instructions
from .errors import TraceMalformed
from .normalizer import normalize_op
from .report import GasspectConfig, render_report
from .sink import persist_trace
from .trace_source import TraceSource
from .trace_types import AnnotatedOp, StructLog

logger = logging.getLogger(__name__)


def parse_struct_logs(trace: Mapping[str, Any]) -> list[StructLog]:
    """Validate the ``structLogs`` of a raw trace into typed records.

    Raises:
        TraceMalformed: ``structLogs`` is absent or not a list, or a step
            is missing a required field or has a value of the wrong type.
    """
    raw_logs = trace.get("structLogs")
    if not isinstance(raw_logs, list):
        raise TraceMalformed(
            -1, "-", f"structLogs must be a list, got {type(raw_logs).__name__}"
        )

    logs: list[StructLog] = []
    for index, raw in enumerate(raw_logs):
        try:
            logs.append(StructLog.model_validate(raw))
        except ValidationError as exc:
            op = raw.get("op", "?") if isinstance(raw, dict) else "?"
            raise TraceMalformed(
                index, str(op), f"invalid struct log ({exc.error_count()} errors)"
            ) from exc
    return logs


def annotate_trace(struct_logs: Sequence[StructLog]) -> list[AnnotatedOp]:
    """Address and normalize every step in one forward pass.

    Each step is normalized against its successor; the final step has
    none, so its lookahead-dependent fields stay unset.

    Args:
        struct_logs: The parsed steps, in execution order.

    Returns:
        One AnnotatedOp per step, in the same order.
    """
    addresser = CallTreeAddresser()
    annotated: list[AnnotatedOp] = []
    for i, log in enumerate(struct_logs):
        successor = struct_logs[i + 1] if i + 1 < len(struct_logs) else None
        trace_address = addresser.address(log.depth)
        normalized = normalize_op(i, log, successor)
        annotated.append(
            AnnotatedOp(
                index=i,
                trace_address=trace_address,
                depth=log.depth,
                op=normalized.op,
                gas=log.gas,
                gas_cost=normalized.gas_cost,
                source=log,
                args=normalized.args,
                res=normalized.res,
            )
        )
    return annotated


def gasspect(
    trace: Mapping[str, Any],
    options: GasspectConfig | Mapping[str, Any] | None = None,
) -> list[str]:
    """Render the gas report of an already-fetched raw trace.

    Args:
        trace: A ``debug_traceTransaction`` result.
        options: A GasspectConfig, or a mapping of overrides
            (``minOpGasCost``, ``args``, ``res``).

    Returns:
        One formatted line per step above the cost threshold.
    """
    config = (
        options
        if isinstance(options, GasspectConfig)
        else GasspectConfig.from_options(options)
    )
    ops = annotate_trace(parse_struct_logs(trace))
    lines = render_report(ops, config)
    logger.info(
        "Rendered %d of %d steps (min cost %d)",
        len(lines),
        len(ops),
        config.min_op_gas_cost,
    )
    return lines


def profile_evm(
    source: TraceSource,
    tx_hash: str,
    instructions: Sequence[str],
    trace_file: str | Path | None = None,
) -> list[int]:
    """Fetch a trace, optionally save it, and count the given mnemonics.

    The count is the substring scan of ``count_instructions``.
    """
    trace = source.fetch(tx_hash)
    if trace_file:
        persist_trace(trace, trace_file)
    return count_instructions(trace, instructions)


def gasspect_evm(
    source: TraceSource,
    tx_hash: str,
    options: GasspectConfig | Mapping[str, Any] | None = None,
    trace_file: str | Path | None = None,
) -> list[str]:
    """Fetch a trace and render its gas report.

    The trace is saved after the report is rendered; if saving fails the
    raised PersistFailure carries the report lines.
    """
    trace = source.fetch(tx_hash)
    lines = gasspect(trace, options)
    if trace_file:
        persist_trace(trace, trace_file, report=lines)
    return lines
