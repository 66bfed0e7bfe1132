"""Pure functions for counting instructions in a raw trace."""

from __future__ import annotations

from collections import Counter
from typing import Any, Sequence

from .sink import serialize_trace
from .trace_types import StructLog


def count_instructions(trace: Any, instructions: Sequence[str]) -> list[int]:
    """Count quoted, upper-cased mnemonics in the serialized trace.

    This is a substring scan of the JSON text, not a token count: a
    mnemonic that also appears as a quoted string elsewhere in the trace
    (e.g. in a return value) is counted too. Use ``count_opcodes_exact``
    when that matters.

    Args:
        trace: The raw trace structure.
        instructions: Mnemonics to count, in any case.

    Returns:
        One count per requested mnemonic, in the same order.
    """
    text = serialize_trace(trace)
    return [text.count(f'"{instr.upper()}"') for instr in instructions]


def count_opcodes(struct_logs: Sequence[StructLog]) -> dict[str, int]:
    """Return a frequency map of the ``op`` field of every step."""
    return dict(Counter(log.op for log in struct_logs))


def count_opcodes_exact(
    struct_logs: Sequence[StructLog], instructions: Sequence[str]
) -> list[int]:
    """Structural counterpart of ``count_instructions``."""
    counts = count_opcodes(struct_logs)
    return [counts.get(instr.upper(), 0) for instr in instructions]
