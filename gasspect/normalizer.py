"""Opcode normalizer: net gas costs, relabelling and argument decoding.

Each rule sees the current step and its successor (``None`` for the final
step). Stack positions are 1-indexed from the top of the stack.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from . import constants
from .errors import TraceMalformed
from .trace_types import StructLog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Normalization:
    """Rewritten fields for one step."""

    op: str
    gas_cost: int
    args: tuple[str, ...] | None = None
    res: str | None = None


def _stack_word(index: int, log: StructLog, position: int) -> str:
    if position > len(log.stack):
        raise TraceMalformed(
            index, log.op, "stack position", position, len(log.stack)
        )
    return log.stack[-position]


def _stack_value(index: int, log: StructLog, position: int) -> int:
    word = _stack_word(index, log, position)
    try:
        return int(word, 16)
    except ValueError as exc:
        raise TraceMalformed(
            index, log.op, "hex word at stack position", position, len(log.stack)
        ) from exc


def _word_to_address(word: str) -> str:
    return "0x" + word[-constants.ADDRESS_HEX_CHARS :]


def _memory_slice(index: int, log: StructLog, offset: int, length: int) -> str:
    if length == 0:
        return "0x"
    if log.memory is None:
        logger.debug("Step %d (%s): memory not recorded, calldata unknown", index, log.op)
        return "0x"
    end = offset + length
    if end > constants.MAX_MEMORY_EXPANSION_BYTES:
        raise TraceMalformed(
            index,
            log.op,
            "memory extent within",
            constants.MAX_MEMORY_EXPANSION_BYTES,
            end,
        )
    # The call expands memory before reading it; the snapshot predates that.
    memory = log.memory_hex.ljust(2 * end, "0")
    return "0x" + memory[2 * offset : 2 * end]


def _successor_top(successor: StructLog | None) -> str | None:
    if successor is None:
        return None
    return successor.stack_top


def _net_call_cost(index: int, log: StructLog, successor: StructLog | None) -> int:
    if successor is None:
        logger.warning(
            "%s at final step %d has no successor; net cost and result left unset",
            log.op,
            index,
        )
        return log.gas_cost
    return log.gas_cost - successor.gas


def _with_warm_suffix(op: str, gas_cost: int) -> str:
    if gas_cost == constants.WARM_ACCESS_COST:
        return op + constants.WARM_SUFFIX
    return op


def _normalize_staticcall(
    index: int, log: StructLog, successor: StructLog | None
) -> Normalization:
    gas_cost = _net_call_cost(index, log, successor)

    if len(log.stack) > constants.PRECOMPILE_STACK_POSITION:
        target = _stack_value(index, log, constants.PRECOMPILE_STACK_POSITION)
        if target == constants.ECRECOVER_ADDRESS:
            return Normalization(op=constants.ECRECOVER_LABEL, gas_cost=gas_cost)
        if target <= constants.MAX_PRECOMPILE_ADDRESS:
            word = _stack_word(index, log, constants.PRECOMPILE_STACK_POSITION)
            return Normalization(op=f"{log.op}-{word[-2:]}", gas_cost=gas_cost)

    args = (
        _word_to_address(_stack_word(index, log, 2)),
        _memory_slice(index, log, _stack_value(index, log, 3), _stack_value(index, log, 4)),
    )
    return Normalization(
        op=_with_warm_suffix(log.op, gas_cost), gas_cost=gas_cost, args=args
    )


def _normalize_call(
    index: int, log: StructLog, successor: StructLog | None
) -> Normalization:
    args = (
        _word_to_address(_stack_word(index, log, 2)),
        _memory_slice(index, log, _stack_value(index, log, 4), _stack_value(index, log, 5)),
    )
    gas_cost = _net_call_cost(index, log, successor)
    return Normalization(
        op=_with_warm_suffix(log.op, gas_cost),
        gas_cost=gas_cost,
        args=args,
        res=_successor_top(successor),
    )


def _normalize_halting(
    index: int, log: StructLog, successor: StructLog | None
) -> Normalization:
    return Normalization(op=log.op, gas_cost=constants.HALTING_OPCODE_COST)


def _normalize_storage(
    index: int, log: StructLog, successor: StructLog | None
) -> Normalization:
    args = ["0x" + _stack_word(index, log, 1)]
    if log.op == constants.SSTORE_OPCODE:
        args.append("0x" + _stack_word(index, log, 2))

    op = _with_warm_suffix(log.op, log.gas_cost)
    if log.gas_cost >= constants.COLD_WRITE_MIN_COST:
        op += constants.INITIAL_WRITE_SUFFIX

    res = None
    if log.op == constants.SLOAD_OPCODE:
        if successor is None:
            logger.warning("SLOAD at final step %d has no successor; result left unset", index)
        res = _successor_top(successor)

    return Normalization(op=op, gas_cost=log.gas_cost, args=tuple(args), res=res)


def _normalize_extcodesize(
    index: int, log: StructLog, successor: StructLog | None
) -> Normalization:
    if successor is None:
        logger.warning(
            "EXTCODESIZE at final step %d has no successor; result left unset", index
        )
    return Normalization(
        op=log.op,
        gas_cost=log.gas_cost,
        args=(_word_to_address(_stack_word(index, log, 1)),),
        res=_successor_top(successor),
    )


_Rule = Callable[[int, StructLog, StructLog | None], Normalization]

_RULES: dict[str, _Rule] = {
    constants.STATICCALL_OPCODE: _normalize_staticcall,
    **{op: _normalize_call for op in constants.CALL_OPCODES},
    **{op: _normalize_halting for op in constants.HALTING_OPCODES},
    **{op: _normalize_storage for op in constants.STORAGE_OPCODES},
    constants.EXTCODESIZE_OPCODE: _normalize_extcodesize,
}


def normalize_op(
    index: int, log: StructLog, successor: StructLog | None
) -> Normalization:
    """Apply the rule for ``log.op``; steps without a rule pass through.

    Args:
        index: Position of ``log`` in the trace, used in error reports.
        log: The step being normalized.
        successor: The following step, or ``None`` for the final step.

    Raises:
        TraceMalformed: A rule needs a stack word or memory range the
            step does not hold.
    """
    rule = _RULES.get(log.op)
    if rule is None:
        return Normalization(op=log.op, gas_cost=log.gas_cost)
    normalized = rule(index, log, successor)
    logger.debug(
        "Step %d: %s -> %s, cost %d -> %d",
        index,
        log.op,
        normalized.op,
        log.gas_cost,
        normalized.gas_cost,
    )
    return normalized
