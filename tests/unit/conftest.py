"""Shared helpers for building struct-log traces in tests."""

from typing import Any

from gasspect.trace_types import StructLog

TOKEN_ADDRESS = "0xdAC17F958D2ee523a2206206994597C13D831ec7"
TRANSFER_SELECTOR = "a9059cbb"


def word(value: int) -> str:
    """A 32-byte stack word holding *value*."""
    return f"{value:064x}"


def address_word(address: str) -> str:
    """A 32-byte stack word holding *address* in its low 20 bytes."""
    return address.lower().removeprefix("0x").rjust(64, "0")


def stack_from_top(*words: str) -> list[str]:
    """Build a bottom-first stack from words listed top first."""
    return list(reversed(words))


def raw_log(
    op: str,
    gas: int = 100000,
    gas_cost: int = 3,
    depth: int = 1,
    stack: list[str] | None = None,
    memory: list[str] | None = None,
) -> dict[str, Any]:
    log: dict[str, Any] = {
        "pc": 0,
        "op": op,
        "gas": gas,
        "gasCost": gas_cost,
        "depth": depth,
        "stack": stack or [],
    }
    if memory is not None:
        log["memory"] = memory
    return log


def make_log(op: str, **kwargs: Any) -> StructLog:
    return StructLog.model_validate(raw_log(op, **kwargs))


def transfer_memory() -> list[str]:
    return [TRANSFER_SELECTOR + "0" * 56]


def call_stack(
    target: str = TOKEN_ADDRESS, args_offset: int = 0, args_size: int = 4
) -> list[str]:
    """Stack of a CALL: gas, address, value, argsOffset, argsSize, retOffset, retSize."""
    return stack_from_top(
        word(0xAFC8),
        address_word(target),
        word(0),
        word(args_offset),
        word(args_size),
        word(0),
        word(0),
    )


def sample_trace() -> dict[str, Any]:
    """An SLOAD, then a CALL whose callee does one SSTORE and returns."""
    return {
        "gas": 78000,
        "failed": False,
        "returnValue": "",
        "structLogs": [
            raw_log("PUSH1", gas=100000, gas_cost=3),
            raw_log("SLOAD", gas=99997, gas_cost=2100, stack=[word(0)]),
            raw_log("PUSH1", gas=97897, gas_cost=3, stack=[word(42)]),
            raw_log(
                "CALL",
                gas=97894,
                gas_cost=50000,
                stack=[word(42)] + call_stack(),
                memory=transfer_memory(),
            ),
            raw_log("PUSH1", gas=45000, gas_cost=3, depth=2),
            raw_log(
                "SSTORE",
                gas=44997,
                gas_cost=22100,
                depth=2,
                stack=[word(5), word(1)],
            ),
            raw_log(
                "RETURN",
                gas=22897,
                gas_cost=0,
                depth=2,
                stack=[word(0), word(0)],
            ),
            raw_log("ISZERO", gas=70000, gas_cost=3, stack=[word(42), word(1)]),
            raw_log("STOP", gas=69997, gas_cost=0, stack=[word(42), word(0)]),
        ],
    }
