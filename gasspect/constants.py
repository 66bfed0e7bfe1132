"""Named constants for opcode groups and gas thresholds."""

from __future__ import annotations

CALL_OPCODES: tuple[str, ...] = ("CALL", "DELEGATECALL", "CALLCODE")
STATICCALL_OPCODE = "STATICCALL"
HALTING_OPCODES: tuple[str, ...] = ("RETURN", "REVERT", "INVALID")
STORAGE_OPCODES: tuple[str, ...] = ("SSTORE", "SLOAD")
SSTORE_OPCODE = "SSTORE"
SLOAD_OPCODE = "SLOAD"
EXTCODESIZE_OPCODE = "EXTCODESIZE"

HALTING_OPCODE_COST = 3

WARM_ACCESS_COST = 100
COLD_WRITE_MIN_COST = 20000

WARM_SUFFIX = "_R"
INITIAL_WRITE_SUFFIX = "_I"

# STATICCALL precompile target is read from the 8th stack word from the top.
PRECOMPILE_STACK_POSITION = 8
ECRECOVER_ADDRESS = 0x1
MAX_PRECOMPILE_ADDRESS = 0xFF
ECRECOVER_LABEL = "STATICCALL-ECRECOVER"

WORD_HEX_CHARS = 64
ADDRESS_HEX_CHARS = 40

# Memory past the recorded snapshot reads as zeros. Extents beyond this bound
# cannot be paid for within a block gas limit.
MAX_MEMORY_EXPANSION_BYTES = 0x1000000

DEFAULT_MIN_OP_GAS_COST = 300
DEFAULT_RPC_URL = "http://localhost:8545"
DEFAULT_RPC_TIMEOUT = 30

TRACE_METHOD = "debug_traceTransaction"
TRACE_CONFIG: dict[str, bool] = {"enableMemory": True, "disableStorage": True}

TRACE_SOURCE_RPC = "rpc"
TRACE_SOURCE_FILE = "file"
