"""Trace data types: raw struct logs and their annotated counterparts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from . import constants


def _strip_hex_prefix(word: str) -> str:
    return word[2:] if word.startswith(("0x", "0X")) else word


class StructLog(BaseModel):
    """One step of a ``debug_traceTransaction`` struct log.

    Stack words are normalized to unprefixed 32-byte hex (some clients emit
    compact ``0x``-prefixed quantities). Fields this package does not use
    (``pc``, ``storage``, ...) are kept as extras.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    depth: int
    op: str
    gas: int
    gas_cost: int = Field(alias="gasCost")
    stack: list[str] = []
    memory: list[str] | None = None

    @field_validator("stack", mode="before")
    @classmethod
    def _pad_stack_words(cls, value: Any) -> Any:
        if value is None:
            return []
        return [
            _strip_hex_prefix(word).zfill(constants.WORD_HEX_CHARS)
            if isinstance(word, str)
            else word
            for word in value
        ]

    @field_validator("memory", mode="before")
    @classmethod
    def _strip_memory_words(cls, value: Any) -> Any:
        if value is None:
            return None
        return [_strip_hex_prefix(word) if isinstance(word, str) else word for word in value]

    @property
    def memory_hex(self) -> str:
        return "".join(self.memory or [])

    @property
    def stack_top(self) -> str | None:
        return self.stack[-1] if self.stack else None


@dataclass(frozen=True)
class AnnotatedOp:
    """A struct log step after call-tree addressing and normalization.

    ``op`` and ``gas_cost`` carry the rewritten label and net cost; the
    untouched record is available as ``source``.
    """

    index: int
    trace_address: tuple[int, ...]
    depth: int
    op: str
    gas: int
    gas_cost: int
    source: StructLog
    args: tuple[str, ...] | None = None
    res: str | None = None
