"""Report configuration, filtering and line rendering."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from pydantic import BaseModel, ConfigDict, Field

from . import constants
from .trace_types import AnnotatedOp


class GasspectConfig(BaseModel):
    """Report options.

    ``min_op_gas_cost``: steps whose cost is not strictly greater are
    dropped. ``args`` / ``res``: include decoded arguments / results.
    Unknown keys are rejected.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)

    min_op_gas_cost: int = Field(
        default=constants.DEFAULT_MIN_OP_GAS_COST, alias="minOpGasCost"
    )
    args: bool = False
    res: bool = False

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None = None) -> GasspectConfig:
        """Merge caller overrides (camelCase or snake_case keys) over the defaults."""
        return cls.model_validate(dict(options or {}))


def filter_ops(ops: Iterable[AnnotatedOp], min_op_gas_cost: int) -> list[AnnotatedOp]:
    return [op for op in ops if op.gas_cost > min_op_gas_cost]


def render_op(op: AnnotatedOp, config: GasspectConfig) -> str:
    address = "-".join(str(part) for part in op.trace_address)
    line = f"{address}-{op.op}"
    if config.args:
        line += "(" + ",".join(op.args or ()) + ")"
    if config.res and op.res:
        line += ":0x" + op.res
    return f"{line} = {op.gas_cost}"


def render_report(ops: Iterable[AnnotatedOp], config: GasspectConfig) -> list[str]:
    """Filter by cost and render the surviving steps in trace order."""
    return [render_op(op, config) for op in filter_ops(ops, config.min_op_gas_cost)]
