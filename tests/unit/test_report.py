"""Tests for report configuration, filtering and rendering."""

import pytest
from pydantic import ValidationError

from gasspect.report import GasspectConfig, filter_ops, render_op, render_report
from gasspect.trace_types import AnnotatedOp

from tests.unit.conftest import make_log, word


def _op(
    op: str,
    gas_cost: int,
    trace_address=(0, 0),
    args=None,
    res=None,
    index: int = 0,
) -> AnnotatedOp:
    return AnnotatedOp(
        index=index,
        trace_address=trace_address,
        depth=len(trace_address) - 1,
        op=op,
        gas=100000,
        gas_cost=gas_cost,
        source=make_log(op, gas_cost=gas_cost),
        args=args,
        res=res,
    )


class TestGasspectConfig:
    def test_defaults(self):
        config = GasspectConfig()
        assert config.min_op_gas_cost == 300
        assert config.args is False
        assert config.res is False

    def test_from_options_camel_case(self):
        config = GasspectConfig.from_options({"minOpGasCost": 0, "args": True})
        assert config.min_op_gas_cost == 0
        assert config.args is True
        assert config.res is False

    def test_from_options_snake_case(self):
        config = GasspectConfig.from_options({"min_op_gas_cost": 1000})
        assert config.min_op_gas_cost == 1000

    def test_from_options_none_gives_defaults(self):
        assert GasspectConfig.from_options(None) == GasspectConfig()

    def test_unknown_key_is_rejected(self):
        with pytest.raises(ValidationError):
            GasspectConfig.from_options({"minGas": 0})

    def test_wrong_type_is_rejected(self):
        with pytest.raises(ValueError):
            GasspectConfig.from_options({"minOpGasCost": "lots"})

    def test_frozen(self):
        config = GasspectConfig()
        with pytest.raises(ValidationError):
            config.args = True


class TestFilterOps:
    def test_threshold_is_strict(self):
        ops = [_op("SLOAD", 300), _op("SLOAD", 301)]
        assert [op.gas_cost for op in filter_ops(ops, 300)] == [301]

    def test_zero_threshold_keeps_at_least_as_many(self):
        ops = [_op("PUSH1", 3), _op("SLOAD", 2100), _op("STOP", 0), _op("CALL", 500)]
        assert len(filter_ops(ops, 0)) >= len(filter_ops(ops, 300))
        assert len(filter_ops(ops, 0)) == 3

    def test_order_preserved(self):
        ops = [_op("SSTORE", 22100, index=0), _op("SLOAD", 2100, index=1)]
        assert [op.index for op in filter_ops(ops, 300)] == [0, 1]


class TestRenderOp:
    def test_plain_line(self):
        line = render_op(_op("SLOAD", 2100, trace_address=(0, 1, 2)), GasspectConfig())
        assert line == "0-1-2-SLOAD = 2100"

    def test_args_segment(self):
        op = _op("SSTORE_I", 22100, args=("0x01", "0x05"))
        line = render_op(op, GasspectConfig(args=True))
        assert line == "0-0-SSTORE_I(0x01,0x05) = 22100"

    def test_empty_args_segment_when_nothing_decoded(self):
        line = render_op(_op("KECCAK256", 400), GasspectConfig(args=True))
        assert line == "0-0-KECCAK256() = 400"

    def test_args_hidden_by_default(self):
        op = _op("SSTORE_I", 22100, args=("0x01", "0x05"))
        assert render_op(op, GasspectConfig()) == "0-0-SSTORE_I = 22100"

    def test_result_segment(self):
        op = _op("SLOAD", 2100, args=("0x00",), res=word(42))
        line = render_op(op, GasspectConfig(args=True, res=True))
        assert line == f"0-0-SLOAD(0x00):0x{word(42)} = 2100"

    def test_result_omitted_when_absent(self):
        line = render_op(_op("SSTORE", 2900), GasspectConfig(res=True))
        assert line == "0-0-SSTORE = 2900"

    def test_result_hidden_by_default(self):
        op = _op("SLOAD", 2100, res=word(42))
        assert render_op(op, GasspectConfig()) == "0-0-SLOAD = 2100"

    def test_root_address(self):
        assert render_op(_op("CALL", 2600, trace_address=(0,)), GasspectConfig()) == (
            "0-CALL = 2600"
        )


class TestRenderReport:
    def test_filters_and_renders(self):
        ops = [_op("PUSH1", 3), _op("SLOAD", 2100), _op("SSTORE_I", 22100)]
        assert render_report(ops, GasspectConfig()) == [
            "0-0-SLOAD = 2100",
            "0-0-SSTORE_I = 22100",
        ]

    def test_rendering_is_deterministic(self):
        ops = [
            _op("SLOAD", 2100, args=("0x00",), res=word(1)),
            _op("CALL", 2600, args=("0xabc", "0x"), res=word(1)),
        ]
        config = GasspectConfig(args=True, res=True)
        assert render_report(ops, config) == render_report(ops, config)

    def test_empty_input(self):
        assert render_report([], GasspectConfig()) == []
