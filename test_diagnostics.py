"""
Graph dump, statistics, tabular view, convenience gradient wrappers, config
and the demo entry point.
"""

import logging

import numpy as np
import pandas as pd

from scalar_aad import (
    EngineConfig, Tape, Value, backward, configure_logging, format_graph, get_graph_stats,
    get_tape, grad, grads, grads_list, graph_frame, print_graph_summary, use_tape, value,
)
from scalar_aad.__main__ import main


def test_format_graph_lists_node_then_operands():
    with use_tape():
        x, y = Value(3.0, name="x"), Value(2.0, name="y")
        k = x * y
        backward(k)
        lines = format_graph(k).splitlines()

    assert len(lines) == 3
    assert lines[0].startswith("#2 Value: data=6.0, grad=1.0, op=mul")
    assert lines[1] == "  #0 Value: data=3.0, grad=2.0, op=none name=x"
    assert lines[2] == "  #1 Value: data=2.0, grad=3.0, op=none name=y"


def test_format_graph_prints_shared_node_once():
    with use_tape():
        x = Value(4.0)
        y = x * x
        lines = format_graph(y).splitlines()

    assert lines[1].startswith("  #0 Value:")
    assert lines[2] == "  #0 (see above)"


def test_format_graph_respects_max_depth():
    with use_tape():
        x = Value(1.0)
        y = ((x + 1.0) * 2.0).relu()
        lines = format_graph(y, max_depth=1).splitlines()

    assert lines[0].startswith("#")
    assert lines[-1].strip() == "..."
    assert all(not line.startswith("    #") for line in lines)


def test_format_graph_expands_node_first_cut_off_by_depth():
    with use_tape():
        x, y = Value(3.0, name="x"), Value(2.0, name="y")
        a = x * y
        root = a.relu() + a
        lines = format_graph(root, max_depth=2).splitlines()

    # a is first reached at depth 2 (cut off), then at depth 1 where it expands
    assert "      ..." in lines
    assert lines.count("  #2 Value: data=6.0, grad=0.0, op=mul") == 1
    assert any(line.endswith("name=x") for line in lines)
    assert any(line.endswith("name=y") for line in lines)
    assert not any("(see above)" in line for line in lines)


def test_graph_stats():
    with use_tape() as tape:
        x, y = Value(3.0), Value(2.0)
        _ = (x * y + x).relu()
        stats = get_graph_stats(tape)

    assert stats['nodes'] == 5
    assert stats['edges'] == 5
    assert stats['leaves'] == 2
    assert stats['max_fan_in'] == 2
    assert stats['max_fan_out'] == 2  # x feeds mul and add
    assert stats['operations'] == {'none': 2, 'mul': 1, 'add': 1, 'relu': 1}


def test_graph_stats_empty_tape():
    stats = get_graph_stats(Tape())
    assert stats['nodes'] == 0
    assert stats['operations'] == {}


def test_print_graph_summary(capsys):
    with use_tape() as tape:
        x = Value(3.0)
        _ = x ** 2
        stats = print_graph_summary(tape)
    out = capsys.readouterr().out
    assert "COMPUTATION GRAPH SUMMARY" in out
    assert "pow" in out
    assert stats['nodes'] == 2

    print_graph_summary(Tape())
    assert "Empty computation graph" in capsys.readouterr().out


def test_graph_frame():
    with use_tape() as tape:
        x = Value(3.0, name="x")
        m = x ** 2
        backward(m)
        df = graph_frame(tape)

    assert isinstance(df, pd.DataFrame)
    assert list(df['op']) == ['none', 'pow']
    assert list(df['grad']) == [6.0, 1.0]
    assert df.loc[1, 'operands'] == (0,)
    assert df.loc[1, 'params'] == (2,)
    assert df.loc[0, 'name'] == 'x'


def test_repr_shows_value_grad_and_op():
    with use_tape():
        x = Value(3.0)
        assert "op=none" in repr(x)
        assert "op=relu" in repr(x.relu())


def test_grad_helpers_use_isolated_tapes():
    before = len(get_tape())
    assert np.isclose(grad(lambda x: x ** 3, 2.0), 12.0)
    assert grads(lambda v: v['a'] * v['b'] + v['a'], {'a': 3.0, 'b': 5.0}) == {'a': 6.0, 'b': 3.0}
    assert grads_list(lambda xs: xs[0] * xs[0] + 3 * xs[1], [2.0, 4.0]) == [4.0, 3.0]
    assert len(get_tape()) == before


def test_grad_of_constant_output_is_zero():
    assert grad(lambda x: 5.0, 1.0) == 0.0


def test_value_helper():
    with use_tape():
        assert value(Value(2.5)) == 2.5
    assert value(1.25) == 1.25


def test_use_tape_restores_previous_tape_on_error():
    outer = get_tape()
    try:
        with use_tape():
            assert get_tape() is not outer
            raise KeyError("boom")
    except KeyError:
        pass
    assert get_tape() is outer


def test_use_tape_with_explicit_tape():
    tape = Tape()
    with use_tape(tape) as t:
        assert t is tape
        Value(1.0)
    assert len(tape) == 1


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("SCALAR_AAD_CHECK_ZERO_GRADS", "true")
    monkeypatch.setenv("SCALAR_AAD_LOG_LEVEL", "debug")
    cfg = EngineConfig.from_env()
    assert cfg.check_zero_grads is True
    assert cfg.log_level == "DEBUG"

    monkeypatch.delenv("SCALAR_AAD_CHECK_ZERO_GRADS")
    monkeypatch.delenv("SCALAR_AAD_LOG_LEVEL")
    assert EngineConfig.from_env() == EngineConfig()


def test_configure_logging_adds_one_handler():
    logger = configure_logging("DEBUG")
    n = len(logger.handlers)
    configure_logging("INFO")
    assert len(logger.handlers) == n
    assert logger.level == logging.INFO


def test_backward_logs_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="scalar_aad"):
        with use_tape():
            backward(Value(2.0) * 3.0)
    assert any("reachable node" in r.getMessage() for r in caplog.records)


def test_demo_prints_all_expressions(capsys):
    main(["--depth", "1"])
    out = capsys.readouterr().out
    for label in ("x * y:", "x + y:", "x ** 2:", "relu(x):"):
        assert label in out
    assert "data=6.0, grad=1.0, op=mul" in out
