#!/usr/bin/env python3
"""
最少代码提取测试 - 路径合并、诱导子图、语句还原
"""

import sys
from pathlib import Path

import pytest

# 添加项目根目录到Python路径
sys.path.insert(0, str(Path(__file__).parent.parent))

from analysis import DependencyGraph, StatementNode, ValueNode
from slicer import (
    ScriptSlicer, SliceType, UnknownValueError, extract_lineage, min_code,
    minimize, recover_positions, recover_statements
)

S = StatementNode
V = ValueNode

SOURCE_LINES = [
    'mat <- read("data.csv")',
    'tab <- summarize(mat)',
    'out <- write(tab)',
]


@pytest.fixture
def scenario_graph():
    return DependencyGraph.from_edges([
        ("1", "mat"), ("mat", "2"), ("2", "tab"), ("tab", "3"), ("3", "out")
    ])


@pytest.fixture
def branching_graph():
    """两个独立分支共享语句1"""
    return DependencyGraph.from_edges([
        ("1", "raw"), ("raw", "2"), ("2", "a"), ("raw", "3"), ("3", "b"),
        ("4", "c"), ("a", "5"), ("b", "5"), ("5", "ab")
    ])


def test_scenario_slices(scenario_graph):
    assert min_code(scenario_graph, SOURCE_LINES, ["tab"]) == SOURCE_LINES[:2]
    assert min_code(scenario_graph, SOURCE_LINES, ["out"]) == SOURCE_LINES
    assert min_code(scenario_graph, SOURCE_LINES, ["mat", "out"]) == SOURCE_LINES
    assert min_code(scenario_graph, SOURCE_LINES, "mat") == SOURCE_LINES[:1]


def test_minimize_is_induced_subgraph(branching_graph):
    paths = [extract_lineage(branching_graph, "a")]
    sliced = minimize(branching_graph, paths)
    assert set(sliced.nodes) == {S(1), V("raw"), S(2), V("a")}
    assert set(sliced.edges) == {(S(1), V("raw")), (V("raw"), S(2)), (S(2), V("a"))}


@pytest.mark.parametrize("first,second", [("a", "b"), ("a", "c"), ("b", "ab"), ("raw", "c")])
def test_union_equals_separate_slices(branching_graph, first, second):
    both = minimize(branching_graph, [extract_lineage(branching_graph, t) for t in (first, second)])
    one = minimize(branching_graph, [extract_lineage(branching_graph, first)])
    two = minimize(branching_graph, [extract_lineage(branching_graph, second)])
    assert set(both.nodes) == set(one.nodes) | set(two.nodes)


@pytest.mark.parametrize("direction", [SliceType.ANCESTORS, SliceType.DESCENDANTS])
def test_reslicing_is_a_fixed_point(branching_graph, direction):
    targets = ["a", "b"]
    first = minimize(branching_graph, [extract_lineage(branching_graph, t, direction) for t in targets])
    second = minimize(first, [extract_lineage(first, t, direction) for t in targets])
    assert set(second.nodes) == set(first.nodes)
    assert second == first


def test_recover_statements_sorts_and_deduplicates():
    # 节点插入顺序与语句顺序相反
    graph = DependencyGraph.from_edges([("3", "z"), ("z", "2"), ("2", "y"), ("y", "1")])
    lines = ["first", "second", "third"]
    assert recover_positions(graph) == [1, 2, 3]
    assert recover_statements(graph, lines) == lines


def test_recover_statements_skips_out_of_range():
    graph = DependencyGraph.from_edges([("1", "x"), ("x", "9")])
    assert recover_statements(graph, ["only"]) == ["only"]


def test_empty_targets_give_empty_code(scenario_graph):
    assert min_code(scenario_graph, SOURCE_LINES, []) == []


def test_script_slicer_clean(scenario_graph):
    slicer = ScriptSlicer(scenario_graph, SOURCE_LINES)

    result = slicer.clean(["tab", "tab"])
    assert result.targets == ["tab"]
    assert result.positions == [1, 2]
    assert result.code == "\n".join(SOURCE_LINES[:2])
    assert not result.is_listing

    forward = slicer.clean("tab", SliceType.DESCENDANTS)
    assert forward.statements == SOURCE_LINES[2:]


def test_script_slicer_listing(scenario_graph):
    result = ScriptSlicer(scenario_graph, SOURCE_LINES).clean()
    assert result.is_listing
    assert result.candidates == ["mat", "out", "tab"]
    assert result.statements == []


def test_script_slicer_unknown_target(scenario_graph):
    with pytest.raises(UnknownValueError):
        ScriptSlicer(scenario_graph, SOURCE_LINES).clean(["tab", "missing"])
