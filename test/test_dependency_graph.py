#!/usr/bin/env python3
"""
依赖图数据结构测试
"""

import sys
from pathlib import Path

import pytest

# 添加项目根目录到Python路径
sys.path.insert(0, str(Path(__file__).parent.parent))

from analysis import DependencyGraph, GraphError, StatementNode, ValueNode

S = StatementNode
V = ValueNode


@pytest.fixture
def scenario_graph():
    """三条语句: mat <- read(); tab <- summarize(mat); out <- write(tab)"""
    return DependencyGraph.from_edges([
        ("1", "mat"), ("mat", "2"), ("2", "tab"), ("tab", "3"), ("3", "out")
    ])


def test_from_edges_tags_identifiers(scenario_graph):
    assert scenario_graph.statement_nodes() == [S(1), S(2), S(3)]
    assert scenario_graph.value_names() == ["mat", "out", "tab"]
    assert (S(1), V("mat")) in scenario_graph.edges
    assert len(scenario_graph) == 6


def test_neighbours_keep_insertion_order():
    graph = DependencyGraph.from_edges([("b", "1"), ("a", "1"), ("1", "c")])
    assert graph.predecessors(S(1)) == [V("b"), V("a")]
    assert graph.successors(S(1)) == [V("c")]


def test_from_adjacency_matches_from_edges(scenario_graph):
    labels = ["1", "mat", "2", "tab", "3", "out"]
    matrix = [[False] * 6 for _ in labels]
    for i in range(5):
        matrix[i][i + 1] = True
    assert DependencyGraph.from_adjacency(labels, matrix) == scenario_graph


def test_from_adjacency_rejects_bad_shapes():
    with pytest.raises(GraphError):
        DependencyGraph.from_adjacency(["1", "x"], [[0, 1]])
    with pytest.raises(GraphError):
        DependencyGraph.from_adjacency(["1", "x"], [[0, 1], [0]])
    with pytest.raises(GraphError):
        DependencyGraph.from_adjacency(["x", "x"], [[0, 1], [0, 0]])


def test_subgraph_is_induced_and_independent(scenario_graph):
    sub = scenario_graph.subgraph([S(1), V("mat"), S(3)])
    assert set(sub.nodes) == {S(1), V("mat"), S(3)}
    assert sub.edges == [(S(1), V("mat"))]

    sub.add_edge("mat", "3")
    assert (V("mat"), S(3)) not in scenario_graph.edges


def test_value_lookup(scenario_graph):
    assert scenario_graph.has_value("tab")
    assert not scenario_graph.has_value("nope")
    assert scenario_graph.value("tab") == V("tab")
    with pytest.raises(KeyError):
        scenario_graph.value("nope")
