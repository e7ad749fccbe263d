#!/usr/bin/env python3
"""
依赖图数据结构模块

基于networkx有向图保存语句节点与变量节点之间的"定义/使用"关系。
边 (source, target) 表示 target 依赖 source。
"""

from typing import Iterable, List, Sequence, Tuple
import networkx as nx

from .node import GraphError, Node, StatementNode, ValueNode, node_from_identifier


class DependencyGraph:
    """脚本依赖图"""

    def __init__(self, graph: nx.DiGraph = None):
        """
        初始化依赖图
        Args:
            graph: 已有的networkx有向图，节点必须是 StatementNode/ValueNode
        """
        self._graph = graph if graph is not None else nx.DiGraph()

    @classmethod
    def from_edges(cls, edges: Iterable[Tuple], nodes: Iterable = ()) -> 'DependencyGraph':
        """
        从边列表构建依赖图
        Args:
            edges: (source, target) 列表，元素可以是节点对象或标识符字符串
            nodes: 额外的孤立节点
        """
        graph = nx.DiGraph()
        for node in nodes:
            graph.add_node(node_from_identifier(node))
        for source, target in edges:
            graph.add_edge(node_from_identifier(source), node_from_identifier(target))
        return cls(graph)

    @classmethod
    def from_adjacency(cls, labels: Sequence[str], matrix: Sequence[Sequence]) -> 'DependencyGraph':
        """
        从邻接矩阵构建依赖图，matrix[i][j] 为真表示 labels[i] -> labels[j]
        """
        if len(matrix) != len(labels):
            raise GraphError(f"邻接矩阵行数({len(matrix)})与标签数({len(labels)})不一致")
        nodes = [node_from_identifier(label) for label in labels]
        if len(set(nodes)) != len(nodes):
            raise GraphError("邻接矩阵的标签存在重复")

        graph = nx.DiGraph()
        graph.add_nodes_from(nodes)
        for i, row in enumerate(matrix):
            if len(row) != len(labels):
                raise GraphError(f"邻接矩阵第{i + 1}行长度为{len(row)}，应为{len(labels)}")
            for j, cell in enumerate(row):
                if cell:
                    graph.add_edge(nodes[i], nodes[j])
        return cls(graph)

    def add_node(self, node) -> Node:
        """添加节点"""
        node = node_from_identifier(node)
        self._graph.add_node(node)
        return node

    def add_edge(self, source, target):
        """添加边 source -> target"""
        self._graph.add_edge(node_from_identifier(source), node_from_identifier(target))

    @property
    def nodes(self) -> List[Node]:
        return list(self._graph.nodes)

    @property
    def edges(self) -> List[Tuple[Node, Node]]:
        return list(self._graph.edges)

    def statement_nodes(self) -> List[StatementNode]:
        """所有语句节点，按序号升序"""
        statements = [n for n in self._graph.nodes if isinstance(n, StatementNode)]
        return sorted(statements, key=lambda n: n.position)

    def value_nodes(self) -> List[ValueNode]:
        """所有变量节点，按名称排序"""
        values = [n for n in self._graph.nodes if isinstance(n, ValueNode)]
        return sorted(values, key=lambda n: n.name)

    def value_names(self) -> List[str]:
        return [n.name for n in self.value_nodes()]

    def has_value(self, name: str) -> bool:
        return ValueNode(name) in self._graph

    def value(self, name: str) -> ValueNode:
        """通过变量名获取变量节点"""
        node = ValueNode(name)
        if node not in self._graph:
            raise KeyError(f"Value '{name}' not found")
        return node

    def predecessors(self, node: Node) -> List[Node]:
        """获取前驱节点，按边的插入顺序"""
        return list(self._graph.predecessors(node))

    def successors(self, node: Node) -> List[Node]:
        """获取后继节点，按边的插入顺序"""
        return list(self._graph.successors(node))

    def subgraph(self, nodes: Iterable[Node]) -> 'DependencyGraph':
        """返回由给定节点集合诱导的子图（副本，不影响原图）"""
        keep = [n for n in nodes if n in self._graph]
        return DependencyGraph(self._graph.subgraph(keep).copy())

    def __contains__(self, node) -> bool:
        return node in self._graph

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    def __eq__(self, other) -> bool:
        if not isinstance(other, DependencyGraph):
            return NotImplemented
        return (set(self._graph.nodes) == set(other._graph.nodes)
                and set(self._graph.edges) == set(other._graph.edges))

    def __repr__(self):
        return (f"DependencyGraph(statements={len(self.statement_nodes())}, "
                f"values={len(self.value_nodes())}, edges={self._graph.number_of_edges()})")
