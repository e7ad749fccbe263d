#!/usr/bin/env python3
"""
脚本切片核心实现

在已构建的依赖图上进行切片：
1. 对每个目标变量做深度优先遍历，得到其血缘路径
2. 合并所有路径的节点，取原图的诱导子图
3. 从子图中取出语句节点，按序号排序还原源码
"""

import logging
from typing import Callable, Iterable, List, Optional, Sequence

from analysis import (
    DEFAULT_SKIP_NODE_TYPES, DependencyGraph, Node, ScriptGraphBuilder, read_script
)
from .models import SliceResult, SliceType, UnknownValueError

logger = logging.getLogger(__name__)


def _depth_first(start: Node, neighbours: Callable[[Node], List[Node]]) -> List[Node]:
    """
    迭代式深度优先遍历，返回先序访问顺序
    同层邻居按边的插入顺序访问；visited集合保证有环时也能终止
    """
    order = []
    visited = set()
    stack = [start]

    while stack:
        node = stack.pop()
        if node in visited:
            continue
        visited.add(node)
        order.append(node)

        # 逆序压栈，使插入顺序靠前的邻居先出栈
        for nxt in reversed(neighbours(node)):
            if nxt not in visited:
                stack.append(nxt)

    return order


def ancestor_walk(graph: DependencyGraph, node: Node) -> List[Node]:
    """沿依赖边反向遍历，结果按求值顺序排列（依赖在前，目标在最后）"""
    order = _depth_first(node, graph.predecessors)
    order.reverse()
    return order


def descendant_walk(graph: DependencyGraph, node: Node) -> List[Node]:
    """沿依赖边正向遍历，结果按发现顺序排列（目标在最前）"""
    return _depth_first(node, graph.successors)


def list_values(graph: DependencyGraph) -> List[Node]:
    """列出依赖图中全部变量节点（按名称排序）"""
    return graph.value_nodes()


def extract_lineage(graph: DependencyGraph, target: Optional[str] = None,
                    direction=SliceType.ANCESTORS) -> List[Node]:
    """
    获取变量的血缘路径

    Args:
        graph: 依赖图
        target: 目标变量名；为None时不遍历，返回全部变量节点供用户选择
        direction: 遍历方向，ancestors(生成该变量的路径) 或 descendants(使用该变量的路径)

    Returns:
        节点列表

    Raises:
        UnknownValueError: 目标变量不在依赖图中
    """
    direction = SliceType.parse(direction)

    if target is None:
        candidates = list_values(graph)
        logger.info(f"请提供变量名，可选变量: {', '.join(n.name for n in candidates)}")
        return candidates

    if not graph.has_value(target):
        raise UnknownValueError(target, graph.value_names())

    node = graph.value(target)
    if direction == SliceType.ANCESTORS:
        path = ancestor_walk(graph, node)
    else:
        path = descendant_walk(graph, node)

    logger.debug(f"变量 '{target}' 的{direction.value}路径包含 {len(path)} 个节点")
    return path


def minimize(graph: DependencyGraph, lineage_paths: Iterable[Sequence[Node]]) -> DependencyGraph:
    """
    合并血缘路径并返回诱导子图
    只保留路径中出现过的节点，以及两端都在其中的边
    """
    nodes = set()
    for path in lineage_paths:
        nodes.update(path)
    return graph.subgraph(nodes)


def recover_positions(slice_graph: DependencyGraph) -> List[int]:
    """子图中所有语句节点的序号，升序"""
    return [node.position for node in slice_graph.statement_nodes()]


def recover_statements(slice_graph: DependencyGraph, source_lines: Sequence[str]) -> List[str]:
    """
    从子图还原源码语句
    Args:
        slice_graph: 切片子图
        source_lines: 原脚本语句列表，第p条语句为 source_lines[p-1]
    Returns:
        按原脚本顺序排列的语句列表
    """
    statements = []
    for position in recover_positions(slice_graph):
        if 1 <= position <= len(source_lines):
            statements.append(source_lines[position - 1])
        else:
            logger.warning(f"语句序号 {position} 超出脚本范围(共{len(source_lines)}条)，已跳过")
    return statements


def _normalize_targets(targets) -> List[str]:
    if targets is None:
        return []
    if isinstance(targets, str):
        targets = [targets]
    unique = []
    for target in targets:
        if target not in unique:
            unique.append(target)
    return unique


def min_code(graph: DependencyGraph, source_lines: Sequence[str], targets,
             direction=SliceType.ANCESTORS) -> List[str]:
    """获取重现目标变量所需的最少语句"""
    targets = _normalize_targets(targets)
    paths = [extract_lineage(graph, target, direction) for target in targets]
    return recover_statements(minimize(graph, paths), source_lines)


class ScriptSlicer:
    """脚本切片器"""

    def __init__(self, graph: DependencyGraph, source_lines: Sequence[str]):
        """
        Args:
            graph: 依赖图
            source_lines: 原脚本语句列表
        """
        self.graph = graph
        self.source_lines = list(source_lines)

    @classmethod
    def from_script(cls, source, skip_node_types: Iterable[str] = DEFAULT_SKIP_NODE_TYPES) -> 'ScriptSlicer':
        """从脚本对象、路径或源码创建切片器"""
        script = read_script(source, skip_node_types)
        graph = ScriptGraphBuilder(skip_node_types).build(script)
        return cls(graph, script.statements)

    def lineage(self, target: Optional[str] = None, direction=SliceType.ANCESTORS) -> List[Node]:
        return extract_lineage(self.graph, target, direction)

    def slice_graph(self, targets, direction=SliceType.ANCESTORS) -> DependencyGraph:
        """多个目标变量的切片子图"""
        targets = _normalize_targets(targets)
        return minimize(self.graph, [self.lineage(t, direction) for t in targets])

    def min_code(self, targets, direction=SliceType.ANCESTORS) -> List[str]:
        return recover_statements(self.slice_graph(targets, direction), self.source_lines)

    def clean(self, targets=None, direction=SliceType.ANCESTORS) -> SliceResult:
        """
        切片入口。未提供目标变量时返回候选变量列表
        Raises:
            UnknownValueError: 任一目标变量不在依赖图中
        """
        direction = SliceType.parse(direction)
        targets = _normalize_targets(targets)

        if not targets:
            logger.info("请至少提供一个变量")
            return SliceResult(direction=direction, candidates=self.graph.value_names())

        slice_graph = self.slice_graph(targets, direction)
        positions = recover_positions(slice_graph)
        statements = recover_statements(slice_graph, self.source_lines)
        logger.info(f"切片得到 {len(statements)} 条语句 (原脚本 {len(self.source_lines)} 条)")

        return SliceResult(
            targets=targets,
            direction=direction,
            positions=[p for p in positions if 1 <= p <= len(self.source_lines)],
            statements=statements,
        )


def clean(source, targets=None, direction=SliceType.ANCESTORS,
          skip_node_types: Iterable[str] = DEFAULT_SKIP_NODE_TYPES) -> SliceResult:
    """
    对脚本进行切片（便捷函数）
    Args:
        source: Script对象、脚本路径或脚本源码
        targets: 目标变量名或变量名列表
        direction: 切片方向
    Returns:
        SliceResult
    """
    slicer = ScriptSlicer.from_script(source, skip_node_types)
    return slicer.clean(targets, direction)
