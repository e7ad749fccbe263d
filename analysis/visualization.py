#!/usr/bin/env python3
"""
可视化模块

把依赖图转换为graphviz图，切片中的节点高亮显示
"""

from typing import Iterable, Optional, Sequence
from graphviz import Digraph

from .graph import DependencyGraph
from .node import StatementNode


def _node_id(node) -> str:
    # 语句与变量的标签可能相同，加前缀区分
    prefix = 's' if isinstance(node, StatementNode) else 'v'
    return f"{prefix}_{node.label}"


def build_dot(graph: DependencyGraph, highlight: Iterable = (),
              source_lines: Optional[Sequence[str]] = None, filename: str = 'dependency_graph',
              rankdir: str = 'TB', fontname: str = 'Arial',
              highlight_color: str = 'lightblue') -> Digraph:
    """
    构建依赖图的graphviz表示
    Args:
        graph: 依赖图
        highlight: 需要高亮的节点（通常是切片结果）
        source_lines: 原脚本语句，提供时语句节点显示源码
    """
    highlight = set(highlight)
    dot = Digraph(comment=filename, strict=True)
    dot.attr(rankdir=rankdir)
    dot.attr('node', fontname=fontname)
    dot.attr('edge', fontname=fontname)

    for node in graph.nodes:
        style = {'style': 'filled', 'fillcolor': highlight_color} if node in highlight else {}
        if isinstance(node, StatementNode):
            label = node.label
            if source_lines and 1 <= node.position <= len(source_lines):
                code = source_lines[node.position - 1].strip().replace('\n', ' ')
                if len(code) > 50:
                    code = code[:47] + "..."
                label = f"{node.position}: {code}"
            dot.node(_node_id(node), label=label, shape='rectangle', **style)
        else:
            dot.node(_node_id(node), label=node.label, shape='ellipse', **style)

    for source, target in graph.edges:
        dot.edge(_node_id(source), _node_id(target))

    return dot


def visualize_graph(graph: DependencyGraph, filename: str = 'dependency_graph', highlight: Iterable = (),
                    source_lines: Optional[Sequence[str]] = None, pdf: bool = False,
                    dot_format: bool = True, view: bool = False, **style) -> Digraph:
    """可视化依赖图，可保存.dot文件并生成PDF（生成PDF需要安装graphviz程序）"""
    dot = build_dot(graph, highlight, source_lines, filename, **style)

    # 保存.dot文件
    if dot_format:
        with open(f"{filename}.dot", 'w', encoding='utf-8') as f:
            f.write(dot.source)

    # 生成PDF文件
    if pdf:
        dot.render(filename, view=view, cleanup=True)

    return dot
