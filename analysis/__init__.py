"""
脚本依赖分析模块

提供依赖图数据结构、Python脚本读取、依赖图构建以及可视化功能
"""

from .node import (
    GraphError, MalformedIdentifierError, Node, NodeKind, StatementNode, ValueNode,
    is_statement_identifier, node_from_identifier
)
from .graph import DependencyGraph
from .base import BaseAnalyzer, DEFAULT_SKIP_NODE_TYPES
from .script import Script, read_script
from .builder import ScriptGraphBuilder, build_graph
from .visualization import build_dot, visualize_graph

__all__ = [
    'GraphError',
    'MalformedIdentifierError',
    'Node',
    'NodeKind',
    'StatementNode',
    'ValueNode',
    'is_statement_identifier',
    'node_from_identifier',
    'DependencyGraph',
    'BaseAnalyzer',
    'DEFAULT_SKIP_NODE_TYPES',
    'Script',
    'read_script',
    'ScriptGraphBuilder',
    'build_graph',
    'build_dot',
    'visualize_graph'
]
