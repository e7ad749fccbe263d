#!/usr/bin/env python3
"""
基础分析器模块

提供基于tree-sitter的Python脚本解析能力
"""

import tree_sitter_python as tspython
from tree_sitter import Language, Parser
from typing import Iterable, List

PY_LANGUAGE = Language(tspython.language())

# 默认跳过的顶层节点类型
DEFAULT_SKIP_NODE_TYPES = ('comment',)


def text(node) -> str:
    """获取tree-sitter节点的文本内容"""
    return node.text.decode('utf-8')


class BaseAnalyzer:
    """基础分析器"""

    def __init__(self, skip_node_types: Iterable[str] = DEFAULT_SKIP_NODE_TYPES):
        """
        初始化分析器
        Args:
            skip_node_types: 不作为语句处理的顶层节点类型
        """
        self.language = PY_LANGUAGE
        self.parser = Parser(PY_LANGUAGE)
        self.skip_node_types = set(skip_node_types)

    def parse_code(self, code: str):
        """解析代码"""
        tree = self.parser.parse(bytes(code, 'utf-8'))
        return tree.root_node

    def find_statements(self, root_node) -> List:
        """查找所有顶层语句节点"""
        return [child for child in root_node.named_children
                if child.type not in self.skip_node_types]
