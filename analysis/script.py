#!/usr/bin/env python3
"""
脚本读取模块

把Python脚本拆分为按顺序编号的顶层语句
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

from .base import BaseAnalyzer, DEFAULT_SKIP_NODE_TYPES, text

logger = logging.getLogger(__name__)


@dataclass
class Script:
    """脚本：顶层语句列表，第 p 条语句对应 statements[p-1]"""
    statements: List[str] = field(default_factory=list)
    path: Optional[str] = None

    @classmethod
    def from_statements(cls, statements: Iterable[str], path: str = None) -> 'Script':
        return cls(statements=[str(s) for s in statements], path=path)

    def __len__(self):
        return len(self.statements)

    def __getitem__(self, position: int) -> str:
        """按语句序号（从1开始）获取语句"""
        if position < 1 or position > len(self.statements):
            raise IndexError(f"语句序号超出范围: {position}")
        return self.statements[position - 1]


def _looks_like_path(source: str) -> bool:
    return '\n' not in source and source.strip().endswith('.py')


def read_script(source, skip_node_types: Iterable[str] = DEFAULT_SKIP_NODE_TYPES) -> Script:
    """
    读取脚本
    Args:
        source: Script对象、脚本文件路径或脚本源码
        skip_node_types: 不作为语句处理的顶层节点类型
    Returns:
        Script对象
    """
    if isinstance(source, Script):
        return source

    path = None
    if isinstance(source, Path) or (isinstance(source, str) and os.path.isfile(source)):
        path = str(source)
        with open(path, 'r', encoding='utf-8') as f:
            code = f.read()
    elif isinstance(source, str) and _looks_like_path(source):
        raise FileNotFoundError(f"脚本文件不存在: {source}")
    else:
        code = source

    analyzer = BaseAnalyzer(skip_node_types)
    root = analyzer.parse_code(code)
    if root.has_error:
        logger.warning(f"脚本存在语法错误，将尽量继续处理: {path or '<string>'}")

    statements = [text(node) for node in analyzer.find_statements(root)]
    logger.debug(f"读取到 {len(statements)} 条顶层语句")
    return Script(statements=statements, path=path)
