#!/usr/bin/env python3
"""
依赖图节点模块

提供语句节点、变量节点以及根据标识符文本区分两类节点的工具
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class NodeKind(Enum):
    """节点类型枚举"""
    STATEMENT = "statement"  # 语句节点
    VALUE = "value"          # 变量节点


class GraphError(ValueError):
    """依赖图构造错误"""


class MalformedIdentifierError(GraphError):
    """标识符既不是合法的语句序号也不是变量名"""


@dataclass(frozen=True)
class StatementNode:
    """语句节点，position 为语句在脚本中的序号（从1开始）"""
    position: int

    @property
    def kind(self) -> NodeKind:
        return NodeKind.STATEMENT

    @property
    def label(self) -> str:
        return str(self.position)

    def __str__(self):
        return self.label


@dataclass(frozen=True)
class ValueNode:
    """变量节点，name 为变量名"""
    name: str

    @property
    def kind(self) -> NodeKind:
        return NodeKind.VALUE

    @property
    def label(self) -> str:
        return self.name

    def __str__(self):
        return self.label


Node = Union[StatementNode, ValueNode]


def is_statement_identifier(identifier: str) -> bool:
    """判断标识符是否表示语句：不含任何字母即视为语句序号"""
    return not any(ch.isalpha() for ch in identifier)


def node_from_identifier(identifier) -> Node:
    """
    把原始标识符转换为带类型的节点
    Args:
        identifier: 节点对象、语句序号(int)或标识符字符串
    Returns:
        StatementNode 或 ValueNode
    """
    if isinstance(identifier, (StatementNode, ValueNode)):
        return identifier
    if isinstance(identifier, int) and not isinstance(identifier, bool):
        if identifier < 0:
            raise MalformedIdentifierError(f"语句序号不能为负数: {identifier}")
        return StatementNode(identifier)

    identifier = str(identifier).strip()
    if not identifier:
        raise MalformedIdentifierError("标识符不能为空")
    if not is_statement_identifier(identifier):
        return ValueNode(identifier)
    # 不含字母但也不是纯数字（如 "_" 或 "1-2"），无法确定节点类型
    if not identifier.isdigit():
        raise MalformedIdentifierError(f"无法识别的节点标识符: '{identifier}'")
    return StatementNode(int(identifier))
