#!/usr/bin/env python3
"""
数据模型定义
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Sequence


class SliceType(Enum):
    """切片方向"""
    ANCESTORS = "ancestors"      # 后向：目标变量依赖的所有语句和变量
    DESCENDANTS = "descendants"  # 前向：依赖目标变量的所有语句和变量

    @classmethod
    def parse(cls, value) -> 'SliceType':
        """把字符串转换为切片方向，兼容 in/out、backward/forward 写法"""
        if isinstance(value, cls):
            return value
        aliases = {
            'ancestors': cls.ANCESTORS, 'in': cls.ANCESTORS, 'backward': cls.ANCESTORS,
            'descendants': cls.DESCENDANTS, 'out': cls.DESCENDANTS, 'forward': cls.DESCENDANTS,
        }
        key = str(value).strip().lower()
        if key not in aliases:
            raise ValueError(f"不支持的切片方向: {value}")
        return aliases[key]


class UnknownValueError(ValueError):
    """目标变量不在依赖图中"""

    def __init__(self, name: str, candidates: Sequence[str] = ()):
        self.name = name
        self.candidates = list(candidates)
        message = f"依赖图中不存在变量 '{name}'"
        if self.candidates:
            message += f"，可选变量: {', '.join(self.candidates)}"
        super().__init__(message)


@dataclass
class SliceResult:
    """切片结果。未提供目标变量时只包含候选变量列表"""
    targets: List[str] = field(default_factory=list)
    direction: SliceType = SliceType.ANCESTORS
    positions: List[int] = field(default_factory=list)
    statements: List[str] = field(default_factory=list)
    candidates: List[str] = field(default_factory=list)

    @property
    def is_listing(self) -> bool:
        return not self.targets

    @property
    def code(self) -> str:
        return "\n".join(self.statements)
