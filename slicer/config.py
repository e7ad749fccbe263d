#!/usr/bin/env python3
"""
配置文件解析器 - 读取切片工具配置
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .models import SliceType

DEFAULT_CONFIG_PATH = Path(__file__).parent / 'config.json'

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')

# build_dot 接受的样式参数
VISUALIZATION_KEYS = ('rankdir', 'fontname', 'highlight_color')


def _load_json(path: Path) -> Dict[str, Any]:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            config = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"配置文件不存在: {path}")
    except json.JSONDecodeError as e:
        raise ValueError(f"配置文件格式错误: {e}")

    if not isinstance(config, dict):
        raise ValueError(f"配置文件顶层必须是对象: {path}")
    return config


@dataclass
class SlicerConfig:
    """切片工具配置"""
    direction: SliceType = SliceType.ANCESTORS
    log_level: str = 'WARNING'
    skip_node_types: List[str] = field(default_factory=lambda: ['comment'])
    visualization: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> 'SlicerConfig':
        """
        加载配置：先读取默认配置，再用用户配置覆盖
        Args:
            config_path: 用户配置文件路径
        """
        config = _load_json(DEFAULT_CONFIG_PATH)
        if config_path:
            user_config = _load_json(Path(config_path))
            # visualization 按键合并，其余配置项直接覆盖
            visualization = dict(config.get('visualization', {}))
            user_visualization = user_config.pop('visualization', {}) or {}
            if not isinstance(user_visualization, dict):
                raise ValueError("visualization 必须是对象")
            visualization.update(user_visualization)
            config.update(user_config)
            config['visualization'] = visualization
        return cls.from_dict(config)

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> 'SlicerConfig':
        log_level = str(config.get('log_level', 'WARNING')).upper()
        if log_level not in LOG_LEVELS:
            raise ValueError(f"不支持的日志级别: {log_level}")

        skip_node_types = config.get('skip_node_types', ['comment'])
        if not isinstance(skip_node_types, list):
            raise ValueError("skip_node_types 必须是列表")

        visualization = config.get('visualization', {})
        if not isinstance(visualization, dict):
            raise ValueError("visualization 必须是对象")
        unknown = sorted(set(visualization) - set(VISUALIZATION_KEYS))
        if unknown:
            raise ValueError(f"不支持的可视化配置项: {', '.join(unknown)}")

        return cls(
            direction=SliceType.parse(config.get('direction', 'ancestors')),
            log_level=log_level,
            skip_node_types=[str(t) for t in skip_node_types],
            visualization={k: str(v) for k, v in visualization.items()},
        )

    @property
    def level(self) -> int:
        return getattr(logging, self.log_level)
