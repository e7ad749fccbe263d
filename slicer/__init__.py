#!/usr/bin/env python3
"""
Slicer包 - Python脚本切片工具
"""

from .models import SliceResult, SliceType, UnknownValueError
from .slicer_core import (
    ScriptSlicer, ancestor_walk, clean, descendant_walk, extract_lineage,
    list_values, min_code, minimize, recover_positions, recover_statements
)

# 版本信息
__version__ = "1.0.0"

# 公开的API
__all__ = [
    'SliceResult',
    'SliceType',
    'UnknownValueError',
    'ScriptSlicer',
    'ancestor_walk',
    'clean',
    'descendant_walk',
    'extract_lineage',
    'list_values',
    'min_code',
    'minimize',
    'recover_positions',
    'recover_statements'
]

# 包的简介
__doc__ = """
Slicer包提供Python脚本切片功能：

主要功能：
- 基于依赖图的变量血缘提取（后向/前向）
- 多个目标变量的路径合并与诱导子图
- 按原脚本顺序还原最少代码

使用示例：

from slicer import clean

script = '''
mat = read_data("data.csv")
tab = summarize(mat)
out = write(tab)
'''

result = clean(script, "tab")
print(result.code)
"""
