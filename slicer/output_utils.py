#!/usr/bin/env python3
"""
输出工具
"""

from typing import List

from .models import SliceResult


def format_slice_result(result: SliceResult, numbered: bool = False) -> str:
    """
    格式化切片结果
    Args:
        result: 切片结果
        numbered: 是否在每条语句前显示原脚本中的语句序号
    """
    if result.is_listing:
        return "\n".join(result.candidates)
    if not numbered:
        return result.code

    lines: List[str] = []
    for position, statement in zip(result.positions, result.statements):
        statement_lines = statement.split('\n')
        lines.append(f"{position:3d}: {statement_lines[0]}")
        # 多行语句的后续行与首行对齐
        lines.extend(f"     {line}" for line in statement_lines[1:])
    return "\n".join(lines)


def print_slice_result(result: SliceResult, numbered: bool = False):
    """打印切片结果"""
    output = format_slice_result(result, numbered)
    if output:
        print(output)
