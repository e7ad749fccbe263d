#!/usr/bin/env python3
"""
日志配置模块
"""

import logging
import sys


class Colors:
    """ANSI color codes"""
    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    CYAN = '\033[36m'
    RESET = '\033[0m'


LEVEL_STYLES = {
    logging.DEBUG: (Colors.CYAN, "🔍"),
    logging.INFO: (Colors.CYAN, "ℹ️"),
    logging.WARNING: (Colors.YELLOW, "⚠️"),
    logging.ERROR: (Colors.RED, "❌"),
    logging.CRITICAL: (Colors.RED, "❌"),
}


class ColorFormatter(logging.Formatter):
    """带颜色和符号的日志格式"""

    def __init__(self, enable_colors: bool = True):
        super().__init__('%(message)s')
        self.enable_colors = enable_colors

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color, symbol = LEVEL_STYLES.get(record.levelno, (Colors.CYAN, "ℹ️"))
        if self.enable_colors:
            return f"{color}{symbol} [{record.levelname}]{Colors.RESET} {message}"
        return f"{symbol} [{record.levelname}] {message}"


def setup_logging(level=logging.INFO, enable_colors: bool = None):
    """
    配置日志记录，输出到stderr，切片结果独占stdout

    Args:
        level: 日志级别
        enable_colors: 是否输出颜色，默认在终端中启用
    """
    if enable_colors is None:
        enable_colors = sys.stderr.isatty()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ColorFormatter(enable_colors))

    root = logging.getLogger()
    for existing in list(root.handlers):
        if getattr(existing, '_script_slicer', False):
            root.removeHandler(existing)
    handler._script_slicer = True
    root.addHandler(handler)
    root.setLevel(level)
