#!/usr/bin/env python3
"""
Python脚本切片工具 - 主入口

使用方法:
    列出可选变量:
        python clean.py script.py
    提取重现变量所需的最少代码:
        python clean.py script.py variable [variable ...] [options]
"""

import sys

from slicer.cli import main

if __name__ == "__main__":
    sys.exit(main())
