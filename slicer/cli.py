#!/usr/bin/env python3
"""
脚本切片命令行工具
提取重现指定变量所需的最少代码
"""

import argparse
import logging
from pathlib import Path

from analysis import ScriptGraphBuilder, build_dot, read_script
from .config import LOG_LEVELS, SlicerConfig
from .log import setup_logging
from .models import SliceType, UnknownValueError
from .output_utils import print_slice_result
from .slicer_core import ScriptSlicer

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Python脚本切片工具：提取重现目标变量所需的最少代码")
    parser.add_argument("script", help="脚本文件路径")
    parser.add_argument("targets", nargs="*",
                        help="目标变量名，可指定多个；不指定时列出所有可选变量")
    parser.add_argument("--direction", choices=[t.value for t in SliceType], default=None,
                        help="切片方向：ancestors(生成变量所需的代码，默认)、descendants(使用变量的代码)")
    parser.add_argument("--numbered", action="store_true",
                        help="在每条语句前显示其在原脚本中的序号")
    parser.add_argument("--imports", action="store_true",
                        help="只列出脚本导入的模块")
    parser.add_argument("--dot", metavar="FILE",
                        help="将依赖图的dot源码写入文件，切片中的节点高亮")
    parser.add_argument("--config", help="配置文件路径(JSON)")
    parser.add_argument("--log-level", choices=LOG_LEVELS, help="日志级别，覆盖配置文件")
    return parser


def main(argv=None) -> int:
    """主函数，返回进程退出码"""
    args = build_parser().parse_args(argv)

    try:
        config = SlicerConfig.load(args.config)
    except (FileNotFoundError, ValueError) as e:
        setup_logging(logging.WARNING)
        logger.error(f"读取配置失败: {e}")
        return 1

    setup_logging(args.log_level or config.level)
    direction = SliceType.parse(args.direction) if args.direction else config.direction

    try:
        script = read_script(Path(args.script), config.skip_node_types)
    except FileNotFoundError:
        logger.error(f"文件不存在: {args.script}")
        return 1
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"无法读取文件 {args.script}: {e}")
        return 1

    builder = ScriptGraphBuilder(config.skip_node_types)
    if args.imports:
        for module in builder.imports(script):
            print(module)
        return 0

    slicer = ScriptSlicer(builder.build(script), script.statements)
    try:
        result = slicer.clean(args.targets, direction)
    except UnknownValueError as e:
        logger.error(str(e))
        return 1

    if result.is_listing:
        logger.warning("未指定目标变量，可选变量如下:")
    print_slice_result(result, numbered=args.numbered)

    if args.dot:
        highlight = slicer.slice_graph(result.targets, direction).nodes
        dot = build_dot(slicer.graph, highlight, slicer.source_lines,
                        filename=Path(args.dot).stem, **config.visualization)
        with open(args.dot, 'w', encoding='utf-8') as f:
            f.write(dot.source)
        logger.info(f"依赖图已保存到: {args.dot}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
