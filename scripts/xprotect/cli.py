"""命令行参数解析。"""

from __future__ import annotations

import argparse

from .constants import DEFAULT_MAX_DEPTH
from .render import RENDERERS
from .source import default_xprotect_path


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """解析命令行参数。

    默认读取系统自带的 XProtect.plist 并以 JSON 输出到标准输出。
    """

    parser = argparse.ArgumentParser(description="展平 XProtect 签名条目为表格行")
    parser.add_argument(
        "--input",
        default=str(default_xprotect_path()),
        help=f"XProtect.plist 路径（默认：{default_xprotect_path()}）",
    )
    parser.add_argument(
        "--output",
        default="-",
        help="输出文件路径，`-` 表示标准输出（默认：-）",
    )
    parser.add_argument(
        "--format",
        choices=tuple(RENDERERS),
        default="json",
        help="输出格式（默认：json）",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=DEFAULT_MAX_DEPTH,
        help=f"匹配树允许的最大嵌套层数（默认：{DEFAULT_MAX_DEPTH}）",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="严格模式：出现任何校验 warning 即返回非 0",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="签名文件缺失或无法解析时，在 stderr 输出原因",
    )
    return parser.parse_args(argv)
