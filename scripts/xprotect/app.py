"""XProtect 条目提取主流程。"""

from __future__ import annotations

import sys
from pathlib import Path

from .cli import parse_args
from .constants import MAX_DEPTH_LIMIT
from .entries import extract_entries
from .models import StructureError
from .render import RENDERERS, write_output
from .source import load_xprotect_document, validate_document


def main(argv: list[str] | None = None) -> int:
    """主流程：加载签名文档 -> 校验 -> 展平 -> 输出。"""

    args = parse_args(argv)
    render = RENDERERS[args.format]

    if not 1 <= args.max_depth <= MAX_DEPTH_LIMIT:
        print(
            f"[ERROR] --max-depth 必须在 1..{MAX_DEPTH_LIMIT} 之间，实际为 {args.max_depth}。",
            file=sys.stderr,
        )
        return 1

    input_path = Path(args.input).expanduser().resolve()
    reasons: list[str] = []
    document = load_xprotect_document(input_path, reasons)
    if document is None:
        # 签名文件不可用是正常情况（非 macOS 主机、系统裁剪等），输出空结果即可。
        if args.verbose:
            for item in reasons:
                print(f"[WARN] {item}", file=sys.stderr)
        write_output(render([]), args.output)
        return 0

    validation_errors, validation_warnings = validate_document(document, args.max_depth)
    if validation_errors:
        print("[ERROR] 签名文档校验失败：", file=sys.stderr)
        for item in validation_errors:
            print(f"  - {item}", file=sys.stderr)
        return 1

    if args.strict and validation_warnings:
        print("[ERROR] strict 模式命中 warning，已终止输出：", file=sys.stderr)
        for item in validation_warnings:
            print(f"  - {item}", file=sys.stderr)
        return 2

    try:
        rows = extract_entries(document, max_depth=args.max_depth)
    except StructureError as exc:
        print(f"[ERROR] 匹配树结构异常：{exc}", file=sys.stderr)
        return 1

    write_output(render(rows), args.output)

    # 标准输出可能承载结果本身，状态信息统一走 stderr。
    print(f"[OK] 已从 {input_path} 展平 {len(rows)} 条匹配记录。", file=sys.stderr)
    if validation_warnings:
        print("[WARN] 需要人工关注的条目：", file=sys.stderr)
        for item in validation_warnings:
            print(f"  - {item}", file=sys.stderr)

    return 0
