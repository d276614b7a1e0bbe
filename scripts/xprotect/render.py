"""结果行序列化与输出。"""

from __future__ import annotations

import csv
import io
import json
import sys
from pathlib import Path

from .constants import COLUMNS
from .models import FlatMatchRow


def render_json(rows: list[FlatMatchRow]) -> str:
    # ensure_ascii=False 保留 Description 中的非 ASCII 字符，便于人工比对。
    payload = [row.to_row() for row in rows]
    return json.dumps(payload, ensure_ascii=False, indent=2) + "\n"


def render_csv(rows: list[FlatMatchRow]) -> str:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=list(COLUMNS), lineterminator="\n")
    writer.writeheader()
    for row in rows:
        writer.writerow(row.to_row())
    return buffer.getvalue()


RENDERERS = {
    "json": render_json,
    "csv": render_csv,
}


def write_output(text: str, output: str) -> None:
    """写入输出文件；`-` 表示标准输出。"""

    if output == "-":
        sys.stdout.write(text)
        return

    path = Path(output)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
