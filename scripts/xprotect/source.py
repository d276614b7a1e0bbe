"""签名文档定位、加载与结构校验。"""

from __future__ import annotations

import plistlib
from pathlib import Path
from xml.parsers.expat import ExpatError

from .constants import (
    DEFAULT_MAX_DEPTH,
    DESCRIPTION_KEY,
    MATCH_FILE_KEY,
    MATCHES_KEY,
    XPROTECT_DIR,
    XPROTECT_FILE_NAME,
)
from .parse import bounded_depth

# 部分工具把 plist 根数组包一层 `root` 键输出，这里两种形态都接受。
ROOT_KEY = "root"


def default_xprotect_path() -> Path:
    return Path(XPROTECT_DIR) / XPROTECT_FILE_NAME


def load_xprotect_document(path: Path, reasons: list[str] | None = None) -> object | None:
    """读取并解析 plist。

    文件缺失或解析失败都视为“功能不可用”：返回 None 而不抛错，
    原因追加到 `reasons`，由调用方决定是否输出。
    """

    if reasons is None:
        reasons = []

    if not path.is_file():
        reasons.append(f"找不到签名文件: {path}")
        return None

    try:
        with path.open("rb") as fp:
            return plistlib.load(fp)
    except (
        plistlib.InvalidFileException,
        ExpatError,
        ValueError,
        OSError,
        # plistlib 对异常深的二进制嵌套直接递归溢出，对畸形 <date> 抛 AttributeError。
        RecursionError,
        AttributeError,
    ) as exc:
        reasons.append(f"无法解析签名文件 {path}: {exc}")
        return None


def root_entries(document: object) -> list:
    """取出文档的根数组；结构不符时返回空列表。"""

    if isinstance(document, list):
        return document
    if isinstance(document, dict):
        entries = document.get(ROOT_KEY)
        if isinstance(entries, list):
            return entries
    return []


def validate_match_node(
    node: dict,
    label: str,
    depth: int,
    max_depth: int,
    errors: list[str],
    warnings: list[str],
) -> None:
    if MATCHES_KEY not in node:
        if MATCH_FILE_KEY not in node:
            warnings.append(f"{label} 的叶子匹配项缺少 `{MATCH_FILE_KEY}`，将被忽略。")
        elif not isinstance(node[MATCH_FILE_KEY], dict):
            errors.append(f"{label} 的 `{MATCH_FILE_KEY}` 必须是字典。")
        return

    limit = bounded_depth(max_depth)
    if depth >= limit:
        errors.append(f"{label} 的匹配树嵌套超过 {limit} 层。")
        return

    children = node[MATCHES_KEY]
    if children is None:
        return
    if not isinstance(children, list):
        errors.append(f"{label} 的 `{MATCHES_KEY}` 必须是数组或 null。")
        return

    for pos, child in enumerate(children, 1):
        child_label = f"{label}/{pos}"
        if not isinstance(child, dict):
            errors.append(f"{child_label} 匹配项不是字典，实际类型为 `{type(child).__name__}`。")
            continue
        validate_match_node(child, child_label, depth + 1, max_depth, errors, warnings)


def validate_document(
    document: object,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> tuple[list[str], list[str]]:
    """校验签名文档结构，提前暴露会导致展平失败或静默丢行的问题。

    只做检查、不改写输入，避免静默修复掩盖问题来源。
    """

    errors: list[str] = []
    warnings: list[str] = []
    descriptions_seen: dict[str, int] = {}

    if document is not None and not isinstance(document, (list, dict)):
        errors.append(f"文档根节点类型无法识别：`{type(document).__name__}`。")
        return errors, warnings

    for idx, item in enumerate(root_entries(document), 1):
        if not isinstance(item, dict):
            errors.append(f"#{idx:03d} 条目不是字典，实际类型为 `{type(item).__name__}`。")
            continue

        description = str(item.get(DESCRIPTION_KEY) or "").strip()
        if not description:
            warnings.append(f"#{idx:03d} 缺少 `{DESCRIPTION_KEY}`，name 列将为空。")
        elif description in descriptions_seen:
            warnings.append(
                f"#{idx:03d} 与 #{descriptions_seen[description]:03d} 的 Description 同名：`{description}`。"
            )
        else:
            descriptions_seen[description] = idx

        if MATCHES_KEY not in item:
            warnings.append(f"#{idx:03d} 没有 `{MATCHES_KEY}`，不会产出任何行。")
            continue

        label = f"#{idx:03d} `{description or '-'}`"
        validate_match_node(item, label, 0, max_depth, errors, warnings)

    return errors, warnings
