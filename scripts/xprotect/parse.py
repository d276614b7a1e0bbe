"""将 plist 原始字典解析为带类型标记的匹配树。"""

from __future__ import annotations

from .constants import (
    DEFAULT_MAX_DEPTH,
    DESCRIPTION_KEY,
    IDENTITY_KEY,
    LAUNCH_SERVICES_KEY,
    LAUNCH_TYPE_KEY,
    MATCH_FILE_KEY,
    MATCH_FILE_KEYS,
    MATCH_TYPE_KEY,
    MATCHES_KEY,
    MAX_DEPTH_LIMIT,
    PATTERN_KEY,
)
from .models import (
    FileInfo,
    GroupNode,
    LeafNode,
    MatchFileKeys,
    MatchNode,
    RuleEntry,
    StructureError,
)


def text_field(source: dict, key: str) -> str:
    """读取字符串字段，缺省为空串；非字符串标量按 `str()` 处理。"""

    value = source.get(key)
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def bounded_depth(max_depth: int) -> int:
    """层数上限不超过 MAX_DEPTH_LIMIT，保证结构异常先于解释器递归上限被发现。"""

    return min(max_depth, MAX_DEPTH_LIMIT)


def parse_file_info(raw: object, file_keys: MatchFileKeys) -> FileInfo:
    if not isinstance(raw, dict):
        raise StructureError(f"`{MATCH_FILE_KEY}` 必须是字典，实际类型为 `{type(raw).__name__}`。")

    download_content_type: str | None = None
    # 只看键是否存在：即便值为空串，也说明签名作者显式指定了下载内容类型。
    if file_keys.download_content_type_key in raw:
        download_content_type = text_field(raw, file_keys.download_content_type_key)

    return FileInfo(
        name=text_field(raw, file_keys.name_key),
        type_identifier=text_field(raw, file_keys.type_identifier_key),
        download_content_type=download_content_type,
    )


def parse_match_node(
    raw: object,
    file_keys: MatchFileKeys = MATCH_FILE_KEYS,
    depth: int = 0,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> MatchNode:
    """解析单个匹配节点。

    节点是否为分组只取决于自身是否带 Matches 键，与 MatchType 无关；
    该判断只在这里做一次，后续展平阶段直接按类型分派。
    """

    if not isinstance(raw, dict):
        raise StructureError(f"匹配节点必须是字典，实际类型为 `{type(raw).__name__}`。")

    if MATCHES_KEY not in raw:
        file_info = None
        if MATCH_FILE_KEY in raw:
            file_info = parse_file_info(raw[MATCH_FILE_KEY], file_keys)
        return LeafNode(
            identity=text_field(raw, IDENTITY_KEY),
            uses_pattern=PATTERN_KEY in raw,
            file_info=file_info,
        )

    return parse_group(raw, file_keys, depth, max_depth)


def parse_group(
    raw: dict,
    file_keys: MatchFileKeys = MATCH_FILE_KEYS,
    depth: int = 0,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> GroupNode:
    limit = bounded_depth(max_depth)
    if depth >= limit:
        raise StructureError(f"匹配树嵌套超过 {limit} 层。")

    # 仅容错 null，等价于空分组；其它非数组取值一律视为结构异常。
    children_raw = raw[MATCHES_KEY]
    if children_raw is None:
        children_raw = []
    if not isinstance(children_raw, list):
        raise StructureError(f"`{MATCHES_KEY}` 必须是数组，实际类型为 `{type(children_raw).__name__}`。")

    return GroupNode(
        match_type=text_field(raw, MATCH_TYPE_KEY),
        children=[
            parse_match_node(child, file_keys, depth + 1, max_depth) for child in children_raw
        ],
    )


def parse_launch_type(raw: dict) -> str:
    launch_services = raw.get(LAUNCH_SERVICES_KEY)
    if not isinstance(launch_services, dict):
        return ""
    return text_field(launch_services, LAUNCH_TYPE_KEY)


def parse_rule_entry(
    raw: object,
    file_keys: MatchFileKeys = MATCH_FILE_KEYS,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> RuleEntry:
    """解析根数组中的一条签名定义。

    条目本身就是匹配树的根：它的 MatchType/Matches 与普通分组同等对待。
    """

    if not isinstance(raw, dict):
        raise StructureError(f"签名条目必须是字典，实际类型为 `{type(raw).__name__}`。")

    match_tree = None
    if MATCHES_KEY in raw:
        match_tree = parse_group(raw, file_keys, 0, max_depth)

    return RuleEntry(
        name=text_field(raw, DESCRIPTION_KEY),
        launch_type=parse_launch_type(raw),
        match_tree=match_tree,
    )
