"""逐条遍历签名条目并附加条目级上下文。"""

from __future__ import annotations

from .constants import DEFAULT_MAX_DEPTH, MATCH_FILE_KEYS
from .flatten import flatten_matches
from .models import FlatMatchRow, MatchFileKeys, RuleEntry
from .parse import parse_rule_entry
from .source import root_entries


def extract_entry(entry: RuleEntry, max_depth: int = DEFAULT_MAX_DEPTH) -> list[FlatMatchRow]:
    """展平单个条目，并给每一行盖上条目的 name/launch_type。"""

    file_matches: list[FlatMatchRow] = []
    flatten_matches(entry.match_tree, file_matches, max_depth=max_depth)
    return [row.stamp(entry.name, entry.launch_type) for row in file_matches]


def extract_entries(
    document: object,
    file_keys: MatchFileKeys = MATCH_FILE_KEYS,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> list[FlatMatchRow]:
    """把整份签名文档展平为有序的行列表。

    输出顺序与文档遍历顺序一致；根数组缺失或为空时返回空列表而不是报错。
    结构异常时抛出 `StructureError`，由调用方决定如何汇报。
    """

    results: list[FlatMatchRow] = []
    for raw_entry in root_entries(document):
        entry = parse_rule_entry(raw_entry, file_keys, max_depth)
        results.extend(extract_entry(entry, max_depth))
    return results
