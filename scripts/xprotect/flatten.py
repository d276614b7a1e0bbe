"""匹配树展平逻辑。"""

from __future__ import annotations

from .constants import DEFAULT_MAX_DEPTH, MATCH_ANY
from .models import FlatMatchRow, GroupNode, StructureError
from .parse import bounded_depth


def flatten_matches(
    group: GroupNode | None,
    results: list[FlatMatchRow],
    depth: int = 0,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> None:
    """递归展平一个分组，把叶子行追加到 `results`。

    可选标记只由当前分组自身的 MatchType 决定，不继承也不合并祖先分组的取值：
    外层 MatchAny 之下再嵌一层“全部命中”分组时，内层叶子仍输出 optional=0。
    """

    if group is None:
        return
    limit = bounded_depth(max_depth)
    if depth >= limit:
        raise StructureError(f"匹配树嵌套超过 {limit} 层。")

    optional = group.match_type == MATCH_ANY
    for child in group.children:
        if isinstance(child, GroupNode):
            flatten_matches(child, results, depth + 1, max_depth)
            continue

        # 叶子没有 MatchFile 属于源数据残缺，跳过即可，不中断同级其它条目。
        if child.file_info is None:
            continue

        results.append(
            FlatMatchRow(
                optional=optional,
                identity=child.identity,
                filetype=child.file_info.filetype,
                uses_pattern=child.uses_pattern,
                filename=child.file_info.name,
            )
        )


def flatten_tree(group: GroupNode | None, max_depth: int = DEFAULT_MAX_DEPTH) -> list[FlatMatchRow]:
    results: list[FlatMatchRow] = []
    flatten_matches(group, results, max_depth=max_depth)
    return results
