"""签名文档解析与展平过程中的中间模型。"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Union


class StructureError(ValueError):
    """匹配树结构异常（层级过深、字段类型不符等）。"""


@dataclass(frozen=True)
class MatchFileKeys:
    """MatchFile 子字典中各输出列对应的键名。

    作为显式配置传入解析层，而不是在遍历过程中散落地硬编码字段名。
    """

    name_key: str
    type_identifier_key: str
    download_content_type_key: str


@dataclass
class FileInfo:
    name: str = ""
    type_identifier: str = ""
    download_content_type: str | None = None

    @property
    def filetype(self) -> str:
        """下载内容类型更具体，存在时优先于 URL 类型标识。"""

        if self.download_content_type is not None:
            return self.download_content_type
        return self.type_identifier


@dataclass
class LeafNode:
    identity: str = ""
    uses_pattern: bool = False
    file_info: FileInfo | None = None


@dataclass
class GroupNode:
    match_type: str = ""
    children: list[MatchNode] = field(default_factory=list)


MatchNode = Union[GroupNode, LeafNode]


@dataclass
class RuleEntry:
    """根数组中的一条签名定义。

    `match_tree` 为 None 表示该条目没有 Matches，不会产出任何行。
    """

    name: str = ""
    launch_type: str = ""
    match_tree: GroupNode | None = None


@dataclass
class FlatMatchRow:
    """展平后的单行结果，最终交给渲染层输出。"""

    optional: bool
    identity: str
    filetype: str
    uses_pattern: bool
    filename: str
    name: str = ""
    launch_type: str = ""

    def stamp(self, name: str, launch_type: str) -> FlatMatchRow:
        return replace(self, name=name, launch_type=launch_type)

    def to_row(self) -> dict[str, str]:
        return {
            "name": self.name,
            "launch_type": self.launch_type,
            "identity": self.identity,
            "filename": self.filename,
            "filetype": self.filetype,
            "optional": "1" if self.optional else "0",
            "uses_pattern": "1" if self.uses_pattern else "0",
        }
