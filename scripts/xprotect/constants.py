"""XProtect 提取器使用的静态常量。"""

from __future__ import annotations

from .models import MatchFileKeys

# 系统自带 XProtect 签名所在目录；同目录下还有 XProtect.meta.plist，这里只读取 XProtect.plist。
XPROTECT_DIR = "/System/Library/CoreServices/CoreTypes.bundle/Contents/Resources/"
XPROTECT_FILE_NAME = "XProtect.plist"

# 只有该值表示“子规则任选其一”，其余取值（含缺省）一律按“全部命中”处理。
MATCH_ANY = "MatchAny"

MATCHES_KEY = "Matches"
MATCH_TYPE_KEY = "MatchType"
MATCH_FILE_KEY = "MatchFile"
IDENTITY_KEY = "Identity"
PATTERN_KEY = "Pattern"

DESCRIPTION_KEY = "Description"
LAUNCH_SERVICES_KEY = "LaunchServices"
LAUNCH_TYPE_KEY = "LSItemContentType"

# MatchFile 可以携带任意 NSURL 资源键，这里只挑出映射到输出列的几个。
MATCH_FILE_KEYS = MatchFileKeys(
    name_key="NSURLNameKey",
    type_identifier_key="NSURLTypeIdentifierKey",
    download_content_type_key="LSDownloadContentTypeKey",
)

# 嵌套层数上限：签名文件随系统更新下发，不受本工具控制，需要防御异常深的结构。
DEFAULT_MAX_DEPTH = 64

# 输出列顺序，JSON 与 CSV 共用。
COLUMNS = (
    "name",
    "launch_type",
    "identity",
    "filename",
    "filetype",
    "optional",
    "uses_pattern",
)

# 解析阶段每层约占三个栈帧，上限需留在解释器默认递归深度之内。
MAX_DEPTH_LIMIT = 256
