#!/usr/bin/env python3
"""将 XProtect.plist 中的签名条目展平为表格行。"""

from __future__ import annotations

import sys
from pathlib import Path

SCRIPTS_DIR = Path(__file__).resolve().parent
if str(SCRIPTS_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPTS_DIR))

from xprotect.app import main  # noqa: E402

if __name__ == "__main__":
    raise SystemExit(main())
