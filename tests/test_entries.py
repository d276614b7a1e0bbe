"""条目遍历与上下文继承测试。"""

from __future__ import annotations

import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SCRIPTS_DIR = ROOT / "scripts"
if str(SCRIPTS_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPTS_DIR))

from xprotect.entries import extract_entries, extract_entry  # noqa: E402
from xprotect.models import FlatMatchRow, RuleEntry, StructureError  # noqa: E402
from xprotect.render import render_csv, render_json  # noqa: E402

ARCHIVE_ENTRY = {
    "Description": "Test.A",
    "LaunchServices": {"LSItemContentType": "public.archive"},
    "Matches": [
        {
            "MatchType": "MatchAny",
            "Matches": [
                {
                    "Identity": "id1",
                    "MatchFile": {
                        "NSURLNameKey": "bad.zip",
                        "NSURLTypeIdentifierKey": "public.zip-archive",
                    },
                }
            ],
        }
    ],
}


class EntryWalkerTests(unittest.TestCase):
    def test_archive_entry_scenario(self) -> None:
        rows = extract_entries([ARCHIVE_ENTRY])
        self.assertEqual(
            rows,
            [
                FlatMatchRow(
                    optional=True,
                    identity="id1",
                    filetype="public.zip-archive",
                    uses_pattern=False,
                    filename="bad.zip",
                    name="Test.A",
                    launch_type="public.archive",
                )
            ],
        )

    def test_empty_or_missing_root(self) -> None:
        self.assertEqual(extract_entries([]), [])
        self.assertEqual(extract_entries({}), [])
        self.assertEqual(extract_entries(None), [])
        self.assertEqual(extract_entries({"root": [ARCHIVE_ENTRY]})[0].name, "Test.A")

    def test_missing_match_file_does_not_stop_siblings(self) -> None:
        entry = {
            "Description": "Test.B",
            "Matches": [
                {"Identity": "no-file"},
                {"Identity": "with-file", "MatchFile": {"NSURLNameKey": "b.app"}},
            ],
        }
        rows = extract_entries([entry, ARCHIVE_ENTRY])
        self.assertEqual([row.identity for row in rows], ["with-file", "id1"])
        self.assertEqual(rows[0].launch_type, "")
        self.assertFalse(rows[0].optional)

    def test_context_reaches_deep_leaves(self) -> None:
        entry = {
            "Description": "Test.Deep",
            "LaunchServices": {"LSItemContentType": "com.apple.disk-image"},
            "Matches": [
                {"Matches": [{"Matches": [{"Identity": "x", "MatchFile": {}}]}]},
                {"Identity": "y", "MatchFile": {}},
            ],
        }
        rows = extract_entries([entry])
        self.assertEqual(len(rows), 2)
        for row in rows:
            self.assertEqual(row.name, "Test.Deep")
            self.assertEqual(row.launch_type, "com.apple.disk-image")

    def test_entry_without_matches_yields_nothing(self) -> None:
        self.assertEqual(extract_entry(RuleEntry(name="inert")), [])
        self.assertEqual(extract_entries([{"Description": "inert"}]), [])

    def test_structure_error_propagates(self) -> None:
        with self.assertRaises(StructureError):
            extract_entries([{"Matches": [{"Matches": [{"Matches": []}]}]}], max_depth=2)

    def test_oversized_max_depth_raises_structure_error(self) -> None:
        node: dict = {"Matches": []}
        for _ in range(300):
            node = {"Matches": [node]}
        with self.assertRaises(StructureError):
            extract_entries([node], max_depth=5000)

    def test_rendered_columns(self) -> None:
        rows = extract_entries([ARCHIVE_ENTRY])
        self.assertIn('"optional": "1"', render_json(rows))
        lines = render_csv(rows).splitlines()
        self.assertEqual(lines[0], "name,launch_type,identity,filename,filetype,optional,uses_pattern")
        self.assertEqual(lines[1], "Test.A,public.archive,id1,bad.zip,public.zip-archive,1,0")


if __name__ == "__main__":
    unittest.main()
