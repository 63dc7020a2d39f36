import io
import shutil
import tempfile
import unittest
from pathlib import Path

from rich.console import Console

from audit_hdd.config import RESOURCE_FORK_REQUIRED, RESOURCE_FORK_XATTR
from audit_hdd.fakes import FakeAttributeReader, FakeDisassembler
from audit_hdd.scanner import scan_tree
from audit_hdd.utils import print_summary


class TestEndToEnd(unittest.TestCase):
    """a.txt, B and c.sd2 under one root: the classic migration scenario."""

    def setUp(self):
        self.root = Path(tempfile.mkdtemp()).absolute()
        (self.root / "a.txt").write_text("hello")
        (self.root / "B").write_bytes(b"\x00\x01binary")
        (self.root / "c.sd2").write_bytes(b"")

        self.reader = FakeAttributeReader({
            self.root / "c.sd2": {RESOURCE_FORK_XATTR: b"\x00" * 512},
        })
        self.disassembler = FakeDisassembler({
            self.root / "c.sd2": ["sdML", "STR "],
        })

    def tearDown(self):
        shutil.rmtree(self.root)

    def run_scan(self):
        out = Console(file=io.StringIO(), width=200)
        result = scan_tree(self.root, reader=self.reader, disassembler=self.disassembler, out=out, err=out)
        print_summary(result, out)
        return result, out.file.getvalue()

    def test_findings_and_summary(self):
        result, output = self.run_scan()
        lines = output.splitlines()

        b_line = lines.index(str(self.root / "B"))
        self.assertEqual(lines[b_line + 1], "    [WARN] Missing file extension.")

        c_line = lines.index(str(self.root / "c.sd2"))
        self.assertEqual(
            lines[c_line + 1],
            "    [WARN] Data fork is empty; resource fork may contain all data (512 bytes).",
        )
        self.assertEqual(lines[c_line + 2], f"    [INFO] xattrs: {RESOURCE_FORK_XATTR}")
        self.assertEqual(lines[c_line + 3], "    [INFO] Resource types: STR , sdML")

        self.assertNotIn(str(self.root / "a.txt"), lines)

        self.assertEqual(result.resource_forks.rows(), [(".sd2", 1, ["STR ", "sdML"])])
        row = next(line for line in lines if ".sd2" in line and "'STR '" in line)
        self.assertIn("'STR ', 'sdML'", row)
        self.assertIn(RESOURCE_FORK_REQUIRED, row)

        self.assertIn("Scanned 1 directories and 3 files. 0 scan errors.", output)
        self.assertIn("File extensions encountered (lowercased):", output)
        self.assertEqual(lines[-1], ".sd2 .txt")

    def test_repeat_scans_are_identical(self):
        first, _ = self.run_scan()
        second, _ = self.run_scan()

        self.assertEqual(first.summary, second.summary)
        self.assertEqual(first.resource_forks, second.resource_forks)
        self.assertEqual(first.extensions.sorted(), second.extensions.sorted())
        self.assertEqual(sorted(p.name for p in self.root.iterdir()), ["B", "a.txt", "c.sd2"])


if __name__ == '__main__':
    unittest.main()
