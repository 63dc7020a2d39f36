import unittest
from pathlib import Path

from audit_hdd.config import NO_EXTENSION, RESOURCE_FORK_XATTR
from audit_hdd.fakes import FakeAttributeReader, FakeDisassembler
from audit_hdd.models import ERROR, FILE, WARN, ResourceForkReport, ScanEntry
from audit_hdd.probes import DeRezDisassembler
from audit_hdd.resource_fork import inspect_resource_fork


def make_entry(path, size=0):
    return ScanEntry(path=Path(path), kind=FILE, size=size, modified=0.0)


class TestInspectResourceFork(unittest.TestCase):
    def test_empty_data_fork_with_types(self):
        entry = make_entry("/hd/Take 1.SD2", size=0)
        reader = FakeAttributeReader({entry.path: {RESOURCE_FORK_XATTR: b"\x00" * 286}})
        disassembler = FakeDisassembler({entry.path: ["sdML", "STR ", "sdML"]})
        report = ResourceForkReport()

        findings = inspect_resource_fork(entry, reader, disassembler, report)

        self.assertEqual(report.count(".sd2"), 1)
        self.assertEqual(report.types(".sd2"), ["STR ", "sdML"])
        self.assertEqual(findings.of(WARN), [
            "Data fork is empty; resource fork may contain all data (286 bytes).",
        ])
        self.assertEqual(findings.of(ERROR), [])

    def test_no_types_contributes_nothing(self):
        entry = make_entry("/hd/doc.txt", size=10)
        reader = FakeAttributeReader({entry.path: {RESOURCE_FORK_XATTR: b"x"}})
        report = ResourceForkReport()

        findings = inspect_resource_fork(entry, reader, FakeDisassembler(), report)

        self.assertFalse(report)
        self.assertFalse(findings.has_problems())

    def test_empty_data_fork_without_types_is_not_flagged(self):
        entry = make_entry("/hd/Unknown.sd2", size=0)
        reader = FakeAttributeReader({entry.path: {RESOURCE_FORK_XATTR: b"\x00" * 64}})
        report = ResourceForkReport()

        findings = inspect_resource_fork(entry, reader, FakeDisassembler(), report)

        self.assertFalse(report)
        self.assertEqual(findings.of(WARN), [])
        self.assertFalse(findings.has_problems())

    def test_no_extension_sentinel(self):
        entry = make_entry("/hd/Icon File", size=12)
        reader = FakeAttributeReader({entry.path: {RESOURCE_FORK_XATTR: b"x"}})
        report = ResourceForkReport()

        inspect_resource_fork(entry, reader, FakeDisassembler({entry.path: ["icns"]}), report)

        self.assertEqual(report.rows(), [(NO_EXTENSION, 1, ["icns"])])

    def test_counts_accumulate_per_extension(self):
        report = ResourceForkReport()
        for name, types in [("a.psd", ["8BIM"]), ("b.PSD", ["icl8", "8BIM"]), ("c.mov", ["moov"])]:
            entry = make_entry(f"/hd/{name}", size=100)
            reader = FakeAttributeReader({entry.path: {RESOURCE_FORK_XATTR: b"x"}})
            inspect_resource_fork(entry, reader, FakeDisassembler({entry.path: types}), report)

        self.assertEqual(report.rows(), [
            (".mov", 1, ["moov"]),
            (".psd", 2, ["8BIM", "icl8"]),
        ])

    def test_read_and_disassembler_failures_are_findings(self):
        entry = make_entry("/hd/broken.sd2", size=0)
        reader = FakeAttributeReader(read_errors={entry.path: OSError(5, "Input/output error")})
        disassembler = FakeDisassembler(failures=[entry.path])
        report = ResourceForkReport()

        findings = inspect_resource_fork(entry, reader, disassembler, report)

        self.assertEqual(len(findings.of(ERROR)), 2)
        self.assertFalse(report)
        # Nothing was read, so no empty-data-fork claim can be made
        self.assertEqual(findings.of(WARN), [])


class TestDeRezParsing(unittest.TestCase):
    def test_parse_output(self):
        output = (
            "data 'STR ' (128) {\n"
            "\t$\"0548 656C 6C6F\"\n"
            "};\n"
            "\n"
            "data 'sdML' (1000, \"Marker List\") {\n"
            "};\n"
            "data 'STR ' (129) {\n"
            "};\n"
            "  data 'xxxx' (1) {\n"
        )
        self.assertEqual(DeRezDisassembler().parse(output), ["STR ", "sdML"])

    def test_parse_empty_output(self):
        self.assertEqual(DeRezDisassembler().parse(""), [])


if __name__ == '__main__':
    unittest.main()
