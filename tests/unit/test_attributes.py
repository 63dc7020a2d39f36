import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from audit_hdd.attributes import (
    NamedForkReader,
    NullAttributeReader,
    XattrReader,
    default_attribute_reader,
    filter_attributes,
)
from audit_hdd.config import RESOURCE_FORK_XATTR


class TestFilterAttributes(unittest.TestCase):
    def test_removes_ignored(self):
        self.assertEqual(
            filter_attributes(["com.apple.FinderInfo", "com.custom.tag"]),
            ["com.custom.tag"],
        )

    def test_keeps_order_and_resource_fork(self):
        attrs = ["com.custom.b", "com.apple.quarantine", RESOURCE_FORK_XATTR, "com.custom.a"]
        self.assertEqual(filter_attributes(attrs), ["com.custom.b", RESOURCE_FORK_XATTR, "com.custom.a"])

    def test_custom_ignore_set(self):
        self.assertEqual(filter_attributes(["a", "b"], ignored=frozenset({"b"})), ["a"])

    def test_empty(self):
        self.assertEqual(filter_attributes([]), [])


class TestReaders(unittest.TestCase):
    def test_default_reader_prefers_os_xattrs(self):
        with patch("audit_hdd.attributes.os") as mock_os:
            mock_os.listxattr = lambda *a, **k: []
            mock_os.getxattr = lambda *a, **k: b""
            self.assertIsInstance(default_attribute_reader(), XattrReader)

    def test_default_reader_on_platform_without_xattrs(self):
        with patch("audit_hdd.attributes.os", spec=["path", "stat"]), \
             patch("audit_hdd.attributes.sys.platform", "win32"):
            reader = default_attribute_reader()
        self.assertIsInstance(reader, NullAttributeReader)
        self.assertFalse(reader.supported)
        self.assertEqual(reader.list(Path("/x")), [])
        with self.assertRaises(OSError):
            reader.read(Path("/x"), RESOURCE_FORK_XATTR)

    def test_default_reader_on_macos(self):
        with patch("audit_hdd.attributes.os", spec=["path", "stat"]), \
             patch("audit_hdd.attributes.sys.platform", "darwin"):
            self.assertIsInstance(default_attribute_reader(), NamedForkReader)

    @unittest.skipUnless(hasattr(os, "setxattr") and sys.platform.startswith("linux"), "needs Linux xattrs")
    def test_xattr_reader_roundtrip(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "file.txt"
            path.write_text("content")
            try:
                os.setxattr(path, "user.audit_test", b"value")
            except OSError:
                self.skipTest("filesystem does not support user xattrs")

            reader = XattrReader()
            self.assertIn("user.audit_test", reader.list(path))
            self.assertEqual(reader.read(path, "user.audit_test"), b"value")

    def test_named_fork_reader_without_fork(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "plain.txt"
            path.write_text("content")
            # On non-Mac systems the ..namedfork path never exists
            if sys.platform != "darwin":
                self.assertEqual(NamedForkReader().list(path), [])
            with self.assertRaises(OSError):
                NamedForkReader().read(path, "com.example.other")


if __name__ == '__main__':
    unittest.main()
