"""
Extended attribute access and filtering.

Readers expose two calls, list(path) and read(path, name), and raise OSError
on failure so the walker can attach the error to the entry being scanned.
"""

import os
import sys
from pathlib import Path

from .config import IGNORED_XATTRS, RESOURCE_FORK_XATTR


def filter_attributes(names, ignored=IGNORED_XATTRS) -> list[str]:
    """Drop attribute names known to carry nothing worth migrating."""
    return [name for name in names if name not in ignored]


class XattrReader:
    """Reads attributes through os.listxattr / os.getxattr (Linux and friends)."""

    supported = True

    def list(self, path: Path) -> list[str]:
        return os.listxattr(path, follow_symlinks=False)

    def read(self, path: Path, name: str) -> bytes:
        return os.getxattr(path, name, follow_symlinks=False)


class NamedForkReader:
    """
    macOS fallback when the os module has no xattr calls.

    Only the resource fork is reachable this way, through the
    ``<file>/..namedfork/rsrc`` path the kernel exposes for every file.
    """

    supported = True

    @staticmethod
    def _fork_path(path: Path) -> str:
        return os.path.join(os.fspath(path), "..namedfork", "rsrc")

    def list(self, path: Path) -> list[str]:
        try:
            size = os.stat(self._fork_path(path)).st_size
        except (FileNotFoundError, NotADirectoryError):
            # Directories and special files have no named forks
            return []
        return [RESOURCE_FORK_XATTR] if size > 0 else []

    def read(self, path: Path, name: str) -> bytes:
        if name != RESOURCE_FORK_XATTR:
            raise OSError(f"Attribute {name!r} not readable on this platform")
        with open(self._fork_path(path), "rb") as f:
            return f.read()


class NullAttributeReader:
    """Used where the platform has no extended attributes at all."""

    supported = False

    def list(self, path: Path) -> list[str]:
        return []

    def read(self, path: Path, name: str) -> bytes:
        raise OSError(f"Extended attributes are not supported on {sys.platform}")


def default_attribute_reader():
    if hasattr(os, "listxattr") and hasattr(os, "getxattr"):
        return XattrReader()
    if sys.platform == "darwin":
        return NamedForkReader()
    return NullAttributeReader()
