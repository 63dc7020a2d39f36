"""
Data-only copies of resource-fork-bearing files, for manual inspection.
"""

import os
import shutil
import tempfile
from pathlib import Path

from .basename import strict_extension
from .config import RESOURCE_FORK_XATTR
from .models import Findings, ScanEntry, ScanStartupError, StripConfig


def create_strip_dir(parent: Path | None = None) -> Path:
    """Create a fresh output directory (under the home directory by default)."""
    parent = parent or Path.home()
    try:
        return Path(tempfile.mkdtemp(prefix="stripped_files", dir=parent))
    except OSError as e:
        raise ScanStartupError(f"Could not create strip directory in {parent}: {e}")


def flattened_name(path: Path) -> str:
    """/Volumes/Old HD/Song -> __Volumes__Old HD__Song"""
    return str(path).replace(os.sep, "__")


def copy_stripped_file(
    entry: ScanEntry,
    attrs: list[str],
    reader,
    strip: StripConfig,
) -> tuple[int, Findings]:
    """
    Copy the data fork of a file that has a non-empty resource fork.

    Returns:
        (number of files copied, findings). The count is 0 or 1.
    """
    findings = Findings()

    if strict_extension(entry.name) in strip.skip_extensions:
        return 0, findings
    if RESOURCE_FORK_XATTR not in attrs:
        return 0, findings

    try:
        rsrc = reader.read(entry.path, RESOURCE_FORK_XATTR)
    except OSError:
        # Already reported by the resource fork inspection
        return 0, findings
    if not rsrc:
        return 0, findings

    dest = strip.destination / flattened_name(entry.path)
    try:
        # copyfile copies file contents only, never the resource fork
        shutil.copyfile(entry.path, dest)
    except OSError as e:
        findings.error(f"Could not copy data fork to {dest}: {e}")
        return 0, findings

    findings.info(f"Copied data-only version to {dest}")
    return 1, findings
