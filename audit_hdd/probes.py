"""
Adapters around the external command-line tools the audit relies on.

Each adapter answers one question about a path. Failures are raised as
ProbeError so callers can turn them into findings for that entry.
"""

import re
import subprocess
from pathlib import Path


class ProbeError(Exception):
    """An external tool could not be run or returned an error."""


def run_tool(args: list[str], timeout: float | None = None) -> str:
    """Run a command and return its stdout; raise ProbeError on any failure."""
    try:
        proc = subprocess.run(args, capture_output=True, timeout=timeout, check=False)
    except FileNotFoundError:
        raise ProbeError(f"{args[0]} not found on PATH")
    except subprocess.TimeoutExpired:
        raise ProbeError(f"{args[0]} timed out after {timeout}s")
    except OSError as e:
        raise ProbeError(f"{args[0]} failed to start: {e}")

    if proc.returncode != 0:
        detail = proc.stderr.decode("utf-8", errors="replace").strip()
        msg = f"{args[0]} exited with status {proc.returncode}"
        raise ProbeError(f"{msg}: {detail}" if detail else msg)

    return proc.stdout.decode("utf-8", errors="replace")


class DeRezDisassembler:
    """
    Lists the resource types in a file's resource fork via DeRez.

    DeRez prints one ``data 'TYPE' (id, ...) {`` block per resource. The
    pattern is not documented, so only lines in that shape are trusted.
    """

    RESOURCE_TYPE = re.compile(r"^data '(.{4})'", re.MULTILINE)

    def __init__(self, command: str = "DeRez", timeout: float | None = None):
        self.command = command
        self.timeout = timeout

    def parse(self, output: str) -> list[str]:
        return sorted(set(self.RESOURCE_TYPE.findall(output)))

    def resource_types(self, path: Path) -> list[str]:
        return self.parse(run_tool([self.command, str(path)], self.timeout))


class FileCommandProbe:
    """Coarse content classification from ``file -b``."""

    def __init__(self, command: str = "file", timeout: float | None = None):
        self.command = command
        self.timeout = timeout

    def classify(self, path: Path) -> str:
        return run_tool([self.command, "-b", str(path)], self.timeout).strip()


class GetFileInfoTypeLookup:
    """Classic Mac OS four-character file type, from the GetFileInfo tool."""

    def __init__(self, command: str = "GetFileInfo", timeout: float | None = None):
        self.command = command
        self.timeout = timeout

    def type_code(self, path: Path) -> str:
        out = run_tool([self.command, "-t", str(path)], self.timeout)
        return out.strip().replace('"', "")
