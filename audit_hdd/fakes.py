"""
Fake implementations for testing.

In-memory stand-ins for the attribute reader and the external tools, so the
classification logic can be exercised without macOS, DeRez or ``file``.
"""

from pathlib import Path

from .probes import ProbeError


class FakeAttributeReader:
    """
    Attribute reader backed by a dict.

    Args:
        attrs: {path: {attribute name: value bytes}}
        list_errors: {path: OSError} raised when listing that path
        read_errors: {path: OSError} raised when reading from that path
    """

    supported = True

    def __init__(self, attrs=None, list_errors=None, read_errors=None):
        self.attrs = {str(p): dict(v) for p, v in (attrs or {}).items()}
        self.list_errors = {str(p): e for p, e in (list_errors or {}).items()}
        self.read_errors = {str(p): e for p, e in (read_errors or {}).items()}
        self.listed: list[Path] = []

    def list(self, path: Path) -> list[str]:
        self.listed.append(Path(path))
        if str(path) in self.list_errors:
            raise self.list_errors[str(path)]
        return list(self.attrs.get(str(path), {}))

    def read(self, path: Path, name: str) -> bytes:
        if str(path) in self.read_errors:
            raise self.read_errors[str(path)]
        try:
            return self.attrs[str(path)][name]
        except KeyError:
            raise OSError(61, "Attribute not found", str(path))


class FakeDisassembler:
    """Returns canned resource type lists, or raises ProbeError for listed paths."""

    def __init__(self, types=None, failures=None):
        self.types = {str(p): list(v) for p, v in (types or {}).items()}
        self.failures = {str(p) for p in (failures or ())}
        self.calls: list[Path] = []

    def resource_types(self, path: Path) -> list[str]:
        self.calls.append(Path(path))
        if str(path) in self.failures:
            raise ProbeError("DeRez exited with status 1")
        return sorted(set(self.types.get(str(path), [])))


class FakeContentProbe:
    """Answers classify(path) from a dict, defaulting to binary data."""

    def __init__(self, descriptions=None, default: str = "data", failures=None):
        self.descriptions = {str(p): d for p, d in (descriptions or {}).items()}
        self.default = default
        self.failures = {str(p) for p in (failures or ())}

    def classify(self, path: Path) -> str:
        if str(path) in self.failures:
            raise ProbeError("file exited with status 1")
        return self.descriptions.get(str(path), self.default)


class FakeTypeLookup:
    """Answers type_code(path) from a dict keyed by file name."""

    def __init__(self, codes=None):
        self.codes = dict(codes or {})

    def type_code(self, path: Path) -> str:
        if Path(path).name not in self.codes:
            raise ProbeError("GetFileInfo exited with status 1")
        return self.codes[Path(path).name]
