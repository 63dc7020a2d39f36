"""
Data models for a single audit run.

Per-entry objects (ScanEntry, Findings) live only while one filesystem node
is being classified. The aggregates (ResourceForkReport, ExtensionCatalog)
are owned by the walker for the whole run, and ScanSummary is frozen once the
walk completes.
"""

import stat
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from .config import NO_EXTENSION

INFO = "info"
WARN = "warn"
ERROR = "error"

SEVERITIES = (ERROR, WARN, INFO)  # display order

FILE = "file"
DIRECTORY = "dir"
OTHER = "other"


@dataclass(frozen=True)
class Finding:
    severity: str
    message: str


class Findings:
    """Ordered list of tagged findings for one entry."""

    def __init__(self):
        self._items: list[Finding] = []

    def add(self, severity: str, message: str) -> None:
        if severity not in SEVERITIES:
            raise ValueError(f"Unknown severity: {severity}")
        self._items.append(Finding(severity, message))

    def info(self, message: str) -> None:
        self.add(INFO, message)

    def warn(self, message: str) -> None:
        self.add(WARN, message)

    def error(self, message: str) -> None:
        self.add(ERROR, message)

    def extend(self, other: "Findings") -> None:
        self._items.extend(other)

    def of(self, severity: str) -> list[str]:
        """Messages with the given severity, in the order they were added."""
        return [f.message for f in self._items if f.severity == severity]

    def has_problems(self) -> bool:
        return any(f.severity in (WARN, ERROR) for f in self._items)

    def ordered(self) -> list[Finding]:
        """Errors first, then warnings, then info; stable within a severity."""
        return [f for sev in SEVERITIES for f in self._items if f.severity == sev]

    def __iter__(self):
        return iter(self._items)

    def __len__(self):
        return len(self._items)

    def __bool__(self):
        return bool(self._items)


@dataclass(frozen=True)
class ScanEntry:
    path: Path
    kind: str
    size: int
    modified: float
    created: float | None = None

    @classmethod
    def from_stat(cls, path: Path, st) -> "ScanEntry":
        if stat.S_ISREG(st.st_mode):
            kind = FILE
        elif stat.S_ISDIR(st.st_mode):
            kind = DIRECTORY
        else:
            kind = OTHER
        # st_birthtime only exists where the filesystem records a real creation time
        created = getattr(st, "st_birthtime", None)
        return cls(path=path, kind=kind, size=st.st_size, modified=st.st_mtime, created=created)

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def is_file(self) -> bool:
        return self.kind == FILE

    @property
    def is_dir(self) -> bool:
        return self.kind == DIRECTORY

    @property
    def modified_at(self) -> datetime:
        return datetime.fromtimestamp(self.modified)

    @property
    def created_at(self) -> datetime | None:
        if self.created is None:
            return None
        return datetime.fromtimestamp(self.created)


class ResourceForkReport:
    """
    Histogram of resource-fork-bearing files by normalized extension.

    Each extension maps to the number of files seen and the distinct resource
    type codes found in their forks.
    """

    def __init__(self):
        self._counts: dict[str, int] = {}
        self._types: dict[str, set[str]] = {}

    def record(self, ext: str, resource_types) -> None:
        key = ext or NO_EXTENSION
        self._counts[key] = self._counts.get(key, 0) + 1
        self._types.setdefault(key, set()).update(resource_types)

    def count(self, ext: str) -> int:
        return self._counts.get(ext or NO_EXTENSION, 0)

    def types(self, ext: str) -> list[str]:
        return sorted(self._types.get(ext or NO_EXTENSION, ()))

    def rows(self) -> list[tuple[str, int, list[str]]]:
        """(extension, count, sorted type codes), sorted by extension."""
        return [(ext, self._counts[ext], sorted(self._types[ext])) for ext in sorted(self._counts)]

    def __len__(self):
        return len(self._counts)

    def __bool__(self):
        return bool(self._counts)

    def __eq__(self, other):
        if not isinstance(other, ResourceForkReport):
            return NotImplemented
        return self.rows() == other.rows()


class ExtensionCatalog:
    """Distinct normalized extensions seen on regular files."""

    def __init__(self):
        self._exts: set[str] = set()

    def add(self, ext: str) -> None:
        self._exts.add(ext)

    def sorted(self) -> list[str]:
        return sorted(self._exts)

    def __contains__(self, ext):
        return ext in self._exts

    def __len__(self):
        return len(self._exts)

    def __bool__(self):
        return bool(self._exts)


@dataclass(frozen=True)
class ScanSummary:
    directories: int = 0
    files: int = 0
    errors: int = 0
    stripped: int = 0


@dataclass(frozen=True)
class StripConfig:
    """Where data-only copies go, and which extensions are never copied."""
    destination: Path
    skip_extensions: frozenset = field(default_factory=frozenset)


@dataclass
class ScanResult:
    root: Path
    summary: ScanSummary
    resource_forks: ResourceForkReport
    extensions: ExtensionCatalog
    strip: StripConfig | None = None


class ScanStartupError(RuntimeError):
    """The scan could not begin (missing root, unusable strip directory)."""
