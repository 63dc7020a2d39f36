"""
Directory walking and per-entry classification.

The walk is single-threaded: each entry is fully classified (including any
external tool calls) before the next one is visited, and only the walker
touches the run-wide aggregates.
"""

import os
import stat
from pathlib import Path

from .attributes import default_attribute_reader, filter_attributes
from .basename import check_basename, strict_extension
from .config import (
    CREATION_TIME_THRESHOLD_SECONDS,
    DEFAULT_RULES,
    RESOURCE_FORK_XATTR,
    ScanOptions,
    ScanRules,
)
from .models import (
    ExtensionCatalog,
    Findings,
    ResourceForkReport,
    ScanEntry,
    ScanResult,
    ScanStartupError,
    ScanSummary,
    StripConfig,
)
from .probes import DeRezDisassembler, FileCommandProbe
from .progress import StatusLine
from .resource_fork import inspect_resource_fork
from .stripper import copy_stripped_file, create_strip_dir
from .utils import debug_msg, print_entry, print_scan_error


def is_ignored_file(name: str, rules: ScanRules = DEFAULT_RULES) -> bool:
    return name in rules.ignored_files


def is_ignored_path(path: Path, rules: ScanRules = DEFAULT_RULES) -> bool:
    """True if any component of the path is an ignored directory name."""
    return any(part in rules.ignored_path_components for part in Path(path).parts)


def _list_dir(path: Path) -> list[str]:
    with os.scandir(path) as it:
        return sorted(entry.name for entry in it)


def _walk_children(dirpath: Path, names: list[str], rules: ScanRules):
    for name in names:
        # Ignored directories are not descended into
        if name in rules.ignored_path_components:
            continue

        path = dirpath / name
        try:
            st = os.lstat(path)
        except OSError as e:
            yield path, None, e
            continue

        if not stat.S_ISDIR(st.st_mode):
            yield path, st, None
            continue

        # A directory that cannot be listed is reported once, as an error
        try:
            children = _list_dir(path)
        except OSError as e:
            yield path, None, e
            continue

        yield path, st, None
        yield from _walk_children(path, children, rules)


def walk_tree(root: Path, rules: ScanRules = DEFAULT_RULES):
    """
    Walk a tree in pre-order: each directory, then its entries in name order,
    descending into a subdirectory before moving on to the next sibling.

    Yields:
        (path, stat_result, None) for every node that could be stat'ed (and,
        for directories, listed), or (path, None, OSError) for nodes that
        could not. Subtrees under ignored directory names are never entered.

    Raises:
        ScanStartupError: If the root itself cannot be stat'ed or listed.
    """
    root = Path(root)
    try:
        root_st = os.stat(root)
    except OSError as e:
        raise ScanStartupError(f"Cannot access scan root {root}: {e}")

    if not stat.S_ISDIR(root_st.st_mode):
        yield root, root_st, None
        return

    try:
        names = _list_dir(root)
    except OSError as e:
        raise ScanStartupError(f"Cannot read scan root {root}: {e}")

    yield root, root_st, None
    if is_ignored_path(root, rules):
        return
    yield from _walk_children(root, names, rules)


def check_creation_time(entry: ScanEntry) -> Findings:
    """Warn when a file was modified long after it was created."""
    findings = Findings()
    if entry.created is None:
        return findings
    if entry.modified - entry.created > CREATION_TIME_THRESHOLD_SECONDS:
        findings.warn(f"Significant creation time: {entry.created_at} vs. {entry.modified_at}")
    return findings


def classify_entry(
    entry: ScanEntry,
    options: ScanOptions,
    reader,
    disassembler,
    fork_report: ResourceForkReport,
    rules: ScanRules = DEFAULT_RULES,
    text_probe=None,
    strip: StripConfig | None = None,
) -> tuple[Findings, int]:
    """
    Run every configured check on one file or directory.

    Returns:
        (findings, number of stripped copies written).
    """
    findings = check_basename(
        entry.path,
        entry.kind,
        allowed_names=rules.allowed_names,
        text_probe=text_probe if options.allow_text_missing_extension else None,
    )

    try:
        attrs = filter_attributes(reader.list(entry.path), rules.ignored_xattrs)
    except OSError as e:
        findings.error(f"Could not list extended attributes: {e}")
        attrs = []

    if attrs:
        findings.info(f"xattrs: {', '.join(attrs)}")

    copied = 0
    if entry.is_file and RESOURCE_FORK_XATTR in attrs:
        findings.extend(inspect_resource_fork(entry, reader, disassembler, fork_report))

        if strip is not None:
            copied, strip_findings = copy_stripped_file(entry, attrs, reader, strip)
            findings.extend(strip_findings)

    if options.warn_on_creation_times:
        findings.extend(check_creation_time(entry))

    return findings, copied


def scan_tree(
    root: Path,
    options: ScanOptions = ScanOptions(),
    rules: ScanRules = DEFAULT_RULES,
    reader=None,
    disassembler=None,
    text_probe=None,
    strip: StripConfig | None = None,
    status: StatusLine | None = None,
    out=None,
    err=None,
) -> ScanResult:
    """
    Audit a directory tree and print findings as they are found.

    Args:
        root: Directory (or single file) to scan.
        options: Run switches from the command line.
        rules: Static ignore and allow lists.
        reader: Extended attribute reader; platform default if None.
        disassembler: Resource type lister; DeRez if None.
        text_probe: Content probe for the plain-text fallback; ``file`` if None.
        strip: Where to write data-only copies. Created automatically when
            options.strip_resource_forks is set and none is given.
        status: Status line; a silent one if None.
        out, err: Consoles for findings and diagnostics.

    Returns:
        ScanResult with the final summary and aggregate reports.

    Raises:
        ScanStartupError: If the root or the strip directory is unusable.
    """
    root = Path(root).absolute()
    if not root.exists():
        raise ScanStartupError(f"Root directory not found: {root}\nIs the drive connected?")

    reader = reader or default_attribute_reader()
    disassembler = disassembler or DeRezDisassembler()
    if options.allow_text_missing_extension and text_probe is None:
        text_probe = FileCommandProbe()
    if options.strip_resource_forks and strip is None:
        strip = StripConfig(create_strip_dir(options.strip_parent), options.strip_skip)
    status = status or StatusLine(enabled=False)

    if options.debug:
        debug_msg(f"Scanning {root}", err)
        if strip is not None:
            debug_msg(f"Copying data forks to {strip.destination} for analysis", err)
            if strip.skip_extensions:
                debug_msg(f"Ignoring extensions: {', '.join(sorted(strip.skip_extensions))}", err)

    fork_report = ResourceForkReport()
    extensions = ExtensionCatalog()
    directories = files = errors = stripped = 0
    raw_scanned = 0

    for path, st, error in walk_tree(root, rules):
        if options.debug:
            debug_msg(f"Scanning {path}", err)
        raw_scanned += 1

        # Ignore checks come first so nothing is reported for skipped entries
        if is_ignored_file(path.name, rules):
            status.update(f"{raw_scanned}: (ignored file)")
            continue
        if is_ignored_path(path, rules):
            status.update(f"{raw_scanned}: (ignored path)")
            continue

        if error is not None:
            errors += 1
            status.clear()
            print_scan_error(path, error, out)
            continue

        entry = ScanEntry.from_stat(path, st)
        if not (entry.is_file or entry.is_dir):
            continue

        status.update(f"{raw_scanned}: {path}")

        if entry.is_file:
            files += 1
            extensions.add(strict_extension(entry.name))
        else:
            directories += 1

        findings, copied = classify_entry(
            entry,
            options,
            reader,
            disassembler,
            fork_report,
            rules=rules,
            text_probe=text_probe,
            strip=strip,
        )
        stripped += copied

        if findings.has_problems() or (options.debug and findings):
            status.clear()
        print_entry(path, findings, debug=options.debug, out=out, err=err)

    status.clear()

    summary = ScanSummary(directories=directories, files=files, errors=errors, stripped=stripped)
    return ScanResult(
        root=root,
        summary=summary,
        resource_forks=fork_report,
        extensions=extensions,
        strip=strip,
    )
