"""
Resource fork inspection.

Results are keyed by extension rather than by file: what an operator needs
to know is which kinds of file need a resource-fork-aware copy tool.
"""

from .basename import strict_extension
from .config import RESOURCE_FORK_XATTR
from .models import Findings, ResourceForkReport, ScanEntry
from .probes import ProbeError


def inspect_resource_fork(
    entry: ScanEntry,
    reader,
    disassembler,
    report: ResourceForkReport,
) -> Findings:
    """
    Examine the resource fork of one file and fold it into the report.

    Args:
        entry: The file being scanned; it must carry a resource fork attribute.
        reader: Attribute reader used to fetch the raw fork.
        disassembler: Object whose resource_types(path) lists type codes.
        report: Run-wide histogram, updated in place.

    Returns:
        Findings for this entry. Fetch and disassembly failures are reported
        as errors and never raised.
    """
    findings = Findings()

    rsrc = None
    try:
        rsrc = reader.read(entry.path, RESOURCE_FORK_XATTR)
    except OSError as e:
        findings.error(f"Could not read resource fork: {e}")

    try:
        resource_types = disassembler.resource_types(entry.path)
    except ProbeError as e:
        findings.error(f"Could not list resource types: {e}")
        resource_types = []

    if not resource_types:
        # Fork present but holds nothing DeRez recognizes
        return findings

    report.record(strict_extension(entry.name), resource_types)
    findings.info(f"Resource types: {', '.join(resource_types)}")

    if rsrc and entry.size == 0:
        findings.warn(f"Data fork is empty; resource fork may contain all data ({len(rsrc)} bytes).")

    return findings
