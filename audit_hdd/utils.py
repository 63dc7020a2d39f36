"""
Console output for the legacy filesystem audit.

Includes:
- Shared stdout/stderr consoles and tagged message helpers
- Per-entry finding output
- End-of-run summary
"""

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from .config import RESOURCE_FORK_RISKS
from .models import Findings, ScanResult

# Findings go to stdout, diagnostics to stderr
console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)


def _plain(out: Console, text: str) -> None:
    """Print text verbatim; file names may contain square brackets."""
    out.print(text, markup=False, highlight=False, emoji=False)


def print_error(msg: str, out: Console = None):
    (out or err_console).print(f"[bold red]ERROR:[/bold red] {escape(msg)}", highlight=False)


def print_warning(msg: str, out: Console = None):
    (out or err_console).print(f"[bold yellow]WARNING:[/bold yellow] {escape(msg)}", highlight=False)


def debug_msg(msg: str, out: Console = None):
    _plain(out or err_console, msg)


def print_findings(findings, out: Console = None):
    """Print findings as indented ``[LEVEL] message`` lines."""
    out = out or console
    for finding in findings:
        _plain(out, f"    [{finding.severity.upper()}] {finding.message}")


def print_entry(path: Path, findings: Findings, debug: bool = False, out: Console = None, err: Console = None) -> bool:
    """
    Report one scanned entry.

    Entries with warnings or errors are always printed (errors first, then
    warnings, then info). Entries with only info are printed to the
    diagnostic stream in debug mode.

    Returns:
        True if anything was printed.
    """
    out = out or console
    err = err or err_console

    if findings.has_problems():
        _plain(out, str(path))
        print_findings(findings.ordered(), out)
        return True

    if debug and findings:
        _plain(err, str(path))
        print_findings(findings.ordered(), err)
        return True

    return False


def print_scan_error(path: Path, error: OSError, out: Console = None):
    out = out or console
    _plain(out, str(path))
    _plain(out, f"    [ERROR] {error}")


def print_resource_fork_table(result: ScanResult, out: Console = None):
    """Print the extension -> resource types histogram."""
    out = out or console
    table = Table(title="Types with resource forks (lowercased)", title_justify="left")
    table.add_column("Extension", style="cyan", no_wrap=True)
    table.add_column("Files", style="magenta", justify="right")
    table.add_column("Resource types")
    table.add_column("Risk", style="yellow")

    for ext, count, types in result.resource_forks.rows():
        quoted = ", ".join(f"'{t}'" for t in types)
        table.add_row(Text(ext), Text(str(count)), Text(quoted), Text(RESOURCE_FORK_RISKS.get(ext, "")))

    out.print(table)


def print_summary(result: ScanResult, out: Console = None):
    """Print the end-of-run counters and aggregate reports."""
    out = out or console
    summary = result.summary

    _plain(out, f"\nScanned {summary.directories} directories and {summary.files} files. {summary.errors} scan errors.")

    if result.resource_forks:
        out.print()
        print_resource_fork_table(result, out)

    if result.strip is not None:
        _plain(out, f"\nStripped resource forks from {summary.stripped} files in {result.strip.destination} for analysis.")

    if result.extensions:
        _plain(out, "\nFile extensions encountered (lowercased):")
        _plain(out, " ".join(result.extensions.sorted()).strip())
