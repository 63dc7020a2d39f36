"""
Legacy Mac Filesystem Audit
===========================

A command-line tool that walks an old Macintosh file hierarchy and reports
what would be lost or broken by copying it to a modern filesystem: missing
extensions, illegal characters in names, extended attributes and resource
forks that most tools silently drop.
"""

__version__ = "1.0.0"

from .attributes import filter_attributes, default_attribute_reader
from .basename import check_basename, strict_extension
from .config import ScanOptions, ScanRules, DEFAULT_RULES, parse_extension_list
from .models import (
    Finding,
    Findings,
    ScanEntry,
    ResourceForkReport,
    ExtensionCatalog,
    ScanSummary,
    ScanResult,
    StripConfig,
    ScanStartupError,
)
from .resource_fork import inspect_resource_fork
from .scanner import scan_tree, walk_tree, classify_entry
from .stripper import copy_stripped_file, create_strip_dir

__all__ = [
    "filter_attributes",
    "default_attribute_reader",
    "check_basename",
    "strict_extension",
    "ScanOptions",
    "ScanRules",
    "DEFAULT_RULES",
    "parse_extension_list",
    "Finding",
    "Findings",
    "ScanEntry",
    "ResourceForkReport",
    "ExtensionCatalog",
    "ScanSummary",
    "ScanResult",
    "StripConfig",
    "ScanStartupError",
    "inspect_resource_fork",
    "scan_tree",
    "walk_tree",
    "classify_entry",
    "copy_stripped_file",
    "create_strip_dir",
]
