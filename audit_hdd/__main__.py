#!/usr/bin/env python3
"""
Legacy Mac Filesystem Audit - CLI Entry Point
=============================================

Usage:
    python -m audit_hdd /Volumes/Old\ HD
    python -m audit_hdd --stripResourceForks --stripResourceSkip=crw,jpg /Volumes/Old\ HD
    python -m audit_hdd --debug --allowTextMissingExtension

Exit status is 0 whenever the walk completes, whatever was found; 1 if the
scan could not start.
"""

import argparse
import sys
from pathlib import Path

from .attributes import default_attribute_reader
from .config import ScanOptions, parse_extension_list
from .models import ScanStartupError
from .progress import StatusLine
from .scanner import scan_tree
from .utils import console, print_error, print_summary, print_warning


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="audit-hdd",
        description="Audit a directory tree for legacy Mac filesystem hazards before migrating it",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("root", nargs="?", type=Path, default=None,
                        help="Directory to scan (default: current directory)")
    parser.add_argument("--debug", action="store_true",
                        help="Output extra debugging info")
    parser.add_argument("--stripResourceForks", action="store_true",
                        help="Make a data-only copy of files with resource forks for manual analysis")
    parser.add_argument("--stripResourceSkip", type=str, default="", metavar="EXTS",
                        help="Comma-separated list of file extensions to exclude from manual analysis, e.g. 'crw,jpg'")
    parser.add_argument("--warnOnCreationTimes", action="store_true",
                        help="Print warnings on files with creation times that vary from modification times by more than 1 day")
    parser.add_argument("--allowTextMissingExtension", action="store_true",
                        help="Allow plain text files without file extension")
    return parser


def options_from_args(args: argparse.Namespace) -> ScanOptions:
    return ScanOptions(
        debug=args.debug,
        strip_resource_forks=args.stripResourceForks,
        strip_skip=parse_extension_list(args.stripResourceSkip) if args.stripResourceForks else frozenset(),
        warn_on_creation_times=args.warnOnCreationTimes,
        allow_text_missing_extension=args.allowTextMissingExtension,
    )


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    root = (args.root or Path.cwd()).resolve()
    options = options_from_args(args)

    console.print(f"Scanning {root}", markup=False, highlight=False)

    reader = default_attribute_reader()
    if not reader.supported:
        print_warning(f"Extended attributes are not available on {sys.platform}; attribute checks are disabled.")

    try:
        with StatusLine() as status:
            result = scan_tree(root, options, reader=reader, status=status)
    except ScanStartupError as e:
        print_error(str(e))
        return 1
    except KeyboardInterrupt:
        print("\n[ABORT] Scan cancelled by user")
        return 130

    print_summary(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
