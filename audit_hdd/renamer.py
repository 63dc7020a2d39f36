"""
One-shot rename helpers for preparing an old Mac hierarchy for migration.

- add extensions to extensionless files based on their classic file type
- prefix files with their modification date
- prefix folders with the earliest modification date of their contents

Each helper supports a dry run that only prints what would happen.
"""

import argparse
import os
import re
import sys
from datetime import datetime
from pathlib import Path

from .probes import GetFileInfoTypeLookup, ProbeError
from .utils import console, err_console, print_error

# Classic Mac OS file type -> extension
KNOWN_TYPE_EXTENSIONS = {
    "AIFF": ".aif",
    "Sd2f": ".sd2",
}

DATED_NAME = re.compile(r"^\d{4}-\d{2}-\d{2} ")


def _say(msg: str, out=None):
    (out or console).print(msg, markup=False, highlight=False)


def _rename(src: Path, dst: Path, dry_run: bool) -> None:
    if not dry_run:
        os.rename(src, dst)


def find_extensionless_files(root: Path) -> list[Path]:
    """Regular files under root whose name has no extension at all; hidden entries are skipped."""
    found = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if not d.startswith("."))
        for name in sorted(filenames):
            if name.startswith("."):
                continue
            path = Path(dirpath) / name
            if os.path.splitext(name)[1] == "" and path.is_file():
                found.append(path)
    return found


def add_extensions(
    root: Path,
    lookup=None,
    dry_run: bool = True,
    known: dict = KNOWN_TYPE_EXTENSIONS,
    out=None,
    err=None,
) -> dict:
    """
    Rename extensionless files whose legacy type code maps to a known extension.

    Returns:
        Report dict with renamed paths, unknown type codes and failures.
    """
    lookup = lookup or GetFileInfoTypeLookup()
    report = {"renamed": [], "unknown": [], "failed": []}

    for path in find_extensionless_files(root):
        try:
            type_code = lookup.type_code(path)
        except ProbeError as e:
            print_error(f"{path}: {e}", err)
            report["failed"].append(str(path))
            continue

        ext = known.get(type_code)
        if not ext:
            _say(f'Don\'t know what extension to use for "{type_code}" file type.', err or err_console)
            report["unknown"].append(type_code)
            continue

        new_path = path.with_name(path.name + ext)
        if new_path.exists():
            print_error(f'Destination "{new_path}" already exists.', err)
            report["failed"].append(str(path))
            continue

        _say(f'Renaming "{path}" to "{new_path}".', out)
        try:
            _rename(path, new_path, dry_run)
        except OSError as e:
            print_error(f"{path}: {e}", err)
            report["failed"].append(str(path))
            continue
        report["renamed"].append(str(new_path))

    return report


def date_prefixed_name(name: str, when: datetime) -> str:
    return f"{when.strftime('%Y-%m-%d')} {name}"


def date_files(paths, dry_run: bool = True, out=None) -> dict:
    """Prefix each file name with its modification date (YYYY-MM-DD)."""
    report = {"renamed": [], "skipped": [], "failed": []}

    for path in paths:
        path = Path(path).absolute()
        name = path.name
        if DATED_NAME.match(name):
            _say(f'[INFO] File "{name}" already appears to be dated; skipping.', out)
            report["skipped"].append(str(path))
            continue

        try:
            mtime = datetime.fromtimestamp(path.stat().st_mtime)
        except OSError as e:
            _say(f"[ERROR] {e}", out)
            report["failed"].append(str(path))
            continue

        new_path = path.with_name(date_prefixed_name(name, mtime))
        if new_path.exists():
            _say(f'[ERROR] Destination "{new_path}" already exists.', out)
            report["failed"].append(str(path))
            continue

        _say(f'Renaming "{name}" to "{new_path.name}".', out)
        try:
            _rename(path, new_path, dry_run)
        except OSError as e:
            _say(f"[ERROR] {e}", out)
            report["failed"].append(str(path))
            continue
        report["renamed"].append(str(new_path))

    return report


def _visible_children(folder: Path) -> list[Path]:
    return [p for p in folder.iterdir() if not p.name.startswith(".")]


def date_folders(root: Path, dry_run: bool = True, out=None) -> dict:
    """
    Prefix each direct subfolder with the earliest modification date inside it.

    Folders that are already dated or start with "~" are left alone; empty
    folders are skipped.
    """
    report = {"renamed": [], "skipped": [], "failed": []}

    folders = sorted(
        p for p in _visible_children(root)
        if p.is_dir() and not DATED_NAME.match(p.name) and not p.name.startswith("~")
    )

    for folder in folders:
        mtimes = sorted(child.stat().st_mtime for child in _visible_children(folder))
        if not mtimes:
            _say(f"No created time found for {folder}! Skipping.", out)
            report["skipped"].append(str(folder))
            continue

        new_path = folder.with_name(date_prefixed_name(folder.name, datetime.fromtimestamp(mtimes[0])))
        if new_path.exists():
            _say(f'[ERROR] Destination "{new_path}" already exists.', out)
            report["failed"].append(str(folder))
            continue

        _say(f'Renaming "{folder.name}" to "{new_path.name}".', out)
        _rename(folder, new_path, dry_run)
        report["renamed"].append(str(new_path))

    return report


# =============================================================================
# Entry points
# =============================================================================

def _base_parser(description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--dry-run", action="store_true",
                        help="Print the actions to be taken without performing them")
    return parser


def add_extensions_main(argv=None) -> int:
    parser = _base_parser("Add file extensions to older Mac files based on their file type")
    parser.add_argument("path", nargs="?", type=Path, default=Path.cwd(),
                        help="Directory to scan (default: current directory)")
    args = parser.parse_args(argv)

    root = args.path.resolve()
    _say(f"Scanning {root} for files without extensions...")
    add_extensions(root, dry_run=args.dry_run)
    _say("Done.")
    return 0


def date_files_main(argv=None) -> int:
    parser = _base_parser("Rename files based on their modification dates")
    parser.add_argument("paths", nargs="+", type=Path, help="Files to rename")
    args = parser.parse_args(argv)

    _say(f"Renaming {len(args.paths)} files...")
    if args.dry_run:
        _say("DRY RUN, no renaming will take place")
    date_files(args.paths, dry_run=args.dry_run)
    _say("Done.")
    return 0


def date_folders_main(argv=None) -> int:
    parser = _base_parser("Rename folders based on modification dates of files within")
    parser.add_argument("path", nargs="?", type=Path, default=Path.cwd(),
                        help="Directory whose subfolders are renamed (default: current directory)")
    args = parser.parse_args(argv)

    root = args.path.resolve()
    _say(f"Scanning {root} for folders without dates...")
    date_folders(root, dry_run=args.dry_run)
    _say("Done.")
    return 0


if __name__ == "__main__":
    sys.exit(add_extensions_main())
