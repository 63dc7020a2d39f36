"""
Static rules and run options for the legacy filesystem audit.

Everything in this module is built once at import time and shared by reference;
nothing here is mutated while a scan runs.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path

# -----------------------------------------------------------------------------
# Ignore lists
# -----------------------------------------------------------------------------

IGNORED_FILES = frozenset({
    ".DS_Store",
    # GarageBand
    "PkgInfo",
    "projectData",
    # Logic
    "displayState",
    "documentData",
    # Custom folder icon, name ends in a carriage return
    "Icon\r",
})

IGNORED_PATH_COMPONENTS = frozenset({
    ".git",
    ".svn",
    ".fseventsd",
    ".Trashes",
    ".Spotlight-V100",
})

IGNORED_XATTRS = frozenset({
    "com.apple.FinderInfo",
    "com.apple.Preview.UIstate.v1",
    "com.apple.TextEncoding",
    "com.apple.diskimages.recentcksum",
    "com.apple.metadata:_kTimeMachineNewestSnapshot",
    "com.apple.metadata:_kTimeMachineOldestSnapshot",
    "com.apple.metadata:com_apple_backup_excludeItem",
    "com.apple.metadata:kMDItemFinderComment",
    "com.apple.metadata:kMDItemIsScreenCapture",
    "com.apple.metadata:kMDItemScreenCaptureType",
    "com.apple.metadata:kMDItemWhereFroms",
    "com.apple.quarantine",
    "com.dropbox.attributes",
    "com.dropbox.attrs",
    "com.macromates.bookmarked_lines",
    "com.macromates.caret",
})

# Names that are conventionally shipped without an extension
ALLOWED_NAMES_WITHOUT_EXTENSION = frozenset({
    "Capfile",
    "Gemfile",
    "Rakefile",
    "Procfile",
    "CHANGELOG",
    "LICENCE",
    "LICENSE",
    "MIT-LICENSE",
    "README",
    "TODO",
    "VERSION",
    "INSTALL",
    "crontab",
    "Desktop DB",
    "Desktop DF",
    # DVD Studio Pro projects
    "ModuleDataB",
    "ObjectDataB",
})

# -----------------------------------------------------------------------------
# Name checks
# -----------------------------------------------------------------------------

ILLEGAL_NAME_CHARS = (":", "/", "\\")
ILLEGAL_TRAILING_CHARS = (".", " ")

# The pi sign shows up in old RealBasic and GoLive extensions
VALID_EXTENSION = re.compile(r"^\.[a-z0-9π\-]+$")

NO_EXTENSION = "(no extension)"

# -----------------------------------------------------------------------------
# Resource forks
# -----------------------------------------------------------------------------

RESOURCE_FORK_XATTR = "com.apple.ResourceFork"

RESOURCE_FORK_REQUIRED = "[WARNING] unreadable without resource fork"
RESOURCE_FORK_OLD = "[WARNING] old files may require resource fork"

RESOURCE_FORK_RISKS = {
    ".disc": RESOURCE_FORK_REQUIRED,
    ".mov": RESOURCE_FORK_OLD,
    ".psd": RESOURCE_FORK_OLD,
    ".sd2": RESOURCE_FORK_REQUIRED,
    ".sd2f": RESOURCE_FORK_REQUIRED,
    ".textclipping": RESOURCE_FORK_REQUIRED,
}

CREATION_TIME_THRESHOLD_SECONDS = 24 * 60 * 60


@dataclass(frozen=True)
class ScanRules:
    """Bundle of the static lists, handed to every classifier."""
    ignored_files: frozenset = IGNORED_FILES
    ignored_path_components: frozenset = IGNORED_PATH_COMPONENTS
    ignored_xattrs: frozenset = IGNORED_XATTRS
    allowed_names: frozenset = ALLOWED_NAMES_WITHOUT_EXTENSION


DEFAULT_RULES = ScanRules()


@dataclass(frozen=True)
class ScanOptions:
    """Per-run switches, filled in from the command line."""
    debug: bool = False
    strip_resource_forks: bool = False
    strip_skip: frozenset = field(default_factory=frozenset)
    warn_on_creation_times: bool = False
    allow_text_missing_extension: bool = False
    strip_parent: Path | None = None


def parse_extension_list(raw: str | None) -> frozenset:
    """
    Normalize a comma-separated extension list.

    "PNG, .jpg,,crw" -> {".png", ".jpg", ".crw"}
    """
    if not raw:
        return frozenset()

    exts = set()
    for ext in raw.split(","):
        ext = ext.strip().lower()
        if not ext:
            continue
        if not ext.startswith("."):
            ext = "." + ext
        exts.add(ext)
    return frozenset(exts)
