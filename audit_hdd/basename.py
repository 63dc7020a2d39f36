"""
File and folder name checks.
"""

import re
from pathlib import Path

from .config import (
    ALLOWED_NAMES_WITHOUT_EXTENSION,
    ILLEGAL_NAME_CHARS,
    ILLEGAL_TRAILING_CHARS,
    VALID_EXTENSION,
)
from .models import FILE, Findings
from .probes import ProbeError

PLAIN_TEXT = re.compile(r"\b((ASCII|Unicode|ISO-8859) text|very short file)\b")


def strict_extension(name: str) -> str:
    """
    Return the lower-cased extension if it looks like a real one, else "".

    The extension is everything from the last period on, so ".bashrc" counts
    while "notes.txt." and "Read Me" do not.
    """
    idx = name.rfind(".")
    if idx < 0:
        return ""
    ext = name[idx:].lower()
    return ext if VALID_EXTENSION.match(ext) else ""


def is_plain_text(path: Path, probe) -> bool:
    """True if the content probe calls the file empty or plain text."""
    description = probe.classify(path)
    if description == "empty":
        return True
    return PLAIN_TEXT.search(description) is not None


def check_basename(
    path: Path,
    kind: str,
    allowed_names=ALLOWED_NAMES_WITHOUT_EXTENSION,
    text_probe=None,
) -> Findings:
    """
    Check a name for characters that old and new filesystems disagree on.

    Args:
        path: Path of the entry; only its final component is inspected, except
            when the plain-text fallback needs to look at the content.
        kind: Entry kind; the extension check only applies to regular files.
        allowed_names: Exact names accepted without an extension.
        text_probe: Content probe used to accept extensionless text files.
            None disables the fallback.
    """
    findings = Findings()
    name = path.name

    for char in ILLEGAL_NAME_CHARS:
        if char in name:
            findings.warn(f"Name contains illegal character '{char}'.")

    if name and name[-1] in ILLEGAL_TRAILING_CHARS:
        findings.warn(f"Name ends with illegal character '{name[-1]}'.")

    if kind != FILE or strict_extension(name):
        return findings

    if name in allowed_names:
        return findings

    if text_probe is not None:
        try:
            if is_plain_text(path, text_probe):
                return findings
        except ProbeError as e:
            findings.error(f"Content probe failed: {e}")

    findings.warn("Missing file extension.")
    return findings
