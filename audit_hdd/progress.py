"""
Single-line scan progress on stderr.

Purely cosmetic: every failure to size or draw the line is swallowed.
"""

import sys

from tqdm import tqdm


class StatusLine:
    """Overwrites one terminal line with the current scan position."""

    def __init__(self, file=None, enabled: bool | None = None):
        file = file or sys.stderr
        if enabled is None:
            enabled = hasattr(file, "isatty") and file.isatty()
        self._bar = None
        if enabled:
            self._bar = tqdm(
                file=file,
                bar_format="{desc}",
                dynamic_ncols=True,
                leave=False,
            )

    @property
    def enabled(self) -> bool:
        return self._bar is not None

    def update(self, msg: str) -> None:
        if self._bar is None:
            return
        try:
            width = self._bar.ncols or 80
            self._bar.set_description_str(msg[: max(width - 1, 0)], refresh=True)
        except (OSError, ValueError):
            pass

    def clear(self) -> None:
        """Blank the line so regular output starts on a clean row."""
        if self._bar is None:
            return
        try:
            self._bar.clear()
        except (OSError, ValueError):
            pass

    def close(self) -> None:
        if self._bar is None:
            return
        try:
            self._bar.close()
        except (OSError, ValueError):
            pass
        self._bar = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
