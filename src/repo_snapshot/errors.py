"""Exceptions raised by the scan engine.

Only configuration problems abort a scan.  Everything that goes wrong
while walking or reading individual files degrades to "this file
contributes nothing" and never surfaces here.
"""

from __future__ import annotations


class ScanError(RuntimeError):
    """Base class for errors that prevent a scan from producing a report."""


class ConfigError(ScanError):
    """Raised when the scan configuration cannot be resolved."""

    def __init__(self, message: str, *, option: str | None = None) -> None:
        self.option = option
        if option:
            message = f"{option}: {message}"
        super().__init__(message)
