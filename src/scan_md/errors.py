"""
scan_md/errors.py - Error kinds raised while scanning.

Fatal errors (InvalidConfiguration, DiscoveryFailure) abort the scan and reach
the caller. Per-file errors (FileReadFailure, ParseFailure) are logged by the
orchestrator and the offending file is left out of the result.
"""


class ScanError(Exception):
    """Base class for every error raised by scan_md."""


class InvalidConfiguration(ScanError, ValueError):
    """Depth, mode, format or settings values are not acceptable."""


class DiscoveryFailure(ScanError):
    """The root directory cannot be enumerated."""


class FileReadFailure(ScanError):
    """A discovered document could not be read as UTF-8 text."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"cannot read {path}: {reason}")
        self.path = path


class ParseFailure(ScanError):
    """A document's front matter block is not valid YAML mapping data."""
