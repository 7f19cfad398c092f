"""Exception hierarchy for lanwatch.

Connectivity problems (refused, filtered, unreachable) are never raised;
they are folded into result values. Only caller mistakes and
orchestration-level problems surface as exceptions.
"""

from __future__ import annotations


class LanwatchError(Exception):
    """Base class for all lanwatch errors."""


class ConfigurationError(LanwatchError, ValueError):
    """Invalid scan input, rejected before any network activity begins.

    Examples: a malformed subnet prefix, an empty port set, a port
    outside 1-65535 or a non-positive timeout.
    """


class StorageError(LanwatchError):
    """A persisted blob could not be read back."""


class ScanInProgressError(LanwatchError):
    """A scan was requested while another scan is still running."""
