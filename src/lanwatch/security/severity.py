"""Finding severity with ordering support.

CRITICAL > HIGH > MEDIUM > LOW > INFO. Uses an internal numeric rank for
comparison; ``.value`` is always the lowercase string used in reports.
"""

from __future__ import annotations

import enum
import functools


@functools.total_ordering
class Severity(enum.Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INFO = "info"

    @property
    def _rank(self) -> int:
        return _SEVERITY_RANK[self]

    @property
    def risk_weight(self) -> int:
        """Contribution of one finding to the network risk total."""
        return _RISK_WEIGHT[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self._rank < other._rank

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self._rank == other._rank

    def __hash__(self) -> int:
        return hash(self.value)


_SEVERITY_RANK: dict[Severity, int] = {
    Severity.INFO: 0,
    Severity.LOW: 1,
    Severity.MEDIUM: 2,
    Severity.HIGH: 3,
    Severity.CRITICAL: 4,
}

_RISK_WEIGHT: dict[Severity, int] = {
    Severity.INFO: 0,
    Severity.LOW: 1,
    Severity.MEDIUM: 2,
    Severity.HIGH: 5,
    Severity.CRITICAL: 10,
}
