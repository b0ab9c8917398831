# File: discover/classifier.py
"""discover.classifier: Decides which probe results are worth reporting."""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet

__all__ = ["COMMON_SUCCESS_CODES", "ClassificationPolicy", "should_report"]

#: Common success/redirect/auth codes that usually mean "something lives here".
COMMON_SUCCESS_CODES: FrozenSet[int] = frozenset({200, 204, 301, 302, 307, 401, 403})


@dataclass(frozen=True, slots=True)
class ClassificationPolicy:
    """Success and failure status-code sets, fixed for the whole run."""

    success_codes: FrozenSet[int] = frozenset()
    failure_codes: FrozenSet[int] = frozenset()


def should_report(status: int, policy: ClassificationPolicy) -> bool:
    """Return True if a completed probe with *status* must be reported.

    A non-empty failure set wins over the success set entirely: everything
    outside it is reported. Otherwise an empty success set reports every
    status, and a non-empty one reports only its members.
    """
    if policy.failure_codes:
        return status not in policy.failure_codes
    if not policy.success_codes:
        return True
    return status in policy.success_codes
