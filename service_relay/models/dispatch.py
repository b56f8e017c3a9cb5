"""Dispatch result dataclasses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class DispatchResult:
    """Success/failure tally over a batch of independent operations."""

    successful: int = 0
    failed: int = 0

    @property
    def total(self) -> int:
        return self.successful + self.failed

    @classmethod
    def from_outcomes(cls, outcomes: Iterable[bool]) -> DispatchResult:
        successful = failed = 0
        for ok in outcomes:
            if ok:
                successful += 1
            else:
                failed += 1
        return cls(successful=successful, failed=failed)

    def __add__(self, other: DispatchResult) -> DispatchResult:
        if not isinstance(other, DispatchResult):
            return NotImplemented
        return DispatchResult(
            successful=self.successful + other.successful,
            failed=self.failed + other.failed,
        )

    def as_dict(self) -> dict[str, int]:
        return {"successful": self.successful, "failed": self.failed}


@dataclass(frozen=True)
class WelcomeResult:
    email_sent: bool
    sms_sent: bool

    @property
    def any_sent(self) -> bool:
        return self.email_sent or self.sms_sent
