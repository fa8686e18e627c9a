"""Deduction policies applied to gross pay.

Only the slot and two plain policies live here; there are no tax tables.
"""
from __future__ import annotations

from typing import Protocol

from ..users.model import User


class DeductionPolicy(Protocol):
    def deductions_for(self, user: User, gross_pay: float) -> float:
        raise NotImplementedError


class NoDeductions:
    def deductions_for(self, user: User, gross_pay: float) -> float:
        return 0.0


class FlatRateDeductions:
    """Withhold a fixed fraction of gross pay, e.g. 0.2 for 20%."""

    def __init__(self, rate: float):
        rate = float(rate)
        if rate < 0 or rate >= 1:
            raise ValueError("Deduction rate must be in [0, 1)")
        self._rate = rate

    @property
    def rate(self) -> float:
        return self._rate

    def deductions_for(self, user: User, gross_pay: float) -> float:
        return gross_pay * self._rate


def deduction_policy_from_rate(rate: float) -> DeductionPolicy:
    if not rate:
        return NoDeductions()
    return FlatRateDeductions(rate)
