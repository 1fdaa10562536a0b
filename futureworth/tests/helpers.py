from __future__ import annotations

from datetime import date
from math import isclose
from typing import Sequence

from futureworth.schemas.common import LedgerEntry

START = date(2025, 1, 1)


def assert_ledger_continuity(ledger: Sequence[LedgerEntry]) -> None:
    """Adjacent entries chain, balances never go negative, periods count up from 1."""
    for index, entry in enumerate(ledger):
        assert entry.period == index + 1
        assert entry.ending_balance >= 0
        assert entry.beginning_balance >= 0
    for current, following in zip(ledger, ledger[1:]):
        assert current.ending_balance == following.beginning_balance
        assert following.date > current.date


def assert_close(actual: float, expected: float, tol: float = 1e-6) -> None:
    assert isclose(actual, expected, rel_tol=1e-9, abs_tol=tol), f"{actual} != {expected}"
