"""Credit ledger — the billing collaborator seen from the layout engine.

Only one operation matters here: take ``amount`` credits or refuse.
The auto-layout service deducts synchronously, before the generation
request is dispatched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol


log = logging.getLogger("kitchen_cad.credits")


class CreditLedger(Protocol):
    def deduct(self, amount: int) -> bool:
        ...


@dataclass
class InMemoryCreditLedger:
    """Process-local balance; used by the web server and tests."""

    balance: int = 0

    def deduct(self, amount: int) -> bool:
        if amount < 0:
            raise ValueError("amount must be >= 0")
        if self.balance < amount:
            log.info("Credit deduction refused: need %d, have %d", amount, self.balance)
            return False
        self.balance -= amount
        return True

    def top_up(self, amount: int) -> None:
        if amount < 0:
            raise ValueError("amount must be >= 0")
        self.balance += amount

