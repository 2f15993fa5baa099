"""
Per-reward-kind vault of deposited-but-unclaimed revenue.

Deposits credit the vault, claims debit it. The vault also keeps lifetime
totals so the conservation identity

    balance == total_deposited - total_claimed

can be audited (see `invariants.inv_vault_conservation`).
"""

from __future__ import annotations

from ..state.funds import Funds
from .errors import AssetKindMismatch, InsufficientFunds
from .math import U64_MAX


class RevenueVault:
    """Undistributed funds for one reward kind."""

    def __init__(self, reward_kind: str) -> None:
        self._funds = Funds.zero(reward_kind)
        self._total_deposited = 0
        self._total_claimed = 0

    @property
    def reward_kind(self) -> str:
        return self._funds.reward_kind

    @property
    def total_deposited(self) -> int:
        return self._total_deposited

    @property
    def total_claimed(self) -> int:
        return self._total_claimed

    def balance(self) -> int:
        return self._funds.value()

    def can_credit(self, amount: int) -> bool:
        return self._funds.value() + amount <= U64_MAX

    def credit(self, funds: Funds) -> None:
        if funds.reward_kind != self.reward_kind:
            raise AssetKindMismatch(f"cannot deposit {funds.reward_kind} into {self.reward_kind} vault")
        amount = funds.value()
        self._funds.join(funds)
        self._total_deposited += amount

    def debit(self, amount: int) -> Funds:
        if amount > self._funds.value():
            raise InsufficientFunds(
                f"vault {self.reward_kind} holds {self._funds.value()}, cannot pay {amount}"
            )
        out = self._funds.split(amount)
        self._total_claimed += amount
        return out

    @classmethod
    def _restore(cls, reward_kind: str, balance: int, total_deposited: int, total_claimed: int) -> RevenueVault:
        vault = cls(reward_kind)
        vault._funds = Funds(reward_kind, balance)
        vault._total_deposited = total_deposited
        vault._total_claimed = total_claimed
        return vault

    def __repr__(self) -> str:
        return f"RevenueVault({self.reward_kind!r}, balance={self.balance()})"
