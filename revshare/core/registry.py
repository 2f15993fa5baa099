"""Reward-accounting engine: per-kind accumulators plus a per-share debt ledger.

For every reward kind R ever deposited the registry keeps

    acc[R]  -- cumulative reward per unit share, scaled by PRECISION

and for every live share S a debt entry ``debt[S][R]`` such that

    pending(R, S) = acc[R] * S.balance // PRECISION - debt[S][R]

A deposit changes exactly one accumulator (one division, independent of how
many shares exist). A balance change rewrites only the debt entries of the
shares it touches, for every registered kind, so that each share's pending
amount is unchanged by the change. A claim settles one debt entry.

Nothing here iterates over all shares.

Methods validate everything before writing: a raised error means no state
changed.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from ..state.debts import DebtTable
from ..state.funds import Funds
from ..structured_logging import log_event
from .errors import (
    ArithmeticOverflow,
    EmptyBatch,
    InsufficientBalance,
    InsufficientFunds,
    NothingToClaim,
    PendingRevenueOnDestroy,
    RevenueInvariantError,
    UnknownShare,
    UnregisteredRewardKind,
    ZeroAmount,
)
from .events import EventSink, null_sink
from .math import acc_delta, accrued, check_int, check_u64, check_u256
from .shares import ShareBalance
from .signed import SignedFixedInt
from .types import ClaimRecord, DepositRecord
from .vault import RevenueVault

log = logging.getLogger("revshare.registry")


class RevenueRegistry:
    """Accumulators, vaults and debt records for one asset kind."""

    def __init__(self, asset_kind: str, sink: Optional[EventSink] = None) -> None:
        self._asset_kind = asset_kind
        self._sink: EventSink = sink or null_sink
        # Append-only, in registration order.
        self._kinds: List[str] = []
        self._acc: Dict[str, int] = {}
        self._vaults: Dict[str, RevenueVault] = {}
        self._debts = DebtTable()

    @property
    def asset_kind(self) -> str:
        return self._asset_kind

    # -- queries -------------------------------------------------------------

    def reward_kinds(self) -> List[str]:
        return list(self._kinds)

    def is_registered(self, reward_kind: str) -> bool:
        return reward_kind in self._acc

    def accumulator(self, reward_kind: str) -> int:
        self._require_registered(reward_kind)
        return self._acc[reward_kind]

    def vault(self, reward_kind: str) -> RevenueVault:
        self._require_registered(reward_kind)
        return self._vaults[reward_kind]

    def vault_balance(self, reward_kind: str) -> int:
        return self.vault(reward_kind).balance()

    def has_record(self, share: ShareBalance) -> bool:
        return share.id in self._debts

    def record_ids(self) -> List[str]:
        """Ids of every share with a debt record, sorted."""
        return sorted(self._debts)

    def debt_record(self, share: ShareBalance) -> Dict[str, SignedFixedInt]:
        """Raw entries for `share`; kinds never touched are absent."""
        self._require_record(share)
        return self._debts.record(share.id)

    def debt(self, reward_kind: str, share: ShareBalance) -> SignedFixedInt:
        self._require_registered(reward_kind)
        self._require_record(share)
        return self._debts.get(share.id, reward_kind)

    def pending(self, reward_kind: str, share: ShareBalance) -> int:
        """Claimable amount of `reward_kind` for `share`."""
        self._require_registered(reward_kind)
        self._require_record(share)
        return self._pending_signed(reward_kind, share, share.balance).to_unsigned()

    def pending_all(self, share: ShareBalance) -> Dict[str, int]:
        """Pending amount for every registered reward kind."""
        self._require_record(share)
        return {
            kind: self._pending_signed(kind, share, share.balance).to_unsigned()
            for kind in self._kinds
        }

    # -- deposits ------------------------------------------------------------

    def deposit(self, funds: Funds, circulating_supply: int) -> int:
        """Distribute `funds` over `circulating_supply`. Returns the accumulator increment.

        The reward kind is registered on first deposit. `funds` is emptied into
        the kind's vault.
        """
        kind = funds.reward_kind
        amount = funds.value()
        if amount == 0:
            raise ZeroAmount(f"deposit of zero {kind}")
        delta = acc_delta(amount, circulating_supply)
        new_acc = check_u256(self._acc.get(kind, 0) + delta, f"acc[{kind}]")
        vault = self._vaults.get(kind)
        if vault is not None and not vault.can_credit(amount):
            raise ArithmeticOverflow(f"vault {kind} would exceed u64")

        if vault is None:
            vault = RevenueVault(kind)
            self._vaults[kind] = vault
            self._kinds.append(kind)
            log_event(log, "reward_kind_registered", level=logging.DEBUG,
                      asset_kind=self._asset_kind, reward_kind=kind)
        self._acc[kind] = new_acc
        vault.credit(funds)

        self._sink(DepositRecord(asset_kind=self._asset_kind, reward_kind=kind, amount=amount))
        return delta

    # -- debt lifecycle ------------------------------------------------------

    def create(self, share: ShareBalance) -> None:
        """Open a debt record for a freshly materialized share.

        The new share starts settled for every registered kind: it has no claim
        on revenue deposited before it existed.
        """
        if share.id in self._debts:
            raise RevenueInvariantError(["debt_record_exists"])
        entries = {
            kind: SignedFixedInt.from_unsigned(accrued(self._acc[kind], share.balance))
            for kind in self._kinds
        }
        self._debts.create(share.id)
        for kind, debt in entries.items():
            self._debts.set(share.id, kind, debt)

    def increase(self, share: ShareBalance, amount: int) -> None:
        """Rebase debts before `share` grows by `amount`, keeping pending unchanged."""
        self._require_record(share)
        new_balance = check_u64(share.balance + amount, "balance")
        self._rebase(share, new_balance)

    def decrease(self, share: ShareBalance, amount: int) -> None:
        """Rebase debts before `share` shrinks by `amount`, keeping pending unchanged."""
        self._require_record(share)
        check_int(amount, "amount")
        if amount > share.balance:
            raise InsufficientBalance(f"cannot decrease balance {share.balance} by {amount}")
        self._rebase(share, share.balance - amount)

    def check_destroy(self, share: ShareBalance) -> None:
        """Raise unless every registered kind shows zero pending for `share`."""
        self._require_record(share)
        for kind in self._kinds:
            p = self._pending_signed(kind, share, share.balance)
            if not p.is_zero():
                raise PendingRevenueOnDestroy(
                    f"share {share.id} has {p.to_unsigned()} {kind} unclaimed"
                )

    def destroy(self, share: ShareBalance) -> None:
        """Drop the debt record of a share that is about to be destroyed."""
        self.check_destroy(share)
        self._debts.remove(share.id)

    # -- claims --------------------------------------------------------------

    def claim(self, reward_kind: str, share: ShareBalance) -> Funds:
        """Pay out everything pending for (`reward_kind`, `share`)."""
        self._require_registered(reward_kind)
        self._require_record(share)
        amount = self._claimable(reward_kind, share)
        vault = self._vaults[reward_kind]
        if amount > vault.balance():
            raise InsufficientFunds(
                f"vault {reward_kind} holds {vault.balance()}, share {share.id} is owed {amount}"
            )
        return self._settle(reward_kind, share, amount)

    def claim_multiple(self, reward_kind: str, shares: Sequence[ShareBalance]) -> Funds:
        """Claim for every share in `shares`; all-or-nothing."""
        if not shares:
            raise EmptyBatch("claim_multiple needs at least one share")
        self._require_registered(reward_kind)

        seen = set()
        amounts: List[int] = []
        for share in shares:
            self._require_record(share)
            if share.id in seen:
                # The first occurrence settles it; the repeat would find nothing.
                raise NothingToClaim(f"share {share.id} appears twice in batch")
            seen.add(share.id)
            amounts.append(self._claimable(reward_kind, share))

        vault = self._vaults[reward_kind]
        if sum(amounts) > vault.balance():
            raise InsufficientFunds(
                f"vault {reward_kind} holds {vault.balance()}, batch is owed {sum(amounts)}"
            )

        total = Funds.zero(reward_kind)
        for share, amount in zip(shares, amounts):
            total.join(self._settle(reward_kind, share, amount))
        return total

    # -- internals -----------------------------------------------------------

    def _require_registered(self, reward_kind: str) -> None:
        if reward_kind not in self._acc:
            raise UnregisteredRewardKind(f"{reward_kind} was never deposited for {self._asset_kind}")

    def _require_record(self, share: ShareBalance) -> None:
        if share.id not in self._debts:
            raise UnknownShare(f"no debt record for share {share.id}")

    def _pending_signed(self, kind: str, share: ShareBalance, balance: int) -> SignedFixedInt:
        total = SignedFixedInt.from_unsigned(accrued(self._acc[kind], balance))
        pending = total - self._debts.get(share.id, kind)
        if pending.is_negative():
            raise RevenueInvariantError([f"negative_pending:{kind}"])
        return pending

    def _claimable(self, kind: str, share: ShareBalance) -> int:
        amount = self._pending_signed(kind, share, share.balance).to_u64()
        if amount == 0:
            raise NothingToClaim(f"share {share.id} has no {kind} to claim")
        return amount

    def _settle(self, kind: str, share: ShareBalance, amount: int) -> Funds:
        settled = SignedFixedInt.from_unsigned(accrued(self._acc[kind], share.balance))
        self._debts.set(share.id, kind, settled)
        paid = self._vaults[kind].debit(amount)
        self._sink(ClaimRecord(
            share_id=share.id,
            asset_kind=self._asset_kind,
            reward_kind=kind,
            amount=amount,
        ))
        return paid

    def _rebase(self, share: ShareBalance, new_balance: int) -> None:
        """Recompute every debt entry of `share` against `new_balance`.

        debt' = acc * new_balance // PRECISION - pending, which may be negative
        when the balance shrinks while revenue is pending.
        """
        entries: Dict[str, SignedFixedInt] = {}
        for kind in self._kinds:
            p = self._pending_signed(kind, share, share.balance)
            entries[kind] = SignedFixedInt.from_unsigned(accrued(self._acc[kind], new_balance)) - p
        for kind, debt in entries.items():
            self._debts.set(share.id, kind, debt)
        if entries:
            log_event(log, "debts_rebased", level=logging.DEBUG, share_id=share.id,
                      old_balance=share.balance, new_balance=new_balance, kinds=len(entries))

    @classmethod
    def _restore(
        cls,
        asset_kind: str,
        accumulators: Dict[str, int],
        vaults: Dict[str, RevenueVault],
        debts: DebtTable,
        sink: Optional[EventSink] = None,
    ) -> RevenueRegistry:
        reg = cls(asset_kind, sink=sink)
        reg._kinds = list(accumulators)
        reg._acc = {k: check_u256(v, f"acc[{k}]") for k, v in accumulators.items()}
        reg._vaults = dict(vaults)
        reg._debts = debts
        return reg

    def __repr__(self) -> str:
        return f"RevenueRegistry({self._asset_kind!r}, kinds={self._kinds}, records={len(self._debts)})"
