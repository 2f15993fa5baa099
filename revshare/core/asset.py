"""
Composite share operations (orchestration layer).

`RevenueAsset` wires one `ShareClass` to one `RevenueRegistry` and runs every
balance-changing operation in the order the accounting needs:

- mint:  ShareClass.mint -> registry.create(new)
- split: registry.decrease(share) -> physical split -> registry.create(new)
- join:  registry.destroy(other) -> registry.increase(share) -> physical merge
- burn:  registry.destroy(share) -> ShareClass.burn

All guards run before the first mutation, so a failing operation leaves the
asset untouched.

A split does NOT hand any pre-split pending revenue to the new share: all of
it stays claimable on the original object.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from ..config import RevenueConfig
from ..state.funds import Funds
from ..state.ids import IdAllocator
from ..structured_logging import log_event
from .errors import EmptyBatch, InsufficientBalance, InvalidJoin, Unauthorized, ZeroAmount
from .events import EventSink, LoggingSink
from .guards import check_burn, check_join, check_live, check_mint, check_split
from .math import check_int, check_u64
from .registry import RevenueRegistry
from .shares import ShareBalance, ShareClass

log = logging.getLogger("revshare.asset")


@dataclass(frozen=True, eq=False)
class AssetCap:
    """Proof of authority over one asset: required to mint, burn and deposit.

    Only `new_asset` hands one out. Holding it is the whole check; who may hold
    it is decided outside this package.
    """

    asset_kind: str


class RevenueAsset:
    """A fixed-supply asset whose holders share deposited revenue."""

    def __init__(
        self,
        share_class: ShareClass,
        registry: RevenueRegistry,
        config: Optional[RevenueConfig] = None,
    ) -> None:
        if share_class.asset_kind != registry.asset_kind:
            raise ValueError(
                f"share class {share_class.asset_kind!r} does not match registry {registry.asset_kind!r}"
            )
        self._class = share_class
        self._registry = registry
        self._config = config or RevenueConfig()

    @property
    def asset_kind(self) -> str:
        return self._class.asset_kind

    @property
    def share_class(self) -> ShareClass:
        return self._class

    @property
    def registry(self) -> RevenueRegistry:
        return self._registry

    @property
    def config(self) -> RevenueConfig:
        return self._config

    # -- queries -------------------------------------------------------------

    def total_supply(self) -> int:
        return self._class.total_supply()

    def circulating_supply(self) -> int:
        return self._class.circulating_supply()

    def pending(self, reward_kind: str, share: ShareBalance) -> int:
        check_live(self._class, share)
        return self._registry.pending(reward_kind, share)

    def pending_all(self, share: ShareBalance) -> Dict[str, int]:
        check_live(self._class, share)
        return self._registry.pending_all(share)

    # -- balance-changing operations -----------------------------------------

    def mint(self, cap: AssetCap, amount: int) -> ShareBalance:
        self._authorize(cap)
        check_mint(self._class, amount)
        share = self._class.mint(amount)
        self._registry.create(share)
        log_event(log, "shares_minted", level=logging.DEBUG, share_id=share.id, amount=amount)
        return share

    def split(self, share: ShareBalance, amount: int) -> ShareBalance:
        """Split `amount` off `share` into a new share with zero pending."""
        check_split(self._class, share, amount)
        self._registry.decrease(share, amount)
        new_share = self._class.split_balance(share, amount)
        self._registry.create(new_share)
        return new_share

    def split_many(self, share: ShareBalance, amounts: Sequence[int]) -> List[ShareBalance]:
        """Split several amounts off `share`, in order; all-or-nothing."""
        if not amounts:
            raise EmptyBatch("split_many needs at least one amount")
        check_live(self._class, share)
        remaining = share.balance
        for amount in amounts:
            check_int(amount, "split amount")
            if amount == 0:
                raise ZeroAmount("split amount must be positive")
            if amount < 0 or amount >= remaining:
                raise InsufficientBalance(f"cannot split {amount} from balance {remaining}")
            remaining -= amount
        return [self.split(share, amount) for amount in amounts]

    def join(self, share: ShareBalance, other: ShareBalance) -> None:
        """Merge `other` into `share`. Refused while `other` has pending revenue."""
        check_join(self._class, share, other)
        self._registry.check_destroy(other)
        incoming = other.balance
        # Both steps are validated above, so neither can fail half-way.
        self._registry.destroy(other)
        self._registry.increase(share, incoming)
        self._class.join_balance(share, other)

    def join_many(self, share: ShareBalance, others: Sequence[ShareBalance]) -> None:
        """Merge every share in `others` into `share`; all-or-nothing."""
        if not others:
            raise EmptyBatch("join_many needs at least one share")
        seen = {share.id}
        total = share.balance
        for other in others:
            check_join(self._class, share, other)
            if other.id in seen:
                raise InvalidJoin(f"share {other.id} appears twice in join")
            seen.add(other.id)
            self._registry.check_destroy(other)
            total += other.balance
        check_u64(total, "joined balance")
        for other in others:
            self.join(share, other)

    def burn(self, cap: AssetCap, share: ShareBalance) -> int:
        """Destroy `share`, retiring its balance. Refused while revenue is pending."""
        self._authorize(cap)
        check_burn(self._class, share)
        self._registry.destroy(share)
        amount = self._class.burn(share)
        log_event(log, "shares_burned", level=logging.DEBUG, share_id=share.id, amount=amount)
        return amount

    # -- revenue -------------------------------------------------------------

    def deposit(self, cap: AssetCap, funds: Funds) -> int:
        """Distribute `funds` over current holders. Returns the accumulator increment."""
        self._authorize(cap)
        return self._registry.deposit(funds, self._class.circulating_supply())

    def claim(self, reward_kind: str, share: ShareBalance) -> Funds:
        check_live(self._class, share)
        return self._registry.claim(reward_kind, share)

    def claim_multiple(self, reward_kind: str, shares: Sequence[ShareBalance]) -> Funds:
        for share in shares:
            check_live(self._class, share)
        return self._registry.claim_multiple(reward_kind, shares)

    def _authorize(self, cap: AssetCap) -> None:
        if not isinstance(cap, AssetCap) or cap.asset_kind != self.asset_kind:
            raise Unauthorized(f"cap does not grant authority over {self.asset_kind}")

    def __repr__(self) -> str:
        return f"RevenueAsset({self._class!r}, {self._registry!r})"


def new_asset(
    asset_kind: str,
    total_supply_cap: int,
    burnable: bool = True,
    config: Optional[RevenueConfig] = None,
    sink: Optional[EventSink] = None,
) -> Tuple[RevenueAsset, AssetCap]:
    """Create an asset and the one cap that governs it."""
    config = config or RevenueConfig()
    if sink is None and config.log_events:
        sink = LoggingSink()
    share_class = ShareClass(asset_kind, total_supply_cap, burnable=burnable, ids=IdAllocator(asset_kind))
    registry = RevenueRegistry(asset_kind, sink=sink)
    return RevenueAsset(share_class, registry, config=config), AssetCap(asset_kind)
