"""Precondition checks for share-class operations.

One function per operation. Each raises the matching ``RevenueError`` when the
operation is not allowed in the current state and returns None otherwise.
Guards never mutate, so composite operations can run every guard before the
first state change.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .errors import (
    AssetKindMismatch,
    InsufficientBalance,
    InvalidJoin,
    NotBurnable,
    SupplyExceeded,
    UnknownShare,
    ZeroAmount,
)
from .math import check_int, check_u64

if TYPE_CHECKING:
    from .shares import ShareBalance, ShareClass


def check_live(share_class: ShareClass, share: ShareBalance) -> None:
    if share.asset_kind != share_class.asset_kind:
        raise AssetKindMismatch(
            f"share {share.id} is {share.asset_kind}, expected {share_class.asset_kind}"
        )
    if not share.live or share_class.get_or_none(share.id) is not share:
        raise UnknownShare(f"share {share.id} is not live")


def check_mint(share_class: ShareClass, amount: int) -> None:
    check_int(amount, "mint amount")
    if amount == 0:
        raise ZeroAmount("mint amount must be positive")
    check_u64(amount, "mint amount")
    if share_class.circulating_supply() + amount > share_class.total_supply():
        raise SupplyExceeded(
            f"mint of {amount} exceeds cap {share_class.total_supply()} "
            f"(circulating {share_class.circulating_supply()})"
        )


def check_burn(share_class: ShareClass, share: ShareBalance) -> None:
    if not share_class.burnable:
        raise NotBurnable(f"{share_class.asset_kind} is not burnable")
    check_live(share_class, share)


def check_split(share_class: ShareClass, share: ShareBalance, amount: int) -> None:
    check_live(share_class, share)
    check_int(amount, "split amount")
    if amount == 0:
        raise ZeroAmount("split amount must be positive")
    if amount < 0 or share.balance <= 1 or amount >= share.balance:
        raise InsufficientBalance(f"cannot split {amount} from balance {share.balance}")


def check_join(share_class: ShareClass, share: ShareBalance, other: ShareBalance) -> None:
    check_live(share_class, share)
    check_live(share_class, other)
    if share is other or share.id == other.id:
        raise InvalidJoin(f"cannot join share {share.id} into itself")
    check_u64(share.balance + other.balance, "joined balance")
