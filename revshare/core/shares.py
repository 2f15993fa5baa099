"""Share classes and share balances.

`ShareClass` is the fixed-supply asset kind: it bounds circulating supply by an
immutable cap and is the only place that creates, reshapes and destroys
`ShareBalance` objects. Revenue bookkeeping for those objects lives in
`registry.RevenueRegistry`; callers go through `asset.RevenueAsset`, which
keeps the two in step.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from ..state.ids import IdAllocator, ObjectId
from .errors import UnknownShare
from .guards import check_burn, check_join, check_mint, check_split
from .math import check_u64


class ShareBalance:
    """A holder's share object: an id plus a positive balance.

    Balances are read-only from outside; only the owning `ShareClass`
    changes them.
    """

    __slots__ = ("_id", "_asset_kind", "_balance", "_live")

    def __init__(self, share_id: ObjectId, asset_kind: str, balance: int) -> None:
        self._id = share_id
        self._asset_kind = asset_kind
        self._balance = balance
        self._live = True

    @property
    def id(self) -> ObjectId:
        return self._id

    @property
    def asset_kind(self) -> str:
        return self._asset_kind

    @property
    def balance(self) -> int:
        return self._balance

    @property
    def live(self) -> bool:
        return self._live

    def value(self) -> int:
        return self._balance

    def __repr__(self) -> str:
        state = "" if self._live else ", destroyed"
        return f"ShareBalance({self._id[:10]}.., {self._asset_kind!r}, {self._balance}{state})"


class ShareClass:
    """Circulating-supply counter for one asset kind, bounded by a cap."""

    def __init__(
        self,
        asset_kind: str,
        total_supply_cap: int,
        burnable: bool = True,
        ids: Optional[IdAllocator] = None,
    ) -> None:
        self._asset_kind = asset_kind
        self._cap = check_u64(total_supply_cap, "total_supply_cap")
        self._burnable = bool(burnable)
        self._circulating = 0
        self._ids = ids or IdAllocator(asset_kind)
        self._shares: Dict[ObjectId, ShareBalance] = {}

    @property
    def asset_kind(self) -> str:
        return self._asset_kind

    @property
    def burnable(self) -> bool:
        return self._burnable

    @property
    def ids(self) -> IdAllocator:
        return self._ids

    def total_supply(self) -> int:
        return self._cap

    def circulating_supply(self) -> int:
        return self._circulating

    def get(self, share_id: ObjectId) -> ShareBalance:
        share = self._shares.get(share_id)
        if share is None:
            raise UnknownShare(f"share {share_id} is not live")
        return share

    def get_or_none(self, share_id: ObjectId) -> Optional[ShareBalance]:
        return self._shares.get(share_id)

    def is_live(self, share: ShareBalance) -> bool:
        return share.live and self._shares.get(share.id) is share

    def live_shares(self) -> List[ShareBalance]:
        """All live shares, ordered by id. For audits and snapshots only."""
        return [self._shares[k] for k in sorted(self._shares)]

    # -- mutations -----------------------------------------------------------

    def mint(self, amount: int) -> ShareBalance:
        check_mint(self, amount)
        self._circulating += amount
        return self._materialize(amount)

    def burn(self, share: ShareBalance) -> int:
        """Destroy `share` and retire its balance. Returns the burned amount."""
        check_burn(self, share)
        amount = share.balance
        self._circulating -= amount
        self._retire(share)
        return amount

    def split_balance(self, share: ShareBalance, amount: int) -> ShareBalance:
        """Move `amount` out of `share` into a new share object."""
        check_split(self, share, amount)
        share._balance -= amount
        return self._materialize(amount)

    def join_balance(self, share: ShareBalance, other: ShareBalance) -> None:
        """Merge `other` into `share`; `other` is destroyed."""
        check_join(self, share, other)
        share._balance += other.balance
        self._retire(other)

    def _materialize(self, amount: int) -> ShareBalance:
        share = ShareBalance(self._ids.allocate(), self._asset_kind, amount)
        self._shares[share.id] = share
        return share

    def _retire(self, share: ShareBalance) -> None:
        del self._shares[share.id]
        share._live = False
        share._balance = 0

    def _restore(self, share_id: ObjectId, balance: int) -> ShareBalance:
        """Re-create a live share from a snapshot (see `state.asset_from_dict`)."""
        share = ShareBalance(share_id, self._asset_kind, check_u64(balance, "balance"))
        self._shares[share_id] = share
        self._circulating += balance
        return share

    def __repr__(self) -> str:
        return (
            f"ShareClass({self._asset_kind!r}, circulating={self._circulating}, "
            f"cap={self._cap}, shares={len(self._shares)})"
        )
