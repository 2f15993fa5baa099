"""
Per-share debt side-table.

Maps share id -> {reward kind -> SignedFixedInt}. The table is keyed by object
identity rather than embedded in the share, so a debt record's lifecycle is
driven only by the registry's create/destroy calls.
"""

from __future__ import annotations

from typing import Dict, Iterator, Optional

from ..core.signed import SignedFixedInt
from .ids import ObjectId

RewardKind = str
DebtRecord = Dict[RewardKind, SignedFixedInt]


class DebtTable:
    """
    Sparse table of debt records.

    Notes:
    - A record may exist with no entries (share created before any deposit).
    - Missing entries read as zero debt.
    """

    def __init__(self) -> None:
        self._records: Dict[ObjectId, DebtRecord] = {}

    def __contains__(self, share_id: object) -> bool:
        return share_id in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ObjectId]:
        return iter(self._records)

    def create(self, share_id: ObjectId) -> None:
        """Insert an empty record. Raises KeyError if one already exists."""
        if share_id in self._records:
            raise KeyError(f"debt record already exists: {share_id}")
        self._records[share_id] = {}

    def get(self, share_id: ObjectId, reward_kind: RewardKind) -> SignedFixedInt:
        """Debt for (share, reward kind). Returns zero if the entry is absent."""
        record = self._records[share_id]
        return record.get(reward_kind, SignedFixedInt.zero())

    def entry(self, share_id: ObjectId, reward_kind: RewardKind) -> Optional[SignedFixedInt]:
        """Raw entry, or None when never touched for this reward kind."""
        return self._records[share_id].get(reward_kind)

    def set(self, share_id: ObjectId, reward_kind: RewardKind, debt: SignedFixedInt) -> None:
        self._records[share_id][reward_kind] = debt

    def remove(self, share_id: ObjectId) -> DebtRecord:
        return self._records.pop(share_id)

    def record(self, share_id: ObjectId) -> DebtRecord:
        """Copy of one record."""
        return dict(self._records[share_id])

    def __repr__(self) -> str:
        return f"DebtTable({len(self._records)} records)"
