"""Snapshot serialization for `RevenueAsset`.

`asset_to_dict()` returns a plain, JSON-compatible dict (str/int/bool/list/dict
only); signed debts are stored as signed ints. `asset_from_dict()` rebuilds an
equivalent asset.

Round-trip property (tested): every pending amount, accumulator and vault
balance survives ``asset_from_dict(asset_to_dict(a))``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from ..config import RevenueConfig
from ..state.debts import DebtTable
from ..state.ids import IdAllocator
from .asset import AssetCap, RevenueAsset
from .errors import RevenueInvariantError
from .events import EventSink
from .registry import RevenueRegistry
from .shares import ShareClass
from .signed import SignedFixedInt
from .vault import RevenueVault

SNAPSHOT_VERSION = 1


def asset_to_dict(asset: RevenueAsset) -> Dict[str, Any]:
    """Serialize an asset, its live shares, accumulators, vaults and debts."""
    sc = asset.share_class
    reg = asset.registry
    shares = sc.live_shares()
    kinds: List[Dict[str, Any]] = []
    for kind in reg.reward_kinds():
        vault = reg.vault(kind)
        kinds.append({
            "reward_kind": kind,
            "accumulator": reg.accumulator(kind),
            "vault_balance": vault.balance(),
            "total_deposited": vault.total_deposited,
            "total_claimed": vault.total_claimed,
        })
    return {
        "version": SNAPSHOT_VERSION,
        "asset_kind": sc.asset_kind,
        "total_supply_cap": sc.total_supply(),
        "burnable": sc.burnable,
        "next_id_index": sc.ids.next_index,
        "shares": [{"id": s.id, "balance": s.balance} for s in shares],
        "reward_kinds": kinds,
        "debts": {
            s.id: {k: d.to_int() for k, d in reg.debt_record(s).items()}
            for s in shares
        },
    }


def asset_from_dict(
    d: Mapping[str, Any],
    config: Optional[RevenueConfig] = None,
    sink: Optional[EventSink] = None,
) -> tuple[RevenueAsset, AssetCap]:
    """Rebuild an asset from ``asset_to_dict`` output. Raises KeyError on missing fields."""
    if d["version"] != SNAPSHOT_VERSION:
        raise ValueError(f"unsupported snapshot version: {d['version']}")
    asset_kind = str(d["asset_kind"])

    share_class = ShareClass(
        asset_kind,
        int(d["total_supply_cap"]),
        burnable=bool(d["burnable"]),
        ids=IdAllocator(asset_kind, int(d["next_id_index"])),
    )
    shares = [share_class._restore(str(s["id"]), int(s["balance"])) for s in d["shares"]]
    if share_class.circulating_supply() > share_class.total_supply():
        raise RevenueInvariantError(["inv_supply_within_cap"])

    accumulators: Dict[str, int] = {}
    vaults: Dict[str, RevenueVault] = {}
    for entry in d["reward_kinds"]:
        kind = str(entry["reward_kind"])
        accumulators[kind] = int(entry["accumulator"])
        vaults[kind] = RevenueVault._restore(
            kind,
            int(entry["vault_balance"]),
            int(entry["total_deposited"]),
            int(entry["total_claimed"]),
        )

    debts = DebtTable()
    raw_debts: Mapping[str, Mapping[str, int]] = d["debts"]
    for share in shares:
        debts.create(share.id)
        for kind, value in raw_debts[share.id].items():
            if kind not in accumulators:
                raise RevenueInvariantError([f"debt_for_unregistered_kind:{kind}"])
            debts.set(share.id, kind, SignedFixedInt.from_int(int(value)))

    registry = RevenueRegistry._restore(asset_kind, accumulators, vaults, debts, sink=sink)
    return RevenueAsset(share_class, registry, config=config), AssetCap(asset_kind)
