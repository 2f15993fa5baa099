"""Invariant checkers for a whole `RevenueAsset`.

Each function returns True when the invariant holds, and `check_all()` returns
the list of violated invariant IDs (empty = all pass).

Unlike the operations themselves, these checks walk every live share. They are
meant for tests, tooling and the opt-in post-step audit in `engine.step`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict, List

from .errors import RevenueError

if TYPE_CHECKING:
    from .asset import RevenueAsset


def inv_supply_within_cap(a: RevenueAsset) -> bool:
    return 0 <= a.circulating_supply() <= a.total_supply()


def inv_supply_matches_balances(a: RevenueAsset) -> bool:
    return a.circulating_supply() == sum(s.balance for s in a.share_class.live_shares())


def inv_live_balances_positive(a: RevenueAsset) -> bool:
    return all(s.balance > 0 and s.live for s in a.share_class.live_shares())


def inv_debt_records_match_shares(a: RevenueAsset) -> bool:
    live_ids = sorted(s.id for s in a.share_class.live_shares())
    return a.registry.record_ids() == live_ids


def inv_pending_non_negative(a: RevenueAsset) -> bool:
    try:
        for share in a.share_class.live_shares():
            a.registry.pending_all(share)
    except RevenueError:
        return False
    return True


def inv_vault_covers_pending(a: RevenueAsset) -> bool:
    # Debts are floored: each debt reset can leave a share owed up to one base
    # unit above its exact pro-rata amount. One unit of slack per live share
    # covers a single reset each; repeated resets can exceed it.
    reg = a.registry
    shares = a.share_class.live_shares()
    try:
        for kind in reg.reward_kinds():
            owed = sum(reg.pending(kind, s) for s in shares)
            if owed > reg.vault_balance(kind) + len(shares):
                return False
    except RevenueError:
        return False
    return True


def inv_vault_conservation(a: RevenueAsset) -> bool:
    reg = a.registry
    for kind in reg.reward_kinds():
        v = reg.vault(kind)
        if v.balance() != v.total_deposited - v.total_claimed:
            return False
    return True


# ---------------------------------------------------------------------------
# Registry + check_all
# ---------------------------------------------------------------------------

INVARIANT_REGISTRY: Dict[str, Callable[[RevenueAsset], bool]] = {
    "inv_supply_within_cap": inv_supply_within_cap,
    "inv_supply_matches_balances": inv_supply_matches_balances,
    "inv_live_balances_positive": inv_live_balances_positive,
    "inv_debt_records_match_shares": inv_debt_records_match_shares,
    "inv_pending_non_negative": inv_pending_non_negative,
    "inv_vault_covers_pending": inv_vault_covers_pending,
    "inv_vault_conservation": inv_vault_conservation,
}


def check_all(asset: RevenueAsset) -> List[str]:
    """Return list of violated invariant IDs (empty = all pass)."""
    return [
        inv_id
        for inv_id, check_fn in INVARIANT_REGISTRY.items()
        if not check_fn(asset)
    ]
