"""
Revenue-sharing core: share classes, the reward-accounting registry and the
composite operations that keep them consistent.

Public API:
- `new_asset(asset_kind, total_supply_cap, ...) -> (RevenueAsset, AssetCap)`
- `RevenueAsset.mint / split / join / burn / deposit / claim / claim_multiple`
- `step(asset, cap, params) -> StepResult` (command interface)
- `check_all(asset) -> list[str]` (invariant audit)
"""

from .asset import AssetCap, RevenueAsset, new_asset
from .engine import step, step_or_raise
from .errors import (
    ArithmeticOverflow,
    AssetKindMismatch,
    DivisionByZero,
    EmptyBatch,
    InsufficientBalance,
    InsufficientFunds,
    InvalidJoin,
    NotBurnable,
    NothingToClaim,
    PendingRevenueOnDestroy,
    RevenueError,
    RevenueInvariantError,
    SupplyExceeded,
    Unauthorized,
    UnknownShare,
    UnregisteredRewardKind,
    ZeroAmount,
)
from .events import LoggingSink, RecordingSink
from .invariants import check_all
from .math import PRECISION
from .registry import RevenueRegistry
from .shares import ShareBalance, ShareClass
from .signed import SignedFixedInt
from .state import asset_from_dict, asset_to_dict
from .types import Action, ActionParams, ClaimRecord, DepositRecord, Event, StepResult
from .vault import RevenueVault

__all__ = [
    "AssetCap",
    "RevenueAsset",
    "new_asset",
    "step",
    "step_or_raise",
    "ArithmeticOverflow",
    "AssetKindMismatch",
    "DivisionByZero",
    "EmptyBatch",
    "InsufficientBalance",
    "InsufficientFunds",
    "InvalidJoin",
    "NotBurnable",
    "NothingToClaim",
    "PendingRevenueOnDestroy",
    "RevenueError",
    "RevenueInvariantError",
    "SupplyExceeded",
    "Unauthorized",
    "UnknownShare",
    "UnregisteredRewardKind",
    "ZeroAmount",
    "LoggingSink",
    "RecordingSink",
    "check_all",
    "PRECISION",
    "RevenueRegistry",
    "ShareBalance",
    "ShareClass",
    "SignedFixedInt",
    "asset_from_dict",
    "asset_to_dict",
    "Action",
    "ActionParams",
    "ClaimRecord",
    "DepositRecord",
    "Event",
    "StepResult",
    "RevenueVault",
]
