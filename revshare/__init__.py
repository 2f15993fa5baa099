"""
revshare: proportional revenue sharing over a fixed-supply asset.

Deposits of any reward kind are distributed to current share holders pro rata
via a scaled reward-per-share accumulator and a per-share debt ledger, so no
operation ever walks every share.
"""

from .core import (
    AssetCap,
    RevenueAsset,
    RevenueError,
    ShareBalance,
    new_asset,
    step,
    step_or_raise,
)
from .config import RevenueConfig
from .structured_logging import configure_structured_logging
from .state import Funds

__version__ = "0.1.0"

__all__ = [
    "AssetCap",
    "RevenueAsset",
    "RevenueError",
    "ShareBalance",
    "new_asset",
    "step",
    "step_or_raise",
    "RevenueConfig",
    "Funds",
    "configure_structured_logging",
]
