"""Data types shared across the revenue-sharing core.

Records are frozen dataclasses. Units/conventions:
- amounts are integer base units of the asset or reward kind (u64),
- accumulators are reward-per-share scaled by ``math.PRECISION`` (u256),
- ids are 0x-prefixed 32-byte hex strings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, unique
from typing import Any, Mapping, Tuple, Union


@unique
class Event(Enum):
    """Notification record types."""
    REVENUE_DEPOSITED = "RevenueDeposited"
    REVENUE_CLAIMED = "RevenueClaimed"


@dataclass(frozen=True)
class DepositRecord:
    asset_kind: str
    reward_kind: str
    amount: int

    event: Event = field(default=Event.REVENUE_DEPOSITED, init=False)


@dataclass(frozen=True)
class ClaimRecord:
    share_id: str
    asset_kind: str
    reward_kind: str
    amount: int

    event: Event = field(default=Event.REVENUE_CLAIMED, init=False)


Record = Union[DepositRecord, ClaimRecord]


@unique
class Action(Enum):
    """One member per command accepted by ``engine.step``."""
    MINT = "mint"
    SPLIT = "split"
    JOIN = "join"
    BURN = "burn"
    DEPOSIT = "deposit"
    CLAIM = "claim"
    CLAIM_MULTIPLE = "claim_multiple"


@dataclass(frozen=True)
class ActionParams:
    """Parameters for a command. Unused fields keep their defaults."""

    action: Action
    amount: int = 0                     # mint / split / deposit
    share_id: str = ""                  # split / join (target) / burn / claim
    other_id: str = ""                  # join (absorbed side)
    share_ids: Tuple[str, ...] = ()     # claim_multiple
    reward_kind: str = ""               # deposit / claim / claim_multiple


@dataclass(frozen=True)
class StepResult:
    """Result of a single engine step."""

    accepted: bool
    effect: Mapping[str, Any] | None = None
    rejection: str | None = None
    message: str | None = None
