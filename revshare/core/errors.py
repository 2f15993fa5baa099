"""Exception types for the revenue-sharing core.

Every error is synchronous and caller-fatal for the call that raised it: the
operation has no effect. ``code`` is a stable string used as the rejection
reason by ``engine.step()``.
"""

from __future__ import annotations


class RevenueError(Exception):
    """Base class for all domain errors."""

    code: str = "revenue_error"


class SupplyExceeded(RevenueError):
    """Mint would push circulating supply past the total supply cap."""

    code = "supply_exceeded"


class ZeroAmount(RevenueError):
    """Mint, split or deposit of amount 0."""

    code = "zero_amount"


class NotBurnable(RevenueError):
    """Burn on a share class created without burn support."""

    code = "not_burnable"


class InsufficientBalance(RevenueError):
    """Split amount >= current balance, or a balance too small to split."""

    code = "insufficient_balance"


class UnregisteredRewardKind(RevenueError):
    """Query or claim for a reward kind that was never deposited."""

    code = "unregistered_reward_kind"


class NothingToClaim(RevenueError):
    """Claim when pending is exactly zero."""

    code = "nothing_to_claim"


class PendingRevenueOnDestroy(RevenueError):
    """Burn or join-absorb of a share that still has unclaimed revenue."""

    code = "pending_revenue_on_destroy"


class EmptyBatch(RevenueError):
    """``claim_multiple`` (or a batch split/join) with no elements."""

    code = "empty_batch"


class DivisionByZero(RevenueError):
    """Deposit against a zero circulating supply."""

    code = "division_by_zero"


class ArithmeticOverflow(RevenueError):
    """A value left its u64 / u256 domain."""

    code = "overflow"


class InsufficientFunds(RevenueError):
    """A funds container or vault cannot cover the requested amount."""

    code = "insufficient_funds"


class AssetKindMismatch(RevenueError):
    """Share or funds belong to a different asset / reward kind."""

    code = "asset_kind_mismatch"


class UnknownShare(RevenueError):
    """Share is not live in this share class (destroyed or foreign)."""

    code = "unknown_share"


class InvalidJoin(RevenueError):
    """A share cannot be joined into itself."""

    code = "invalid_join"


class Unauthorized(RevenueError):
    """The presented cap does not belong to this asset."""

    code = "unauthorized"


class RevenueInvariantError(RevenueError):
    """Raised when internal accounting state is inconsistent."""

    code = "invariant"

    def __init__(self, violations: list[str]) -> None:
        self.violations = violations
        super().__init__(f"invariant violations: {', '.join(violations)}")
