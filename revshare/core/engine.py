"""Dispatch-table engine over `RevenueAsset`.

``step(asset, cap, params)`` is the command entry point. It:

1. Resolves share ids against the asset's live shares.
2. Dispatches to the matching `RevenueAsset` operation.
3. Optionally audits the post-state (``RevenueConfig.check_invariants``).
4. Returns a ``StepResult`` (accepted with an effect, or rejected with the
   error code).

Domain errors never escape ``step``; ``step_or_raise`` re-raises them.
Invariant audit failures are reported after the operation has been applied,
since the audit is a diagnostic and not a guard.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping

from ..state.funds import Funds
from ..structured_logging import log_event
from . import errors
from .asset import AssetCap, RevenueAsset
from .errors import RevenueError, RevenueInvariantError
from .invariants import check_all
from .types import Action, ActionParams, StepResult

log = logging.getLogger("revshare.engine")

HandlerFn = Callable[[RevenueAsset, AssetCap, ActionParams], Mapping[str, Any]]


def _mint(asset: RevenueAsset, cap: AssetCap, params: ActionParams) -> Mapping[str, Any]:
    share = asset.mint(cap, params.amount)
    return {"share_id": share.id, "balance": share.balance,
            "circulating_supply": asset.circulating_supply()}


def _split(asset: RevenueAsset, cap: AssetCap, params: ActionParams) -> Mapping[str, Any]:
    share = asset.share_class.get(params.share_id)
    new_share = asset.split(share, params.amount)
    return {"share_id": share.id, "balance": share.balance,
            "new_share_id": new_share.id, "new_balance": new_share.balance}


def _join(asset: RevenueAsset, cap: AssetCap, params: ActionParams) -> Mapping[str, Any]:
    share = asset.share_class.get(params.share_id)
    other = asset.share_class.get(params.other_id)
    asset.join(share, other)
    return {"share_id": share.id, "balance": share.balance, "destroyed_id": other.id}


def _burn(asset: RevenueAsset, cap: AssetCap, params: ActionParams) -> Mapping[str, Any]:
    share = asset.share_class.get(params.share_id)
    amount = asset.burn(cap, share)
    return {"destroyed_id": share.id, "burned": amount,
            "circulating_supply": asset.circulating_supply()}


def _deposit(asset: RevenueAsset, cap: AssetCap, params: ActionParams) -> Mapping[str, Any]:
    delta = asset.deposit(cap, Funds(params.reward_kind, params.amount))
    return {"reward_kind": params.reward_kind, "amount": params.amount, "delta_acc": delta,
            "accumulator": asset.registry.accumulator(params.reward_kind)}


def _claim(asset: RevenueAsset, cap: AssetCap, params: ActionParams) -> Mapping[str, Any]:
    share = asset.share_class.get(params.share_id)
    paid = asset.claim(params.reward_kind, share)
    return {"share_id": share.id, "reward_kind": params.reward_kind, "claimed": paid.value()}


def _claim_multiple(asset: RevenueAsset, cap: AssetCap, params: ActionParams) -> Mapping[str, Any]:
    shares = [asset.share_class.get(sid) for sid in params.share_ids]
    paid = asset.claim_multiple(params.reward_kind, shares)
    return {"share_ids": list(params.share_ids), "reward_kind": params.reward_kind,
            "claimed": paid.value()}


_DISPATCH: Dict[Action, HandlerFn] = {
    Action.MINT: _mint,
    Action.SPLIT: _split,
    Action.JOIN: _join,
    Action.BURN: _burn,
    Action.DEPOSIT: _deposit,
    Action.CLAIM: _claim,
    Action.CLAIM_MULTIPLE: _claim_multiple,
}


def step(asset: RevenueAsset, cap: AssetCap, params: ActionParams) -> StepResult:
    """Execute one command against `asset`.

    Returns ``StepResult`` with ``accepted=True`` on success,
    or ``accepted=False`` with the error code as ``rejection``.
    """
    handler = _DISPATCH.get(params.action)
    if handler is None:
        return StepResult(accepted=False, rejection=f"unknown_action:{params.action}")

    try:
        effect = handler(asset, cap, params)
    except RevenueError as exc:
        log_event(log, "step_rejected", level=logging.DEBUG,
                  action=params.action.value, rejection=exc.code, message=str(exc))
        return StepResult(accepted=False, rejection=exc.code, message=str(exc))

    if asset.config.check_invariants:
        violations = check_all(asset)
        if violations:
            log_event(log, "invariant_violation", level=logging.ERROR,
                      action=params.action.value, violations=violations)
            return StepResult(
                accepted=False,
                rejection=f"invariant:{','.join(violations)}",
                message="post-state audit failed",
            )

    return StepResult(accepted=True, effect=effect)


_ERRORS_BY_CODE: Mapping[str, type[RevenueError]] = {
    cls.code: cls
    for cls in (
        errors.SupplyExceeded,
        errors.ZeroAmount,
        errors.NotBurnable,
        errors.InsufficientBalance,
        errors.UnregisteredRewardKind,
        errors.NothingToClaim,
        errors.PendingRevenueOnDestroy,
        errors.EmptyBatch,
        errors.DivisionByZero,
        errors.ArithmeticOverflow,
        errors.InsufficientFunds,
        errors.AssetKindMismatch,
        errors.UnknownShare,
        errors.InvalidJoin,
        errors.Unauthorized,
    )
}


def step_or_raise(asset: RevenueAsset, cap: AssetCap, params: ActionParams) -> StepResult:
    """Like ``step()`` but raises on rejection instead of returning a result.

    Raises:
        RevenueInvariantError: Post-state audit failed.
        RevenueError: The matching subclass for the rejection code.
    """
    result = step(asset, cap, params)
    if result.accepted:
        return result

    reason = result.rejection or ""
    if reason.startswith("invariant:"):
        raise RevenueInvariantError(reason.removeprefix("invariant:").split(","))
    if reason == RevenueInvariantError.code:
        raise RevenueInvariantError([result.message or reason])
    error_cls = _ERRORS_BY_CODE.get(reason, RevenueError)
    raise error_cls(result.message or reason)
