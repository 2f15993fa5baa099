"""
Fungible value containers.

`Funds` is the value handed to and returned from the registry: deposits move a
`Funds` into a vault, claims split a `Funds` out of it. Each container is
tagged with the reward kind it holds and never mixes kinds.
"""

from __future__ import annotations

from ..core.errors import AssetKindMismatch, InsufficientFunds
from ..core.math import check_u64

RewardKind = str


class Funds:
    """
    A u64 amount of one reward kind.

    Notes:
    - `join` empties the absorbed container so value is never counted twice.
    - A zero-valued container is valid (see `Funds.zero`).
    """

    __slots__ = ("_kind", "_value")

    def __init__(self, reward_kind: RewardKind, value: int = 0) -> None:
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError("value must be an int")
        self._kind = reward_kind
        self._value = check_u64(value, "funds value")

    @classmethod
    def zero(cls, reward_kind: RewardKind) -> Funds:
        return cls(reward_kind, 0)

    @property
    def reward_kind(self) -> RewardKind:
        return self._kind

    def value(self) -> int:
        return self._value

    def split(self, amount: int) -> Funds:
        """Take `amount` out of this container into a new one."""
        if amount < 0:
            raise ValueError(f"amount must be non-negative: {amount}")
        if amount > self._value:
            raise InsufficientFunds(
                f"cannot split {amount} from {self._value} of {self._kind}"
            )
        self._value -= amount
        return Funds(self._kind, amount)

    def join(self, other: Funds) -> None:
        """Move all of `other` into this container."""
        if other._kind != self._kind:
            raise AssetKindMismatch(f"cannot join {other._kind} into {self._kind}")
        check_u64(self._value + other._value, "funds value")
        self._value += other._value
        other._value = 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Funds):
            return NotImplemented
        return self._kind == other._kind and self._value == other._value

    def __repr__(self) -> str:
        return f"Funds({self._kind!r}, {self._value})"
