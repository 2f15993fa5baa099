"""Scaled integer arithmetic for the revenue registry.

Every function is stateless and operates on plain Python ints. Python ints are
unbounded, so the fixed-width domains (u64 amounts, u256 accumulators) are
enforced explicitly and an overflow is reported instead of wrapping.

Rounding is always floor (`//`) on non-negative operands.
"""

from __future__ import annotations

from .errors import ArithmeticOverflow, DivisionByZero

# Reward-per-share scale factor.
#
# Per-deposit rounding loss is below one base unit per share for circulating
# supplies up to ~1e9; beyond that, deposits smaller than supply / 1e9 add
# nothing to the accumulator and stay in the vault as dust.
PRECISION: int = 1_000_000_000

U64_MAX: int = (1 << 64) - 1
U256_MAX: int = (1 << 256) - 1


def check_int(value: int, what: str = "value") -> None:
    """Raise ``TypeError`` unless *value* is a plain int (bools excluded)."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{what} must be an int: {value!r}")


def check_u64(value: int, what: str = "value") -> int:
    """Return *value* if it fits in u64, else raise ``ArithmeticOverflow``."""
    check_int(value, what)
    if value < 0 or value > U64_MAX:
        raise ArithmeticOverflow(f"{what} outside u64: {value}")
    return value


def check_u256(value: int, what: str = "value") -> int:
    """Return *value* if it fits in u256, else raise ``ArithmeticOverflow``."""
    check_int(value, what)
    if value < 0 or value > U256_MAX:
        raise ArithmeticOverflow(f"{what} outside u256: {value}")
    return value


def acc_delta(amount: int, circulating_supply: int) -> int:
    """Accumulator increment for a deposit: ``amount * PRECISION // supply``."""
    if circulating_supply == 0:
        raise DivisionByZero("deposit against zero circulating supply")
    return check_u256(amount * PRECISION, "amount * PRECISION") // circulating_supply


def accrued(acc: int, balance: int) -> int:
    """Total reward attributable to *balance* at accumulator *acc*.

    The product is formed in the wide type before dividing by ``PRECISION``.
    """
    return check_u256(acc * balance, "acc * balance") // PRECISION


def truncate_u64(value: int) -> int:
    """Narrow a non-negative int to u64 by dropping high bits."""
    return value & U64_MAX
