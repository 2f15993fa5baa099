"""Sign-magnitude integer over the u256 domain.

Per-share debt goes negative when a balance shrinks while revenue is pending
(see ``RevenueRegistry.decrease``). The registry keeps debts as
``SignedFixedInt`` so that every magnitude stays inside the unsigned wide type
and the sign is reattached only after the unsigned arithmetic is done.

Zero is always non-negative.
"""

from __future__ import annotations

from dataclasses import dataclass

from .errors import RevenueInvariantError
from .math import check_u256, truncate_u64


@dataclass(frozen=True)
class SignedFixedInt:
    magnitude: int = 0
    negative: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.magnitude, int) or isinstance(self.magnitude, bool):
            raise TypeError("magnitude must be an int")
        check_u256(self.magnitude, "magnitude")
        if self.negative and self.magnitude == 0:
            raise ValueError("zero must be non-negative")

    # -- constructors --------------------------------------------------------

    @classmethod
    def zero(cls) -> SignedFixedInt:
        return cls(0, False)

    @classmethod
    def from_unsigned(cls, magnitude: int) -> SignedFixedInt:
        return cls(magnitude, False)

    @classmethod
    def from_int(cls, value: int) -> SignedFixedInt:
        """Build from a Python signed int (snapshot format)."""
        if value < 0:
            return cls(-value, True)
        return cls(value, False)

    @classmethod
    def _make(cls, magnitude: int, negative: bool) -> SignedFixedInt:
        return cls(magnitude, negative and magnitude != 0)

    # -- predicates ----------------------------------------------------------

    def is_zero(self) -> bool:
        return self.magnitude == 0

    def is_positive(self) -> bool:
        return self.magnitude != 0 and not self.negative

    def is_negative(self) -> bool:
        return self.negative

    # -- arithmetic ----------------------------------------------------------

    def abs(self) -> int:
        return self.magnitude

    def neg(self) -> SignedFixedInt:
        return SignedFixedInt._make(self.magnitude, not self.negative)

    def add(self, other: SignedFixedInt) -> SignedFixedInt:
        if self.negative == other.negative:
            return SignedFixedInt._make(self.magnitude + other.magnitude, self.negative)
        # Opposite signs: subtract the smaller magnitude from the larger one.
        if self.magnitude >= other.magnitude:
            return SignedFixedInt._make(self.magnitude - other.magnitude, self.negative)
        return SignedFixedInt._make(other.magnitude - self.magnitude, other.negative)

    def sub(self, other: SignedFixedInt) -> SignedFixedInt:
        return self.add(other.neg())

    def __add__(self, other: SignedFixedInt) -> SignedFixedInt:
        return self.add(other)

    def __sub__(self, other: SignedFixedInt) -> SignedFixedInt:
        return self.sub(other)

    def __neg__(self) -> SignedFixedInt:
        return self.neg()

    # -- conversions ---------------------------------------------------------

    def to_unsigned(self) -> int:
        """Magnitude of a non-negative value; a negative value is a broken invariant."""
        if self.negative:
            raise RevenueInvariantError(["signed_value_negative"])
        return self.magnitude

    def to_u64(self) -> int:
        """Truncating narrow to u64. Only for final amounts known to be non-negative."""
        return truncate_u64(self.to_unsigned())

    def to_int(self) -> int:
        return -self.magnitude if self.negative else self.magnitude

    def __repr__(self) -> str:
        return f"SignedFixedInt({self.to_int()})"
