"""Tests for revshare/core/signed.py — SignedFixedInt."""

import pytest

from revshare.core.errors import ArithmeticOverflow, RevenueInvariantError
from revshare.core.math import U64_MAX, U256_MAX
from revshare.core.signed import SignedFixedInt


def s(v: int) -> SignedFixedInt:
    return SignedFixedInt.from_int(v)


class TestConstruction:
    def test_zero(self):
        z = SignedFixedInt.zero()
        assert z.is_zero()
        assert not z.is_positive()
        assert not z.is_negative()

    def test_from_unsigned(self):
        v = SignedFixedInt.from_unsigned(7)
        assert v.is_positive()
        assert v.abs() == 7

    def test_negative_zero_rejected(self):
        with pytest.raises(ValueError):
            SignedFixedInt(0, True)

    def test_magnitude_bounded(self):
        with pytest.raises(ArithmeticOverflow):
            SignedFixedInt.from_unsigned(U256_MAX + 1)

    def test_frozen(self):
        v = SignedFixedInt.zero()
        with pytest.raises(AttributeError):
            v.magnitude = 3  # type: ignore


class TestArithmetic:
    @pytest.mark.parametrize(
        "a,b",
        [(5, 3), (3, 5), (-5, 3), (5, -3), (-5, -3), (0, -4), (4, -4)],
    )
    def test_add_sub_match_int(self, a, b):
        assert (s(a) + s(b)).to_int() == a + b
        assert (s(a) - s(b)).to_int() == a - b

    def test_cancellation_normalizes_zero(self):
        r = s(-9) + s(9)
        assert r == SignedFixedInt.zero()
        assert not r.negative

    def test_neg(self):
        assert (-s(4)).to_int() == -4
        assert (-SignedFixedInt.zero()) == SignedFixedInt.zero()


class TestConversions:
    def test_to_unsigned(self):
        assert s(12).to_unsigned() == 12

    def test_to_unsigned_negative_fails(self):
        with pytest.raises(RevenueInvariantError):
            s(-1).to_unsigned()

    def test_to_u64_truncates(self):
        assert SignedFixedInt.from_unsigned(U64_MAX + 2).to_u64() == 1

    def test_to_int_round_trip(self):
        for v in (0, 1, -1, 10**30, -(10**30)):
            assert SignedFixedInt.from_int(v).to_int() == v
