"""Tests for revshare/core/asset.py — composite operations end to end."""

import pytest

from revshare import Funds, RevenueConfig, new_asset
from revshare.core.asset import AssetCap
from revshare.core.errors import (
    EmptyBatch,
    InsufficientBalance,
    InvalidJoin,
    NotBurnable,
    NothingToClaim,
    PendingRevenueOnDestroy,
    SupplyExceeded,
    Unauthorized,
    UnknownShare,
    ZeroAmount,
)
from revshare.core.events import RecordingSink
from revshare.core.invariants import check_all
from revshare.core.state import asset_to_dict


def _asset(cap: int = 1_000_000, burnable: bool = True):
    sink = RecordingSink()
    asset, admin = new_asset("ACME", cap, burnable=burnable, config=RevenueConfig(log_events=False), sink=sink)
    return asset, admin, sink


@pytest.fixture
def scenario():
    """Cap 1,000,000; A=7,500, B=2,500; deposit X 100,000."""
    asset, admin, sink = _asset()
    a = asset.mint(admin, 7_500)
    b = asset.mint(admin, 2_500)
    asset.deposit(admin, Funds("X", 100_000))
    return asset, admin, a, b


class TestScenario:
    def test_full_walkthrough(self, scenario):
        asset, admin, a, b = scenario
        assert asset.circulating_supply() == 10_000
        assert asset.registry.accumulator("X") == 10**13
        assert asset.pending("X", a) == 75_000
        assert asset.pending("X", b) == 25_000

        assert asset.claim("X", a).value() == 75_000
        assert asset.registry.vault_balance("X") == 25_000

        c = asset.mint(admin, 10_000)
        assert asset.circulating_supply() == 20_000
        assert asset.pending("X", c) == 0

        asset.deposit(admin, Funds("Y", 100_000))
        assert asset.registry.accumulator("Y") == 5 * 10**12
        assert asset.pending("Y", a) == 37_500
        assert asset.pending("Y", b) == 12_500
        assert asset.pending("Y", c) == 50_000
        assert asset.pending("X", b) == 25_000
        assert check_all(asset) == []

    def test_join_refused_until_claimed(self, scenario):
        asset, admin, a, b = scenario
        asset.claim("X", a)
        asset.mint(admin, 10_000)
        asset.deposit(admin, Funds("Y", 100_000))

        before = asset_to_dict(asset)
        with pytest.raises(PendingRevenueOnDestroy):
            asset.join(a, b)
        assert asset_to_dict(asset) == before

        asset.claim("X", b)
        asset.claim("Y", b)
        pending_a = asset.pending_all(a)
        asset.join(a, b)
        assert a.balance == 10_000
        assert not b.live
        assert asset.pending_all(a) == pending_a == {"X": 0, "Y": 37_500}
        assert check_all(asset) == []


class TestSplit:
    def test_split_off_share_inherits_no_pending(self, scenario):
        asset, admin, a, b = scenario
        new = asset.split(a, 2_500)
        assert (a.balance, new.balance) == (5_000, 2_500)
        assert asset.pending("X", a) == 75_000
        assert asset.pending("X", new) == 0
        assert asset.circulating_supply() == 10_000

    def test_later_deposits_follow_new_balances(self, scenario):
        asset, admin, a, b = scenario
        new = asset.split(a, 2_500)
        asset.deposit(admin, Funds("X", 10_000))
        assert asset.pending("X", a) == 80_000
        assert asset.pending("X", new) == 2_500
        assert asset.pending("X", b) == 27_500

    def test_invalid_split_has_no_effect(self, scenario):
        asset, admin, a, b = scenario
        before = asset_to_dict(asset)
        with pytest.raises(InsufficientBalance):
            asset.split(a, 7_500)
        with pytest.raises(ZeroAmount):
            asset.split(a, 0)
        assert asset_to_dict(asset) == before

    def test_split_many(self, scenario):
        asset, admin, a, b = scenario
        parts = asset.split_many(a, [1_000, 2_000, 500])
        assert [p.balance for p in parts] == [1_000, 2_000, 500]
        assert a.balance == 4_000
        assert asset.pending("X", a) == 75_000
        assert all(asset.pending("X", p) == 0 for p in parts)

    def test_split_many_all_or_nothing(self, scenario):
        asset, admin, a, b = scenario
        before = asset_to_dict(asset)
        with pytest.raises(InsufficientBalance):
            asset.split_many(a, [5_000, 2_500])
        with pytest.raises(EmptyBatch):
            asset.split_many(a, [])
        assert asset_to_dict(asset) == before


class TestJoin:
    def test_join_fresh_shares(self):
        asset, admin, _ = _asset()
        a, b = asset.mint(admin, 10), asset.mint(admin, 20)
        asset.join(a, b)
        assert a.balance == 30
        assert asset.circulating_supply() == 30
        with pytest.raises(UnknownShare):
            asset.pending_all(b)

    def test_self_join(self, scenario):
        asset, admin, a, b = scenario
        with pytest.raises(InvalidJoin):
            asset.join(a, a)

    def test_join_many(self):
        asset, admin, _ = _asset()
        a = asset.mint(admin, 10)
        others = [asset.mint(admin, n) for n in (1, 2, 3)]
        asset.join_many(a, others)
        assert a.balance == 16
        assert [s.id for s in asset.share_class.live_shares()] == [a.id]

    def test_join_many_all_or_nothing(self, scenario):
        asset, admin, a, b = scenario
        fresh = asset.mint(admin, 100)
        before = asset_to_dict(asset)
        # b still has pending X revenue.
        with pytest.raises(PendingRevenueOnDestroy):
            asset.join_many(a, [fresh, b])
        with pytest.raises(InvalidJoin):
            asset.join_many(a, [fresh, fresh])
        assert asset_to_dict(asset) == before


class TestBurn:
    def test_burn_settled_share(self, scenario):
        asset, admin, a, b = scenario
        asset.claim("X", b)
        assert asset.burn(admin, b) == 2_500
        assert asset.circulating_supply() == 7_500
        assert not asset.registry.has_record(b)

    def test_burn_with_pending(self, scenario):
        asset, admin, a, b = scenario
        with pytest.raises(PendingRevenueOnDestroy):
            asset.burn(admin, b)
        assert b.live
        assert asset.circulating_supply() == 10_000

    def test_not_burnable(self):
        asset, admin, _ = _asset(burnable=False)
        a = asset.mint(admin, 10)
        with pytest.raises(NotBurnable):
            asset.burn(admin, a)

    def test_supply_freed_by_burn_can_be_reminted(self):
        asset, admin, _ = _asset(cap=10)
        a = asset.mint(admin, 10)
        with pytest.raises(SupplyExceeded):
            asset.mint(admin, 1)
        asset.burn(admin, a)
        assert asset.mint(admin, 10).balance == 10


class TestAuthorization:
    def test_foreign_cap(self):
        asset, admin, _ = _asset()
        _, other_cap = new_asset("OTHER", 100, config=RevenueConfig(log_events=False))
        with pytest.raises(Unauthorized):
            asset.mint(other_cap, 10)
        with pytest.raises(Unauthorized):
            asset.deposit(AssetCap("OTHER"), Funds("X", 1))

    def test_cap_is_just_the_kind(self):
        asset, admin, _ = _asset()
        assert asset.mint(AssetCap("ACME"), 1).balance == 1


class TestClaimMultiple:
    def test_batch(self, scenario):
        asset, admin, a, b = scenario
        assert asset.claim_multiple("X", [a, b]).value() == 100_000

    def test_batch_with_settled_share(self, scenario):
        asset, admin, a, b = scenario
        asset.claim("X", a)
        with pytest.raises(NothingToClaim):
            asset.claim_multiple("X", [b, a])
        assert asset.pending("X", b) == 25_000

    def test_destroyed_share_in_batch(self, scenario):
        asset, admin, a, b = scenario
        asset.claim("X", b)
        asset.burn(admin, b)
        with pytest.raises(UnknownShare):
            asset.claim_multiple("X", [a, b])


class TestAmountTypes:
    def test_fractional_mint_has_no_effect(self):
        asset, admin, _ = _asset()
        asset.mint(admin, 10)
        asset.deposit(admin, Funds("X", 100))
        before = asset_to_dict(asset)
        with pytest.raises(TypeError):
            asset.mint(admin, 2.5)
        assert asset_to_dict(asset) == before
        assert asset.circulating_supply() == 10
        assert check_all(asset) == []

    def test_fractional_split_has_no_effect(self, scenario):
        asset, admin, a, b = scenario
        before = asset_to_dict(asset)
        with pytest.raises(TypeError):
            asset.split(a, 2.5)
        with pytest.raises(TypeError):
            asset.split_many(a, [100, 0.5])
        with pytest.raises(TypeError):
            asset.mint(admin, True)
        assert asset_to_dict(asset) == before
