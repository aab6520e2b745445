"""
Tests for the region model.

Tests cover:
- Domain membership tiers (unique id, name, group)
- Region owner / member predicates
- Validation of identifiers and parents
"""

import pytest

from region_batch.regions import Domain, Identity, Region

STEVE = Identity("u-steve", "Steve")
ALEX = Identity("u-alex", "Alex", groups=frozenset({"Builders", "mods"}))


class TestDomain:
    def test_unique_id_tier(self):
        domain = Domain.of_players(STEVE)
        assert domain.contains(STEVE)
        assert not domain.contains(ALEX)

    def test_name_tier_is_case_insensitive(self):
        domain = Domain(player_names=frozenset({"STEVE"}))
        assert domain.contains(STEVE)

    def test_group_tier_is_case_insensitive(self):
        domain = Domain(groups=frozenset({"builders"}))
        assert domain.contains(ALEX)
        assert not domain.contains(STEVE)

    def test_empty_contains_nobody(self):
        assert not Domain().contains(STEVE)

    def test_dict_roundtrip(self):
        domain = Domain(unique_ids=frozenset({"a"}), player_names=frozenset({"Bob"}), groups=frozenset({"G"}))
        again = Domain.from_dict(domain.to_dict())
        assert again == domain

    def test_from_none(self):
        assert Domain.from_dict(None) == Domain()


class TestIdentity:
    def test_empty_name_raises(self):
        with pytest.raises(ValueError, match="name"):
            Identity("u-1", "")


class TestRegion:
    def test_owner_is_member(self):
        region = Region("r", owners=Domain.of_players(STEVE))
        assert region.is_owner(STEVE)
        assert region.is_member(STEVE)
        assert not region.is_member_only(STEVE)

    def test_member_only(self):
        region = Region("r", members=Domain.of_players(STEVE))
        assert not region.is_owner(STEVE)
        assert region.is_member(STEVE)
        assert region.is_member_only(STEVE)

    def test_owner_and_member_is_not_member_only(self):
        region = Region("r", owners=Domain.of_players(STEVE), members=Domain.of_players(STEVE))
        assert not region.is_member_only(STEVE)

    def test_root(self):
        assert Region("r").is_root
        assert not Region("c", parent_id="r").is_root

    def test_empty_id_raises(self):
        with pytest.raises(ValueError, match="empty"):
            Region("")

    def test_self_parent_raises(self):
        with pytest.raises(ValueError, match="own parent"):
            Region("loop", parent_id="loop")
