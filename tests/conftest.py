"""
Shared test fixtures.

The ``store`` fixture world "world" looks like this:

    town            owners: steve          members: alex
      shop_1        owners: alex
      shop_2                               members: steve
      Town_Square                          members: group builders
    house                                  members: group builders
    zone_2
    zone_4
    castle          owners: alex           members: steve
      keep          owners: steve

World "nether" exists but has no regions.
"""

from typing import Optional

import pytest

from region_batch.flags import default_registry
from region_batch.identity import InMemoryIdentityDirectory
from region_batch.mutation import BatchExecutor
from region_batch.regions import Domain, Identity, Region
from region_batch.storage import InMemoryRegionStore

STEVE = Identity("u-steve", "Steve", online=True)
ALEX = Identity("u-alex", "Alex", groups=frozenset({"Builders"}))
NOTCH = Identity("u-notch", "Notch")


def make_region(
    region_id: str,
    parent: Optional[str] = None,
    owners: tuple = (),
    members: tuple = (),
    groups: tuple = (),
) -> Region:
    return Region(
        id=region_id,
        parent_id=parent,
        owners=Domain.of_players(*owners),
        members=Domain(unique_ids=frozenset(i.unique_id for i in members), groups=frozenset(groups)),
    )


def populate(store, world: str = "world") -> None:
    store.add_world("nether")
    store.add_region(world, make_region("town", owners=(STEVE,), members=(ALEX,)))
    store.add_region(world, make_region("shop_1", parent="town", owners=(ALEX,)))
    store.add_region(world, make_region("shop_2", parent="town", members=(STEVE,)))
    store.add_region(world, make_region("Town_Square", parent="town", groups=("builders",)))
    store.add_region(world, make_region("house", groups=("builders",)))
    store.add_region(world, make_region("zone_2"))
    store.add_region(world, make_region("zone_4"))
    store.add_region(world, make_region("castle", owners=(ALEX,), members=(STEVE,)))
    store.add_region(world, make_region("keep", parent="castle", owners=(STEVE,)))


@pytest.fixture
def resolver():
    return InMemoryIdentityDirectory([STEVE, ALEX, NOTCH])


@pytest.fixture
def store():
    s = InMemoryRegionStore()
    populate(s)
    return s


@pytest.fixture
def registry():
    return default_registry()


@pytest.fixture
def executor(store, resolver, registry):
    return BatchExecutor(store, resolver, registry)


@pytest.fixture
def set_flag_calls(store, monkeypatch):
    """Record every set_flag call made on ``store``."""
    calls = []
    original = store.set_flag

    def spy(world, region_id, flag_key, value):
        calls.append((world, region_id, flag_key, value))
        return original(world, region_id, flag_key, value)

    monkeypatch.setattr(store, "set_flag", spy)
    return calls
