"""Tests for storage.sqlite_store — SQLite-backed regions and players."""

import pytest

from region_batch.errors import UnknownIdentity, WorldUnavailable
from region_batch.flags import default_registry
from region_batch.mutation import BatchExecutor
from region_batch.regions import Domain, Identity, Region
from region_batch.selection import ChildOf, MemberOnly
from region_batch.storage import (
    InMemoryRegionStore,
    SQLiteIdentityDirectory,
    SQLiteRegionStore,
    build_region_store,
)
from region_batch.storage.region_store import STORAGE_DIR_NAME

from conftest import ALEX, NOTCH, STEVE, populate


@pytest.fixture
def store(tmp_path):
    """Create a populated SQLiteRegionStore in a temp directory."""
    s = SQLiteRegionStore(tmp_path / "regions.db")
    populate(s)
    yield s
    s.close()


@pytest.fixture
def directory(tmp_path):
    d = SQLiteIdentityDirectory(tmp_path / "regions.db")
    for identity in (STEVE, ALEX, NOTCH):
        d.remember(identity)
    yield d
    d.close()


class TestSQLiteRegionStore:
    def test_worlds(self, store):
        assert store.worlds() == ["nether", "world"]

    def test_unknown_world(self, store):
        with pytest.raises(WorldUnavailable):
            store.regions_of("the_end")

    def test_empty_world(self, store):
        assert store.regions_of("nether") == {}

    def test_insertion_order(self, store):
        assert list(store.regions_of("world")) == [
            "town", "shop_1", "shop_2", "Town_Square", "house", "zone_2", "zone_4", "castle", "keep",
        ]

    def test_replacing_a_region_keeps_its_position(self, store):
        store.add_region("world", Region("shop_1", parent_id="town", flags={"pvp": "deny"}))
        regions = store.regions_of("world")
        assert list(regions)[1] == "shop_1"
        assert regions["shop_1"].flags == {"pvp": "deny"}

    def test_domains_roundtrip(self, store):
        town = store.get_region("world", "town")
        assert town.is_owner(STEVE)
        assert town.is_member_only(ALEX)
        assert store.get_region("world", "house").members == Domain(groups=frozenset({"builders"}))

    def test_parent_reference(self, store):
        shop = store.get_region("world", "shop_1")
        assert shop.parent_id == "town"
        assert store.get_region("world", "town").is_root

    def test_missing_parent_raises(self, store):
        with pytest.raises(ValueError, match="Parent"):
            store.add_region("world", Region("orphan", parent_id="nowhere"))
        assert "orphan" not in store.regions_of("world")

    def test_set_and_clear_flag(self, store):
        assert store.set_flag("world", "town", "heal-amount", 4)
        assert store.get_region("world", "town").flags == {"heal-amount": 4}
        assert store.set_flag("world", "town", "heal-amount", None)
        assert store.get_region("world", "town").flags == {}

    def test_set_flag_serializes_sets(self, store):
        store.set_flag("world", "town", "blocked-cmds", frozenset({"/tp", "/home"}))
        assert store.get_region("world", "town").flags["blocked-cmds"] == ["/home", "/tp"]

    def test_set_flag_on_missing_region(self, store):
        assert store.set_flag("world", "ghost", "pvp", "deny") is False

    def test_flags_persist_across_connections(self, tmp_path):
        first = SQLiteRegionStore(tmp_path / "p.db")
        first.add_region("world", Region("spawn", flags={"pvp": "deny"}))
        first.set_flag("world", "spawn", "greeting", "hello")
        first.close()

        second = SQLiteRegionStore(tmp_path / "p.db")
        assert second.get_region("world", "spawn").flags == {"pvp": "deny", "greeting": "hello"}
        second.close()


class TestSQLiteIdentityDirectory:
    def test_resolve(self, directory):
        steve = directory.resolve("STEVE")
        assert steve == STEVE

    def test_groups_roundtrip(self, directory):
        assert directory.resolve("alex").groups == frozenset({"Builders"})

    @pytest.mark.parametrize("name", [None, "", "Herobrine"])
    def test_unknown(self, directory, name):
        with pytest.raises(UnknownIdentity):
            directory.resolve(name)

    def test_prefers_online(self, directory):
        directory.remember(Identity("u-steve-2", "steve"))
        assert directory.resolve("Steve").unique_id == "u-steve"
        directory.set_online(["u-steve-2"])
        assert directory.resolve("Steve").unique_id == "u-steve-2"


class TestBatchOnSQLite:
    def test_batch_against_sqlite(self, store, directory):
        executor = BatchExecutor(store, directory, default_registry())
        result = executor.run_batch("world", ChildOf("town"), "pvp", STEVE, "deny")
        assert result.applied == 3
        assert store.get_region("world", "shop_2").flags == {"pvp": "deny"}

    def test_member_only_against_sqlite(self, store, directory):
        executor = BatchExecutor(store, directory, default_registry())
        assert executor.preview("world", MemberOnly("alex")).regionIds == ["town", "Town_Square", "house"]


class TestBuildRegionStore:
    def test_memory(self):
        assert isinstance(build_region_store("memory"), InMemoryRegionStore)

    def test_sqlite(self, tmp_path):
        s = build_region_store("sqlite", tmp_path)
        try:
            assert isinstance(s, SQLiteRegionStore)
            assert (tmp_path / STORAGE_DIR_NAME / "regions.db").exists()
            s.add_world("world")
            assert s.regions_of("world") == {}
        finally:
            s.close()

    def test_sqlite_needs_path(self):
        with pytest.raises(ValueError, match="path"):
            build_region_store("sqlite")

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="Unknown region store backend"):
            build_region_store("redis")

    def test_memory_store_all(self):
        s = build_region_store("memory")
        s.add_region("world", Region("a"))
        assert [r.id for r in s.regions_of("world").values()] == ["a"]


class TestSnapshots:
    @pytest.fixture(params=["memory", "sqlite"])
    def any_store(self, request, tmp_path):
        s = InMemoryRegionStore() if request.param == "memory" else SQLiteRegionStore(tmp_path / "snap.db")
        populate(s)
        yield s
        s.close()

    def test_snapshot_unaffected_by_later_set_flag(self, any_store):
        snapshot = any_store.regions_of("world")
        any_store.set_flag("world", "town", "greeting", "hi")
        assert snapshot["town"].flags == {}
        assert any_store.get_region("world", "town").flags == {"greeting": "hi"}

    def test_snapshot_unaffected_by_later_removal(self, any_store):
        any_store.set_flag("world", "keep", "pvp", "deny")
        snapshot = any_store.regions_of("world")
        any_store.set_flag("world", "keep", "pvp", None)
        assert snapshot["keep"].flags == {"pvp": "deny"}
