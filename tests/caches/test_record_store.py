"""Tests for caches.record_store module."""

import json

import pytest

from caches import RecordStore
from exceptions import StoreError
from models import CategoryListing, ItemRecord, RecordKind, SpellRecord


class TestLoad:
    """load() never fails: anything unusable is an empty cache."""

    def test_missing_file_is_empty(self, store):
        assert store.load("potions", RecordKind.ITEM) == []

    def test_corrupt_json_is_empty(self, store, cache_dir, caplog):
        (cache_dir / "potions").mkdir()
        (cache_dir / "potions" / "items.json").write_text("[{not json", encoding="utf-8")

        assert store.load("potions", RecordKind.ITEM) == []
        assert "Ignoring unreadable cache" in caplog.text

    def test_non_list_is_empty(self, store, cache_dir):
        (cache_dir / "potions").mkdir()
        (cache_dir / "potions" / "spells.json").write_text('{"ID": 1}', encoding="utf-8")

        assert store.load("potions", RecordKind.SPELL) == []
        assert store.needs_rewrite("potions", RecordKind.SPELL)

    def test_invalid_records_dropped(self, store, cache_dir, caplog):
        (cache_dir / "potions").mkdir()
        (cache_dir / "potions" / "items.json").write_text(
            json.dumps([{"ID": 1, "Name": "Good"}, {"Name": "No id"}]), encoding="utf-8"
        )

        items = store.load("potions", RecordKind.ITEM)

        assert [i.id for i in items] == [1]
        assert "Dropping invalid item record" in caplog.text
        assert store.needs_rewrite("potions", RecordKind.ITEM)

    def test_returns_models_by_kind(self, store, make_item, make_spell):
        store.save("flasks", RecordKind.ITEM, [ItemRecord.model_validate(make_item(1, spells=[2]))])
        store.save("flasks", RecordKind.SPELL, [SpellRecord.model_validate(make_spell(2))])

        assert isinstance(store.load("flasks", RecordKind.ITEM)[0], ItemRecord)
        assert isinstance(store.load("flasks", RecordKind.SPELL)[0], SpellRecord)

    def test_save_clears_rewrite_mark(self, store, cache_dir):
        (cache_dir / "potions").mkdir()
        (cache_dir / "potions" / "items.json").write_text("[{not json", encoding="utf-8")
        store.load("potions", RecordKind.ITEM)

        store.save("potions", RecordKind.ITEM, [])

        assert not store.needs_rewrite("potions", RecordKind.ITEM)

    def test_missing_file_needs_no_rewrite(self, store):
        store.load("potions", RecordKind.ITEM)

        assert not store.needs_rewrite("potions", RecordKind.ITEM)


class TestSave:

    def test_round_trip_preserves_order_and_fields(self, store, cache_dir):
        raw = [{"ID": 2, "Name": "B", "Spells": [], "Quality": 1}, {"ID": 1, "Name": "A", "Spells": []}]
        store.save("potions", RecordKind.ITEM, [ItemRecord.model_validate(r) for r in raw])

        written = json.loads((cache_dir / "potions" / "items.json").read_text(encoding="utf-8"))

        assert [r["ID"] for r in written] == [2, 1]
        assert written[0]["Quality"] == 1
        assert [i.id for i in store.load("potions", RecordKind.ITEM)] == [2, 1]

    def test_categories_are_separate(self, store, make_spell):
        store.save("potions", RecordKind.SPELL, [SpellRecord.model_validate(make_spell(7, "Potion"))])

        assert store.load("elixirs", RecordKind.SPELL) == []

    def test_unwritable_raises_store_error(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        store = RecordStore(blocker)

        with pytest.raises(StoreError, match="Failed to write"):
            store.save("potions", RecordKind.ITEM, [])


class TestOutput:

    def test_keys_serialized_as_strings(self, store, cache_dir):
        store.save_output("potions", {100: {10: "Haste Boost"}})

        written = json.loads((cache_dir / "potions" / "output.json").read_text(encoding="utf-8"))

        assert written == {"100": {"10": "Haste Boost"}}


class TestListingFiles:

    def test_page_round_trip(self, store):
        store.save_page("potions", "<html>var listviewitems = [];</html>")

        assert store.load_page("potions") == "<html>var listviewitems = [];</html>"

    def test_missing_page(self, store):
        assert store.load_page("potions") is None

    def test_listing_written_with_aliases(self, store, cache_dir):
        store.save_listing("potions", CategoryListing(patch="8.2.0", date=1, item_ids=[1, 2]))

        written = json.loads((cache_dir / "potions" / "potions.json").read_text(encoding="utf-8"))
        assert written == {"patch": "8.2.0", "date": 1, "itemIDs": [1, 2]}
