"""Tests for caches.spell_cache module."""

import json

from caches import SpellCache
from models import ItemRecord, RecordKind, SpellRecord


def items_from(raw_items):
    return [ItemRecord.model_validate(r) for r in raw_items]


class TestSpellCacheExpand:

    def test_follows_affected_spells_depth_first(self, store, fake_fetcher, make_item, make_spell):
        # 1 -> (2 -> 4), 3
        fetcher = fake_fetcher(spells=[
            make_spell(1, effects=[(0, 2), (0, 3)]),
            make_spell(2, effects=[(0, 4)]),
            make_spell(3),
            make_spell(4),
        ])

        cache = SpellCache("potions", store, fetcher)
        cache.load()
        fetched = cache.expand(items_from([make_item(100, spells=[1])]))

        assert fetched == [1, 2, 4, 3]
        assert fetcher.fetched("spell") == [1, 2, 4, 3]

    def test_items_processed_in_order(self, store, fake_fetcher, make_item, make_spell):
        fetcher = fake_fetcher(spells=[make_spell(5), make_spell(6), make_spell(7)])

        cache = SpellCache("potions", store, fetcher)
        cache.load()
        cache.expand(items_from([make_item(1, spells=[7, 5]), make_item(2, spells=[6, 5])]))

        assert fetcher.fetched("spell") == [7, 5, 6]

    def test_cycle_terminates(self, store, fake_fetcher, make_item, make_spell):
        fetcher = fake_fetcher(spells=[
            make_spell(30, effects=[(1, 31)]),
            make_spell(31, effects=[(1, 30)]),
        ])

        cache = SpellCache("potions", store, fetcher)
        cache.load()
        cache.expand(items_from([make_item(1, spells=[30])]))

        assert fetcher.fetched("spell") == [30, 31]
        assert cache.ids == frozenset({30, 31})

    def test_self_reference_terminates(self, store, fake_fetcher, make_item, make_spell):
        fetcher = fake_fetcher(spells=[make_spell(8, effects=[(1, 8), (0, 8)])])

        cache = SpellCache("potions", store, fetcher)
        cache.load()
        cache.expand(items_from([make_item(1, spells=[8])]))

        assert fetcher.fetched("spell") == [8]

    def test_cached_spell_chain_is_followed(self, store, fake_fetcher, make_item, make_spell):
        store.save("potions", RecordKind.SPELL, [SpellRecord.model_validate(make_spell(1, effects=[(0, 2)]))])
        fetcher = fake_fetcher(spells=[make_spell(1), make_spell(2)])

        cache = SpellCache("potions", store, fetcher)
        cache.load()
        fetched = cache.expand(items_from([make_item(1, spells=[1])]))

        assert fetched == [2]
        assert fetcher.fetched("spell") == [2]
        assert cache.ids == frozenset({1, 2})

    def test_failed_chained_spell_retried_under_cached_parent(self, store, fake_fetcher, make_item, make_spell):
        items = items_from([make_item(1, spells=[1])])
        spells = [make_spell(1, effects=[(0, 2)]), make_spell(2, effects=[(1, 0)])]

        first = SpellCache("potions", store, fake_fetcher(spells=spells, fail={2}))
        first.load()
        first.expand(items)
        assert first.ids == frozenset({1})

        fetcher = fake_fetcher(spells=spells)
        second = SpellCache("potions", store, fetcher)
        second.load()
        second.expand(items)

        assert fetcher.fetched("spell") == [2]
        assert second.ids == frozenset({1, 2})

    def test_fully_cached_chain_fetches_nothing(self, store, fake_fetcher, make_item, make_spell):
        store.save("potions", RecordKind.SPELL, [
            SpellRecord.model_validate(make_spell(1, effects=[(0, 2)])),
            SpellRecord.model_validate(make_spell(2, effects=[(0, 1)])),
        ])
        fetcher = fake_fetcher()

        cache = SpellCache("potions", store, fetcher)
        cache.load()
        cache.expand(items_from([make_item(1, spells=[1, 2])]))

        assert fetcher.calls == []

    def test_failed_spell_abandons_branch(self, store, fake_fetcher, make_item, make_spell, caplog):
        fetcher = fake_fetcher(
            spells=[make_spell(1, effects=[(0, 2), (0, 3)]), make_spell(2, effects=[(0, 4)]), make_spell(3), make_spell(4)],
            fail={2},
        )

        cache = SpellCache("potions", store, fetcher)
        cache.load()
        cache.expand(items_from([make_item(1, spells=[1])]))

        assert cache.ids == frozenset({1, 3})
        assert cache.failed_ids == [2]
        assert "Failed fetching spell 2" in caplog.text

    def test_persisted_sorted(self, store, cache_dir, fake_fetcher, make_item, make_spell):
        fetcher = fake_fetcher(spells=[make_spell(9, effects=[(0, 3)]), make_spell(3, effects=[(0, 5)]), make_spell(5)])

        cache = SpellCache("potions", store, fetcher)
        cache.load()
        cache.expand(items_from([make_item(1, spells=[9])]))

        written = json.loads((cache_dir / "potions" / "spells.json").read_text(encoding="utf-8"))
        assert [r["ID"] for r in written] == [3, 5, 9]

    def test_index_lookup(self, store, fake_fetcher, make_item, make_spell):
        fetcher = fake_fetcher(spells=[make_spell(1, "Haste Boost")])

        cache = SpellCache("potions", store, fetcher)
        cache.load()
        cache.expand(items_from([make_item(1, spells=[1])]))

        assert cache.index()[1].name == "Haste Boost"
        assert cache.get(1).name == "Haste Boost"
        assert cache.get(2) is None
        assert cache.spell_count == 1
