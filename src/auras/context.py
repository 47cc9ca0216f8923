"""Per-run lookup tables shared by the aggregator and resolver."""

from typing import Dict

from models import ItemRecord, SpellRecord


class RunContext:
    """
    Item and spell names seen during one pipeline run.

    Owned by the pipeline and discarded when the run ends. Names are
    write-once per id: the first record seen for an id wins.
    """

    def __init__(self):
        self.item_names: Dict[int, str] = {}
        self.spell_names: Dict[int, str] = {}

    def remember_item(self, item: ItemRecord) -> None:
        self.item_names.setdefault(item.id, item.name)

    def remember_spell(self, spell: SpellRecord) -> None:
        self.spell_names.setdefault(spell.id, spell.name)

    def item_label(self, item_id: int) -> str:
        """'Name (id)' if the name is known, else just the id."""
        name = self.item_names.get(item_id)
        return f"{name} ({item_id})" if name else str(item_id)
