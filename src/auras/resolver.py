"""Collects the auras reachable from a spell through its effect chain."""

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Set, Union

from auras.constants import EXCLUDED_SPELL_NAMES
from auras.context import RunContext
from exceptions import MissingReferenceWarning
from models import SpellRecord

logger = logging.getLogger(__name__)

AuraMap = Dict[int, str]


class AuraResolver:
    """
    Resolves auras against one category's cached spells.

    Usage:
        resolver = AuraResolver(spell_cache.index(), category="potions")
        item_auras = {}
        for spell_id in item.granted_spell_ids:
            resolver.resolve(spell_id, item_auras)
    """

    def __init__(
        self,
        spells: Union[Mapping[int, SpellRecord], Iterable[SpellRecord]],
        context: Optional[RunContext] = None,
        category: str = "",
        excluded_names: frozenset = EXCLUDED_SPELL_NAMES
    ):
        """
        Args:
            spells: Category spells, either indexed by id or as a sequence
            context: Run context to record spell names into
            category: Category name, used in log messages
            excluded_names: Spell names never reported as auras
        """
        if isinstance(spells, Mapping):
            self.spells = dict(spells)
        else:
            self.spells = {spell.id: spell for spell in spells}
        self.context = context
        self.category = category
        self.excluded_names = excluded_names
        self.missing_spell_ids: List[int] = []

    def resolve(
        self,
        spell_id: int,
        auras: Optional[AuraMap] = None,
        visited: Optional[Set[int]] = None
    ) -> Optional[AuraMap]:
        """
        Collect every aura-granting spell reachable from ``spell_id``.

        An aura entry is keyed by the id of the spell that carries the
        aura-granting effect. ``auras`` and ``visited`` are shared by the whole
        traversal; pass the same ``auras`` for every spell an item grants to
        get the item's union. ``visited`` starts empty for each top-level call.

        Args:
            spell_id: Spell to start from
            auras: Output mapping to add to (new one if None)
            visited: Spells already processed in this traversal

        Returns:
            ``auras``, or None if ``spell_id`` was already visited. Callers
            treat None like an empty mapping.
        """
        if auras is None:
            auras = {}
        if visited is None:
            visited = set()

        if spell_id in visited:
            return None

        root = self._enter(spell_id, visited)
        if root is None:
            return auras

        # (spell, remaining effects); a chained spell is finished before the
        # next effect of its parent is looked at
        stack = [(root, iter(root.effects))]
        while stack:
            spell, effects = stack[-1]
            effect = next(effects, None)
            if effect is None:
                stack.pop()
                continue

            if effect.grants_aura and spell.name not in self.excluded_names:
                auras[spell.id] = spell.name

            chained_id = effect.chained_spell_id
            if chained_id and chained_id not in visited:
                chained = self._enter(chained_id, visited)
                if chained is not None:
                    stack.append((chained, iter(chained.effects)))

        return auras

    def _enter(self, spell_id: int, visited: Set[int]) -> Optional[SpellRecord]:
        """Look up and mark a spell visited; None (and a warning) if it isn't cached."""
        spell = self.spells.get(spell_id)
        if spell is None:
            self._report_missing(spell_id)
            return None

        visited.add(spell_id)
        if self.context is not None:
            self.context.remember_spell(spell)
        return spell

    def _report_missing(self, spell_id: int) -> None:
        logger.warning(str(MissingReferenceWarning(spell_id, self.category)))
        if spell_id not in self.missing_spell_ids:
            self.missing_spell_ids.append(spell_id)


def resolve_auras(
    spell_id: int,
    spells: Union[Mapping[int, SpellRecord], Iterable[SpellRecord]],
    auras: Optional[AuraMap] = None,
    visited: Optional[Set[int]] = None
) -> Optional[AuraMap]:
    """Convenience wrapper around AuraResolver.resolve()."""
    return AuraResolver(spells).resolve(spell_id, auras, visited)
