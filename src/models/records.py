"""Item and spell records as returned by the record API and stored in the caches.

Remote field names (``ID``, ``Name``, ``Spells``, ``Effects``...) are kept as
aliases so a cached record serializes back to the same shape it was fetched
in. Fields we don't use are preserved via ``extra="allow"``.
"""

from enum import Enum
from typing import List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator


class RecordKind(str, Enum):
    """Kind of remote record; the value is the API path segment."""

    ITEM = "item"
    SPELL = "spell"


class SpellRef(BaseModel):
    """A spell granted by an item."""

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    spell_id: int = Field(alias="SpellID")


class Effect(BaseModel):
    """One effect of a spell.

    ``Aura`` is an aura type id on the remote side (0 = none), tests and older
    caches may use plain booleans. ``AffectedSpell`` is 0 or missing when the
    effect does not chain into another spell.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    aura: Optional[Union[bool, int]] = Field(default=None, alias="Aura")
    affected_spell: Optional[int] = Field(default=None, alias="AffectedSpell")

    @property
    def grants_aura(self) -> bool:
        return bool(self.aura)

    @property
    def chained_spell_id(self) -> Optional[int]:
        """Spell this effect triggers or buffs, None if it doesn't chain."""
        return self.affected_spell or None


class ItemRecord(BaseModel):
    """An item snapshot (immutable once fetched)."""

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    id: int = Field(alias="ID")
    name: str = Field(default="", alias="Name")
    spells: List[SpellRef] = Field(default_factory=list, alias="Spells")

    @field_validator("spells", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        """The API sends null for items without spells."""
        return [] if v is None else v

    @property
    def granted_spell_ids(self) -> List[int]:
        return [ref.spell_id for ref in self.spells]


class SpellRecord(BaseModel):
    """A spell snapshot (immutable once fetched)."""

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    id: int = Field(alias="ID")
    name: str = Field(default="", alias="Name")
    effects: List[Effect] = Field(default_factory=list, alias="Effects")

    @field_validator("effects", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return [] if v is None else v

    @property
    def chained_spell_ids(self) -> List[int]:
        """Affected spell ids in effect order (may repeat)."""
        return [e.chained_spell_id for e in self.effects if e.chained_spell_id]


Record = Union[ItemRecord, SpellRecord]

RECORD_MODELS = {
    RecordKind.ITEM: ItemRecord,
    RecordKind.SPELL: SpellRecord,
}
