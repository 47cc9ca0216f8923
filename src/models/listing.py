"""Category listings and per-category run results."""

from typing import Dict, List
from pydantic import BaseModel, ConfigDict, Field


class CategoryListing(BaseModel):
    """Item ids currently listed for a category, with provenance."""

    model_config = ConfigDict(populate_by_name=True)

    patch: str
    date: int  # milliseconds since epoch
    item_ids: List[int] = Field(default_factory=list, alias="itemIDs")


class CategoryResult(BaseModel):
    """Result from CategoryAggregator.process()."""

    category: str

    # item id -> {aura spell id -> spell name}; only items with auras
    auras: Dict[int, Dict[int, str]] = Field(default_factory=dict)

    new_item_ids: List[int] = Field(default_factory=list)
    new_spell_ids: List[int] = Field(default_factory=list)
    failed_item_ids: List[int] = Field(default_factory=list)
    failed_spell_ids: List[int] = Field(default_factory=list)
    items_without_auras: List[int] = Field(default_factory=list)
    missing_spell_ids: List[int] = Field(default_factory=list)
