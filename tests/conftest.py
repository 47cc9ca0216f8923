"""
Shared pytest fixtures for aura map tests.
"""

import pytest
from pathlib import Path

from caches import RecordStore
from exceptions import FetchError
from models import RecordKind, RECORD_MODELS


def pytest_addoption(parser):
    """Add --full flag to run entire test suite"""
    parser.addoption(
        "--full",
        action="store_true",
        default=False,
        help="Run full test suite (including integration tests against live sites)"
    )


def pytest_configure(config):
    """Configure test run based on flags"""
    if config.getoption("--full"):
        # Only clear default marker if no explicit -m flag was provided
        if config.option.markexpr == "smoke or (not integration and not slow)":
            config.option.markexpr = ""


# Project root
PROJECT_ROOT = Path(__file__).parent.parent


class FakeFetcher:
    """In-memory record source standing in for the record API.

    Ids not present in ``items``/``spells`` raise FetchError, as do ids listed
    in ``fail``. Every call is recorded in ``calls`` as (kind, id).
    """

    def __init__(self, items=None, spells=None, fail=()):
        self.records = {
            RecordKind.ITEM: {raw["ID"]: raw for raw in (items or [])},
            RecordKind.SPELL: {raw["ID"]: raw for raw in (spells or [])},
        }
        self.fail = set(fail)
        self.calls = []

    def fetch(self, kind, record_id):
        kind = RecordKind(kind)
        self.calls.append((kind.value, record_id))
        raw = self.records[kind].get(record_id)
        if raw is None or record_id in self.fail:
            raise FetchError(kind.value, record_id, "Request failed with status code 404")
        return RECORD_MODELS[kind].model_validate(raw)

    def fetched(self, kind):
        return [record_id for k, record_id in self.calls if k == kind]


def item(item_id, name="Item", spells=()):
    """Raw item record in the record API's shape."""
    return {"ID": item_id, "Name": name, "Spells": [{"SpellID": s} for s in spells]}


def spell(spell_id, name="Spell", effects=()):
    """Raw spell record; ``effects`` are (aura, affected_spell) pairs."""
    return {
        "ID": spell_id,
        "Name": name,
        "Effects": [{"Aura": aura, "AffectedSpell": affected} for aura, affected in effects],
    }


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def cache_dir(tmp_path):
    """Empty cache root, cleaned up by pytest."""
    path = tmp_path / "cache"
    path.mkdir()
    return path


@pytest.fixture
def store(cache_dir):
    """RecordStore over an empty cache root."""
    return RecordStore(cache_dir)


@pytest.fixture
def make_item():
    """Factory for raw item records."""
    return item


@pytest.fixture
def make_spell():
    """Factory for raw spell records."""
    return spell


@pytest.fixture
def fake_fetcher():
    """Factory for FakeFetcher instances."""
    return FakeFetcher
