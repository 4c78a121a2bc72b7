"""Shared fixtures."""
import pytest

from citesplice.config import Config
from citesplice.providers.item_store import ItemStore

from tests.builders import ITEMS, ScriptedEngine, write_items


@pytest.fixture
def store():
    return ItemStore(ITEMS)


@pytest.fixture
def engine(store):
    return ScriptedEngine(store)


@pytest.fixture
def bib_path(tmp_path):
    return write_items(tmp_path / "refs.json")


@pytest.fixture
def config(tmp_path):
    return Config(locale_dir=str(tmp_path))
