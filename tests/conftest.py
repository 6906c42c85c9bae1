import pytest

from csv_utility.adapters import MemoryAssetStore
from csv_utility.schema import SchemaRegistry

from sample_records import ITEM_SCHEMA, Item, Prefab, Rarity


@pytest.fixture
def item_schema():
    return ITEM_SCHEMA


@pytest.fixture
def registry():
    return SchemaRegistry([ITEM_SCHEMA])


@pytest.fixture
def store():
    """Store holding one prefab and two items under Assets/Items."""
    s = MemoryAssetStore()
    sword = Prefab("sword")
    s.create(sword, "Assets/Prefabs/Sword.asset", "Prefab")
    s.create(Item("Sword", 120, 3.5, Rarity.RARE, False, sword), "Assets/Items/Sword.asset", "Item")
    s.create(Item('Potion, "large"', 15, 0.25, Rarity.COMMON, True, None), "Assets/Items/Potion.asset", "Item")
    return s
