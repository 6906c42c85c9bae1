from dataclasses import dataclass
from enum import Enum
from typing import Optional

from csv_utility.schema import FieldKind, FieldSpec, RecordSchema


class Rarity(Enum):
    COMMON = 0
    RARE = 1
    EPIC = 2


@dataclass
class Prefab:
    label: str


@dataclass
class Item:
    name: str = ""
    price: int = 0
    weight: float = 0.0
    rarity: Rarity = Rarity.COMMON
    stackable: bool = False
    prefab: Optional[Prefab] = None


ITEM_SCHEMA = RecordSchema(
    type_name="Item",
    factory=Item,
    fields=[
        FieldSpec.attribute("name", FieldKind.STRING),
        FieldSpec.attribute("price", FieldKind.INTEGER),
        FieldSpec.attribute("weight", FieldKind.FLOAT),
        FieldSpec.attribute("rarity", FieldKind.ENUM, enum_type=Rarity),
        FieldSpec.attribute("stackable", FieldKind.BOOLEAN),
        FieldSpec.attribute("prefab", FieldKind.ASSET_REF, asset_type="Prefab"),
    ],
)


