"""
Declared record schemas.

A schema lists the exported fields of one record type explicitly: each field
has a name (its CSV column), a kind that decides how text is parsed and
formatted, and a getter/setter pair.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Type

from .errors import ConversionError, UnknownRecordType
from .ports import AssetStorePort

_TRUE_WORDS = ("true", "1", "yes")
_FALSE_WORDS = ("false", "0", "no")


class FieldKind(str, Enum):
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    ENUM = "enum"
    ASSET_REF = "asset_ref"


@dataclass(frozen=True)
class FieldSpec:
    name: str
    kind: FieldKind
    getter: Callable[[Any], Any]
    setter: Callable[[Any, Any], None]
    enum_type: Optional[Type[Enum]] = None
    # Only assets stored under this type name resolve for ASSET_REF fields.
    asset_type: Optional[str] = None

    def __post_init__(self) -> None:
        if self.kind is FieldKind.ENUM and self.enum_type is None:
            raise ValueError(f"enum field '{self.name}' needs an enum_type")

    @classmethod
    def attribute(cls, name: str, kind: FieldKind, attr: Optional[str] = None, **kwargs: Any) -> "FieldSpec":
        """Field backed by a plain attribute (defaults to an attribute of the same name)."""
        attr = attr or name

        def get(obj: Any) -> Any:
            return getattr(obj, attr)

        def set_(obj: Any, value: Any) -> None:
            setattr(obj, attr, value)

        return cls(name=name, kind=kind, getter=get, setter=set_, **kwargs)


@dataclass
class RecordSchema:
    type_name: str
    factory: Callable[[], Any]
    fields: List[FieldSpec] = dataclasses.field(default_factory=list)

    def __post_init__(self) -> None:
        names = [f.name for f in self.fields]
        if len(names) != len(set(names)):
            raise ValueError(f"duplicate field names in schema '{self.type_name}'")
        self._by_name: Dict[str, FieldSpec] = {f.name: f for f in self.fields}

    def header(self) -> List[str]:
        return [f.name for f in self.fields]

    def field(self, name: str) -> Optional[FieldSpec]:
        return self._by_name.get(name)


class SchemaRegistry:
    def __init__(self, schemas: Optional[List[RecordSchema]] = None):
        self._schemas: Dict[str, RecordSchema] = {}
        for schema in schemas or []:
            self.register(schema)

    def register(self, schema: RecordSchema) -> None:
        self._schemas[schema.type_name] = schema

    def get(self, type_name: Optional[str]) -> RecordSchema:
        if not type_name or type_name not in self._schemas:
            raise UnknownRecordType(f"unknown record type: {type_name!r}")
        return self._schemas[type_name]

    def names(self) -> List[str]:
        return sorted(self._schemas)

    def __contains__(self, type_name: str) -> bool:
        return type_name in self._schemas


def default_value(spec: FieldSpec) -> Any:
    if spec.kind is FieldKind.STRING:
        return ""
    if spec.kind is FieldKind.INTEGER:
        return 0
    if spec.kind is FieldKind.FLOAT:
        return 0.0
    if spec.kind is FieldKind.BOOLEAN:
        return False
    if spec.kind is FieldKind.ENUM:
        return next(iter(spec.enum_type))
    return None


def format_value(spec: FieldSpec, value: Any, assets: Optional[AssetStorePort] = None) -> str:
    """Text written to the CSV cell for value (unquoted; the codec quotes)."""
    if value is None:
        return ""
    if spec.kind is FieldKind.ASSET_REF:
        if assets is None:
            raise ConversionError(spec.name, repr(value), "no asset store to resolve references")
        return assets.path_of(value)
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, bool):
        return "True" if value else "False"
    return str(value)


def parse_value(spec: FieldSpec, text: str, assets: Optional[AssetStorePort] = None) -> Any:
    if text == "":
        return default_value(spec)

    kind = spec.kind
    if kind is FieldKind.STRING:
        return text

    if kind is FieldKind.INTEGER:
        try:
            return int(text.strip())
        except ValueError:
            raise ConversionError(spec.name, text, "not an integer") from None

    if kind is FieldKind.FLOAT:
        try:
            return float(text.strip())
        except ValueError:
            raise ConversionError(spec.name, text, "not a number") from None

    if kind is FieldKind.BOOLEAN:
        word = text.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
        raise ConversionError(spec.name, text, "not a boolean")

    if kind is FieldKind.ENUM:
        wanted = text.strip().lower()
        for member in spec.enum_type:
            if member.name.lower() == wanted:
                return member
        raise ConversionError(spec.name, text, f"not a member of {spec.enum_type.__name__}")

    # ASSET_REF
    if assets is None:
        raise ConversionError(spec.name, text, "no asset store to resolve references")
    obj = assets.load(text, spec.asset_type)
    if obj is None:
        raise ConversionError(spec.name, text, "no asset at path")
    return obj
