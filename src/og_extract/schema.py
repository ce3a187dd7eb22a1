"""Typed descriptor tables for metadata records.

A record is a dataclass. Each field may carry an ordered tuple of lookup
keys, declared with :func:`meta_field`; key order is priority order. The
kind of every field (scalar, embedded record, optional record, list of
scalars, list of records) is derived once from its annotation and cached
per class.
"""

from __future__ import annotations

import dataclasses
import functools
import typing
from dataclasses import dataclass
from enum import Enum
from typing import Any

META_KEYS = "meta"
WIRE_NAME = "wire"

SCALAR_TYPES: tuple[type, ...] = (str, int)


class FieldKind(str, Enum):
    SCALAR = "scalar"
    RECORD = "record"
    OPTIONAL_RECORD = "optional_record"
    SCALAR_LIST = "scalar_list"
    RECORD_LIST = "record_list"
    OTHER = "other"


_NESTED_KINDS = (FieldKind.RECORD, FieldKind.OPTIONAL_RECORD, FieldKind.RECORD_LIST)


@dataclass(frozen=True)
class FieldSpec:
    name: str
    kind: FieldKind
    keys: tuple[str, ...]
    # Scalar type, element type of a list, or the record class.
    item_type: type | None


def meta_field(
    *keys: str,
    default: Any = dataclasses.MISSING,
    wire: str | None = None,
    **kwargs: Any,
) -> Any:
    """Declare a dataclass field looked up by *keys* (first key wins).

    Without an explicit *default*, a ``str`` field defaults to ``""``;
    pass ``default=0`` for ``int`` fields or ``default_factory=list`` for
    list fields.

    *wire* overrides the key used by :func:`to_dict`.
    """

    if default is dataclasses.MISSING and "default_factory" not in kwargs:
        default = ""
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[META_KEYS] = tuple(keys)
    if wire is not None:
        metadata[WIRE_NAME] = wire
    if default is dataclasses.MISSING:
        return dataclasses.field(metadata=metadata, **kwargs)
    return dataclasses.field(default=default, metadata=metadata, **kwargs)


def is_record(obj: object) -> bool:
    """True for dataclass *instances* (not classes)."""
    return dataclasses.is_dataclass(obj) and not isinstance(obj, type)


def is_record_type(tp: object) -> bool:
    return isinstance(tp, type) and dataclasses.is_dataclass(tp)


def _classify(annotation: Any) -> tuple[FieldKind, type | None]:
    if is_record_type(annotation):
        return FieldKind.RECORD, annotation
    if annotation in SCALAR_TYPES:
        return FieldKind.SCALAR, annotation

    origin = typing.get_origin(annotation)
    args = typing.get_args(annotation)

    if origin is list and len(args) == 1:
        (item,) = args
        if is_record_type(item):
            return FieldKind.RECORD_LIST, item
        if item in SCALAR_TYPES:
            return FieldKind.SCALAR_LIST, item
        return FieldKind.OTHER, None

    # Optional[Record] / Record | None
    non_none = [a for a in args if a is not type(None)]
    if len(args) == 2 and len(non_none) == 1 and is_record_type(non_none[0]):
        return FieldKind.OPTIONAL_RECORD, non_none[0]

    return FieldKind.OTHER, None


def _unresolved_field(record_type: type, error: NameError) -> str:
    missing = getattr(error, "name", None) or ""
    for f in dataclasses.fields(record_type):
        if isinstance(f.type, str) and missing and missing in f.type:
            return f.name
    return "<unknown>"


@functools.lru_cache(maxsize=None)
def schema_for(record_type: type) -> tuple[FieldSpec, ...]:
    """Build (and cache) the descriptor table of *record_type*.

    Raises ``TypeError`` if *record_type* is not a mutable dataclass, if an
    annotation cannot be resolved (record types declared inside a function),
    or if a field carries lookup keys but its annotation is not a supported
    kind.
    """

    if not is_record_type(record_type):
        raise TypeError(f"{record_type!r} is not a record type")
    if record_type.__dataclass_params__.frozen:
        raise TypeError(f"{record_type.__name__} is frozen and cannot be populated")

    try:
        hints = typing.get_type_hints(record_type)
    except NameError as e:
        raise TypeError(
            f"{record_type.__name__}.{_unresolved_field(record_type, e)}: cannot resolve "
            f"annotation ({e}); declare record types at module level"
        ) from e

    specs: list[FieldSpec] = []
    for f in dataclasses.fields(record_type):
        keys = tuple(f.metadata.get(META_KEYS, ()))
        kind, item_type = _classify(hints[f.name])
        if keys and kind not in (FieldKind.SCALAR, FieldKind.SCALAR_LIST):
            raise TypeError(
                f"{record_type.__name__}.{f.name}: lookup keys need a str/int "
                f"or list[str]/list[int] annotation, got {hints[f.name]!r}"
            )
        specs.append(FieldSpec(name=f.name, kind=kind, keys=keys, item_type=item_type))
    return tuple(specs)


def validate_schema(record_type: type) -> None:
    """Build the tables of *record_type* and of every record type it nests.

    Lets callers reject a bad schema before touching any record.
    """

    seen: set[type] = set()
    pending = [record_type]
    while pending:
        tp = pending.pop()
        if tp in seen:
            continue
        seen.add(tp)
        for spec in schema_for(tp):
            if spec.kind in _NESTED_KINDS:
                pending.append(spec.item_type)


def _wire_value(value: Any) -> Any:
    if is_record(value):
        return to_dict(value)
    if isinstance(value, list):
        return [_wire_value(v) for v in value]
    return value


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or value == 0 or value == [] or value == {}


def to_dict(record: Any) -> dict[str, Any]:
    """Serialize *record* to a JSON-ready dict, omitting empty values."""
    if not is_record(record):
        raise TypeError(f"expected a record instance, got {type(record).__name__}")
    out: dict[str, Any] = {}
    for f in dataclasses.fields(record):
        value = _wire_value(getattr(record, f.name))
        if _is_empty(value):
            continue
        out[f.metadata.get(WIRE_NAME, f.name)] = value
    return out
