"""Schema-driven population of metadata records from a :class:`MetaDocument`.

The engine never mutates the document. Lookups go through two canonical
queries per key: ``meta[property=key]`` first, ``meta[name=key]`` second.
"""

from __future__ import annotations

import logging
import re
import sys
from collections import Counter, defaultdict
from enum import Enum
from typing import Any, MutableMapping

from bs4 import Tag

from .document import MetaDocument
from .schema import FieldKind, FieldSpec, is_record, schema_for, validate_schema

logger = logging.getLogger(__name__)

CONTENT_ATTR = "content"
LOOKUP_ATTRS = ("property", "name")

_INT_RE = re.compile(r"[+-]?[0-9]+")


class GroupMode(str, Enum):
    """How list-of-record fields are filled.

    FIRST rebuilds the group from the first match of every key on each
    pass, so the duplicate check stops after one record. ADVANCE gives
    every key its own count of consumed matches and yields one record per
    repeated group, in document order.
    """

    FIRST = "first"
    ADVANCE = "advance"


def coerce(raw: str, target: type) -> Any | None:
    """Convert *raw* to *target*; ``None`` when it does not parse."""
    if target is str:
        return raw
    if target is int:
        if _INT_RE.fullmatch(raw):
            return int(raw)
        return None
    return None


def resolve(document: MetaDocument, key: str, index: int = 0) -> Tag | None:
    """Return the *index*-th ``property`` match for *key*, else the ``name`` one.

    ``name`` matches are only considered when there is no ``property``
    match at all.
    """

    for attr in LOOKUP_ATTRS:
        matches = document.find_all(attr, key)
        if matches:
            return matches[index] if index < len(matches) else None
    return None


def populate_scalar(
    document: MetaDocument,
    keys: tuple[str, ...],
    target: type,
    offsets: MutableMapping[str, int] | None = None,
) -> Any | None:
    """Resolve one value for *keys*; the first key with a ``content`` wins.

    With *offsets*, each key resolves its next unconsumed match and every
    match it resolves counts as consumed.
    """

    for key in keys:
        el = resolve(document, key, offsets[key] if offsets is not None else 0)
        if el is None:
            continue
        if offsets is not None:
            offsets[key] += 1
        raw = document.read_attribute(el, CONTENT_ATTR)
        if raw is None:
            continue
        value = coerce(raw, target)
        if value is None:
            logger.debug("cannot coerce %r for %s to %s", raw, key, target.__name__)
        return value
    return None


def populate_list(
    document: MetaDocument,
    keys: tuple[str, ...],
    item_type: type,
) -> list[Any]:
    out: list[Any] = []
    for key in keys:
        for attr in LOOKUP_ATTRS:
            for el in document.find_all(attr, key):
                raw = document.read_attribute(el, CONTENT_ATTR)
                if raw is None:
                    continue
                value = coerce(raw, item_type)
                if value is None:
                    logger.debug("skipping %r for %s: not %s", raw, key, item_type.__name__)
                    continue
                out.append(value)
    return out


def populate_nested(
    document: MetaDocument,
    record: Any,
    *,
    group_mode: GroupMode = GroupMode.FIRST,
    offsets: MutableMapping[str, int] | None = None,
) -> Any:
    _walk(document, record, group_mode=group_mode, offsets=offsets)
    return record


def populate_group_list(
    document: MetaDocument,
    record_type: type,
    *,
    group_mode: GroupMode = GroupMode.FIRST,
) -> list[Any]:
    """Build one record per repeated group of *record_type*.

    FIRST: each pass populates a fresh record from the first match of every
    key and the loop stops on the first pass that reproduces the previous
    record, so at most one record comes back.

    ADVANCE: every key keeps a count of the matches earlier passes consumed
    and resolves its next unconsumed one. The loop stops on a pass that
    consumes nothing.
    """

    out: list[Any] = []
    passes = 0

    if group_mode is GroupMode.FIRST:
        last = record_type()
        while True:
            passes += 1
            fresh = record_type()
            _walk(document, fresh, group_mode=group_mode, offsets=None)
            if fresh == last:
                break
            out.append(fresh)
            last = fresh
    else:
        # What a pass produces once every key is used up; lists and
        # optional sub-records fill the same way on every pass.
        exhausted: defaultdict[str, int] = defaultdict(lambda: sys.maxsize)
        zero = record_type()
        _walk(document, zero, group_mode=group_mode, offsets=exhausted)

        offsets: Counter[str] = Counter()
        while True:
            passes += 1
            consumed = sum(offsets.values())
            fresh = record_type()
            _walk(document, fresh, group_mode=group_mode, offsets=offsets)
            if sum(offsets.values()) == consumed:
                break
            # Matches without usable content are consumed but add nothing.
            if fresh != zero:
                out.append(fresh)

    logger.debug("%s: %d group(s) after %d pass(es)", record_type.__name__, len(out), passes)
    return out


def populate(
    document: MetaDocument,
    record: Any,
    *,
    group_mode: GroupMode | str = GroupMode.FIRST,
) -> Any:
    """Fill *record* in place from *document* and return it.

    Raises ``TypeError``, before touching *record*, if it is not a mutable
    dataclass instance or if its schema (or any nested one) is invalid.
    """

    if not is_record(record):
        raise TypeError(f"expected a record instance, got {type(record).__name__}")
    group_mode = GroupMode(group_mode)
    validate_schema(type(record))
    _walk(document, record, group_mode=group_mode, offsets=None)
    return record


def _walk(
    document: MetaDocument,
    record: Any,
    *,
    group_mode: GroupMode,
    offsets: MutableMapping[str, int] | None,
) -> None:
    for spec in schema_for(type(record)):
        _populate_field(document, record, spec, group_mode=group_mode, offsets=offsets)


def _populate_field(
    document: MetaDocument,
    record: Any,
    spec: FieldSpec,
    *,
    group_mode: GroupMode,
    offsets: MutableMapping[str, int] | None,
) -> None:
    kind = spec.kind
    if kind is FieldKind.RECORD:
        populate_nested(document, getattr(record, spec.name), group_mode=group_mode, offsets=offsets)
    elif kind is FieldKind.OPTIONAL_RECORD:
        child = getattr(record, spec.name)
        if child is None:
            child = spec.item_type()
            setattr(record, spec.name, child)
        populate_nested(document, child, group_mode=group_mode, offsets=offsets)
    elif kind is FieldKind.RECORD_LIST:
        groups = populate_group_list(document, spec.item_type, group_mode=group_mode)
        getattr(record, spec.name).extend(groups)
    elif not spec.keys:
        return
    elif kind is FieldKind.SCALAR_LIST:
        getattr(record, spec.name).extend(populate_list(document, spec.keys, spec.item_type))
    elif kind is FieldKind.SCALAR:
        value = populate_scalar(document, spec.keys, spec.item_type, offsets)
        if value is not None:
            setattr(record, spec.name, value)
