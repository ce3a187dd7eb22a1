from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import pytest

from og_extract.models import OgImage, PageInfo, TwitterCard
from og_extract.schema import FieldKind, meta_field, schema_for, to_dict, validate_schema


@dataclass
class Leaf:
    text: str = meta_field("leaf:text")


@dataclass
class Mixed:
    name: str = meta_field("m:name", "m:alias")
    size: int = meta_field("m:size", default=0)
    tags: list[str] = meta_field("m:tag", default_factory=list)
    leaf: Leaf = field(default_factory=Leaf)
    maybe: Optional[Leaf] = None
    many: list[Leaf] = field(default_factory=list)
    note: str = ""


@dataclass
class BadList:
    pairs: list[Leaf] = meta_field("x:pair", default_factory=list)


@dataclass
class Wrapper:
    inner: Optional[BadList] = None


def test_schema_for_classifies_fields() -> None:
    specs = {s.name: s for s in schema_for(Mixed)}
    assert specs["name"].kind is FieldKind.SCALAR
    assert specs["name"].keys == ("m:name", "m:alias")
    assert specs["size"].item_type is int
    assert specs["tags"].kind is FieldKind.SCALAR_LIST
    assert specs["tags"].item_type is str
    assert specs["leaf"].kind is FieldKind.RECORD
    assert specs["maybe"].kind is FieldKind.OPTIONAL_RECORD
    assert specs["maybe"].item_type is Leaf
    assert specs["many"].kind is FieldKind.RECORD_LIST
    assert specs["note"].keys == ()


def test_schema_for_is_cached() -> None:
    assert schema_for(Mixed) is schema_for(Mixed)


def test_schema_for_rejects_keys_on_record_list() -> None:
    with pytest.raises(TypeError):
        schema_for(BadList)


def test_schema_for_rejects_non_dataclass() -> None:
    with pytest.raises(TypeError):
        schema_for(dict)


def test_validate_schema_checks_nested_record_types() -> None:
    validate_schema(PageInfo)
    schema_for(Wrapper)
    with pytest.raises(TypeError, match="BadList.pairs"):
        validate_schema(Wrapper)


def test_model_key_priority() -> None:
    specs = {s.name: s for s in schema_for(OgImage)}
    assert specs["url"].keys == ("og:image", "og:image:url")
    specs = {s.name: s for s in schema_for(TwitterCard)}
    assert specs["image"].keys == ("twitter:image", "twitter:image:src")


def test_to_dict_uses_wire_names_and_omits_empty() -> None:
    info = PageInfo(site_name="Example", images=[OgImage(url="a.jpg", secure_url="s.jpg", width=10)])
    assert to_dict(info) == {
        "siteName": "Example",
        "images": [{"url": "a.jpg", "secureURL": "s.jpg", "width": 10}],
    }


def test_to_dict_nested_twitter_card() -> None:
    card = TwitterCard(site_id="42")
    card.iphone.id = "1234"
    info = PageInfo(twitter=card)
    assert info.to_dict() == {"twitter": {"siteID": "42", "iPhone": {"id": "1234"}}}


def test_to_dict_drops_empty_optional_record() -> None:
    assert PageInfo(twitter=TwitterCard()).to_dict() == {}


def test_to_dict_rejects_non_records() -> None:
    with pytest.raises(TypeError):
        to_dict({"title": "x"})
