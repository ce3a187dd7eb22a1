from __future__ import annotations

import requests

from og_extract.document import MetaDocument


def test_find_all_returns_meta_elements_in_order() -> None:
    doc = MetaDocument.from_html(
        '<head><meta property="og:image" content="1">'
        '<link property="og:image" href="x">'
        '<meta property="og:image" content="2"></head>'
    )
    found = doc.find_all("property", "og:image")
    assert [el.get("content") for el in found] == ["1", "2"]


def test_find_all_matches_exact_value_only() -> None:
    doc = MetaDocument.from_html('<meta property="og:image:width" content="1">')
    assert doc.find_all("property", "og:image") == []
    assert doc.find_all("name", "og:image:width") == []


def test_read_attribute() -> None:
    doc = MetaDocument.from_html('<meta name="k" content="">')
    (el,) = doc.find_all("name", "k")
    assert MetaDocument.read_attribute(el, "content") == ""
    assert MetaDocument.read_attribute(el, "missing") is None


def test_clone_is_isolated() -> None:
    doc = MetaDocument.from_html('<head><meta property="k" content="v"></head>')
    snapshot = doc.clone()
    for el in snapshot.find_all("property", "k"):
        el.decompose()
    assert snapshot.find_all("property", "k") == []
    assert len(doc.find_all("property", "k")) == 1


def test_from_response_decodes_body() -> None:
    resp = requests.Response()
    resp.status_code = 200
    resp._content = '<meta property="og:title" content="Café">'.encode("utf-8")
    resp.headers["Content-Type"] = "text/html; charset=utf-8"
    doc = MetaDocument.from_response(resp)
    (el,) = doc.find_all("property", "og:title")
    assert MetaDocument.read_attribute(el, "content") == "Café"
