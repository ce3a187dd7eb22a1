from __future__ import annotations

from enum import Enum

from bs4 import BeautifulSoup, Tag
from markdownify import markdownify as md

_MAIN_SELECTORS = (
    "main",
    "article",
    "[itemprop='articleBody']",
    "div[role='main']",
    "#content",
    ".post-content",
    ".entry-content",
)

_BOILERPLATE_TAGS = ("script", "style", "noscript", "template", "nav", "footer", "aside")


class ContentFormat(str, Enum):
    TEXT = "text"
    MARKDOWN = "markdown"


def looks_like_html(data: bytes) -> bool:
    head = data[:2048].lstrip().lower()
    return head.startswith(b"<") and (
        b"<html" in head or b"<!doctype" in head or b"<head" in head or b"<meta" in head
    )


def _clean_soup_inplace(soup: BeautifulSoup) -> None:
    for tag_name in _BOILERPLATE_TAGS:
        for t in soup.find_all(tag_name):
            t.decompose()


def _pick_main_content(soup: BeautifulSoup) -> Tag:
    for selector in _MAIN_SELECTORS:
        node = soup.select_one(selector)
        if node and node.get_text(strip=True):
            return node

    # Fall back to the div carrying the most paragraph text.
    best = None
    best_len = 0
    for div in soup.find_all("div"):
        text_len = sum(len(p.get_text(" ", strip=True)) for p in div.find_all("p", recursive=False))
        if text_len > best_len:
            best = div
            best_len = text_len
    return best or soup.body or soup


def _squeeze_blank_lines(text: str) -> str:
    out: list[str] = []
    blank_run = 0
    for ln in (ln.strip() for ln in text.splitlines()):
        if not ln:
            blank_run += 1
            if blank_run <= 1:
                out.append("")
            continue
        blank_run = 0
        out.append(ln)
    return "\n".join(out).strip()


def extract_content(html: str | bytes, fmt: ContentFormat | str = ContentFormat.TEXT) -> str:
    """Return the main readable content of *html* as plain text or Markdown.

    Works on its own parse of *html*; callers' trees are never touched.
    """

    soup = BeautifulSoup(html, "html.parser")
    _clean_soup_inplace(soup)
    main = _pick_main_content(soup)
    if ContentFormat(fmt) is ContentFormat.MARKDOWN:
        return md(str(main), heading_style="ATX").strip()
    return _squeeze_blank_lines(main.get_text("\n"))
