"""Page-level entry points: fetch or parse, isolate, populate.

Every ``get_page_data*`` call walks a private clone of the parsed document,
so callers may keep using (and mutating) theirs.
"""

from __future__ import annotations

import logging
from typing import TypeVar

import requests

from .config import ExtractConfig
from .content import extract_content, looks_like_html
from .document import MetaDocument
from .engine import populate
from .http_client import HttpClient
from .models import PageInfo

logger = logging.getLogger(__name__)

R = TypeVar("R")


def _client(config: ExtractConfig, session: requests.Session | None) -> HttpClient:
    return HttpClient(
        session or requests.Session(),
        timeout_s=config.timeout_s,
        max_retries=config.max_retries,
        backoff_base_s=config.backoff_base_s,
        user_agent=config.user_agent,
    )


def get_page_data(document: MetaDocument, data: R, config: ExtractConfig | None = None) -> R:
    config = config or ExtractConfig()
    return populate(document.clone(), data, group_mode=config.group_mode)


def get_page_data_from_html(
    html: str | bytes, data: R, config: ExtractConfig | None = None
) -> R:
    return get_page_data(MetaDocument.from_html(html), data, config)


def get_page_data_from_response(
    response: requests.Response, data: R, config: ExtractConfig | None = None
) -> R:
    return get_page_data(MetaDocument.from_response(response), data, config)


def fetch_html(
    url: str,
    config: ExtractConfig | None = None,
    *,
    session: requests.Session | None = None,
) -> bytes:
    config = config or ExtractConfig()
    result = _client(config, session).get(url)
    if not looks_like_html(result.body):
        logger.warning("%s (%s) does not look like HTML", result.final_url, result.content_type)
    return result.body


def get_page_data_from_url(
    url: str,
    data: R,
    config: ExtractConfig | None = None,
    *,
    session: requests.Session | None = None,
) -> R:
    return get_page_data_from_html(fetch_html(url, config, session=session), data, config)


def _page_info(document: MetaDocument, html: str | bytes, config: ExtractConfig) -> PageInfo:
    info = get_page_data(document, PageInfo(), config)
    info.content = extract_content(html, config.content_format)
    return info


def get_page_info(document: MetaDocument, config: ExtractConfig | None = None) -> PageInfo:
    config = config or ExtractConfig()
    return _page_info(document, document.html(), config)


def get_page_info_from_html(html: str | bytes, config: ExtractConfig | None = None) -> PageInfo:
    config = config or ExtractConfig()
    return _page_info(MetaDocument.from_html(html), html, config)


def get_page_info_from_response(
    response: requests.Response, config: ExtractConfig | None = None
) -> PageInfo:
    return get_page_info(MetaDocument.from_response(response), config)


def get_page_info_from_url(
    url: str,
    config: ExtractConfig | None = None,
    *,
    session: requests.Session | None = None,
) -> PageInfo:
    return get_page_info_from_html(fetch_html(url, config, session=session), config)
