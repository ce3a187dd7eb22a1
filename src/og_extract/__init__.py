"""og-extract core library.

Maps Open Graph and Twitter card ``<meta>`` tags onto typed dataclass
records, and derives a readable content summary of the page.

Records are plain dataclasses whose fields declare their lookup keys with
``meta_field``; ``populate`` walks any such record against a parsed page.
"""

from __future__ import annotations

from .config import ExtractConfig
from .content import ContentFormat, extract_content
from .document import MetaDocument
from .engine import GroupMode, populate
from .http_client import FetchError, HttpClient
from .models import OgAudio, OgImage, OgVideo, PageInfo, TwitterCard
from .page import (
    get_page_data,
    get_page_data_from_html,
    get_page_data_from_response,
    get_page_data_from_url,
    get_page_info,
    get_page_info_from_html,
    get_page_info_from_response,
    get_page_info_from_url,
)
from .schema import meta_field, to_dict

__all__ = [
    "ContentFormat",
    "ExtractConfig",
    "FetchError",
    "GroupMode",
    "HttpClient",
    "MetaDocument",
    "OgAudio",
    "OgImage",
    "OgVideo",
    "PageInfo",
    "TwitterCard",
    "__version__",
    "extract_content",
    "get_page_data",
    "get_page_data_from_html",
    "get_page_data_from_response",
    "get_page_data_from_url",
    "get_page_info",
    "get_page_info_from_html",
    "get_page_info_from_response",
    "get_page_info_from_url",
    "meta_field",
    "populate",
    "to_dict",
]

__version__ = "0.1.0"
