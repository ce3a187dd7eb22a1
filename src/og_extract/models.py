"""Open Graph and Twitter card records.

Key order in each :func:`meta_field` is lookup priority. Wire names follow
the JSON layout consumers of this package already read.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from .schema import WIRE_NAME, meta_field, to_dict


class _Record:
    def to_dict(self) -> dict[str, Any]:
        return to_dict(self)


@dataclass
class OgImage(_Record):
    url: str = meta_field("og:image", "og:image:url")
    secure_url: str = meta_field("og:image:secure_url", wire="secureURL")
    width: int = meta_field("og:image:width", default=0)
    height: int = meta_field("og:image:height", default=0)
    type: str = meta_field("og:image:type")


@dataclass
class OgVideo(_Record):
    url: str = meta_field("og:video", "og:video:url")
    secure_url: str = meta_field("og:video:secure_url", wire="secureURL")
    width: int = meta_field("og:video:width", default=0)
    height: int = meta_field("og:video:height", default=0)
    type: str = meta_field("og:video:type")


@dataclass
class OgAudio(_Record):
    url: str = meta_field("og:audio", "og:audio:url")
    secure_url: str = meta_field("og:audio:secure_url", wire="secureURL")
    type: str = meta_field("og:audio:type")


@dataclass
class TwitterPlayer(_Record):
    url: str = meta_field("twitter:player")
    width: int = meta_field("twitter:width", default=0)
    height: int = meta_field("twitter:height", default=0)
    stream: str = meta_field("twitter:stream")


@dataclass
class TwitterIPhoneApp(_Record):
    name: str = meta_field("twitter:app:name:iphone")
    id: str = meta_field("twitter:app:id:iphone")
    url: str = meta_field("twitter:app:url:iphone")


@dataclass
class TwitterIPadApp(_Record):
    name: str = meta_field("twitter:app:name:ipad")
    id: str = meta_field("twitter:app:id:ipad")
    url: str = meta_field("twitter:app:url:ipad")


@dataclass
class TwitterGooglePlayApp(_Record):
    name: str = meta_field("twitter:app:name:googleplay")
    id: str = meta_field("twitter:app:id:googleplay")
    url: str = meta_field("twitter:app:url:googleplay")


@dataclass
class TwitterCard(_Record):
    card: str = meta_field("twitter:card")
    site: str = meta_field("twitter:site")
    site_id: str = meta_field("twitter:site:id", wire="siteID")
    creator: str = meta_field("twitter:creator")
    creator_id: str = meta_field("twitter:creator:id", wire="creatorID")
    description: str = meta_field("twitter:description")
    title: str = meta_field("twitter:title")
    image: str = meta_field("twitter:image", "twitter:image:src")
    image_alt: str = meta_field("twitter:image:alt", wire="imageAlt")
    url: str = meta_field("twitter:url")
    player: TwitterPlayer = field(default_factory=TwitterPlayer)
    iphone: TwitterIPhoneApp = field(
        default_factory=TwitterIPhoneApp, metadata={WIRE_NAME: "iPhone"}
    )
    ipad: TwitterIPadApp = field(
        default_factory=TwitterIPadApp, metadata={WIRE_NAME: "iPad"}
    )
    googleplay: TwitterGooglePlayApp = field(
        default_factory=TwitterGooglePlayApp, metadata={WIRE_NAME: "googlePlay"}
    )


@dataclass
class PageInfo(_Record):
    title: str = meta_field("og:title")
    type: str = meta_field("og:type")
    url: str = meta_field("og:url")
    site: str = meta_field("og:site")
    site_name: str = meta_field("og:site_name", wire="siteName")
    description: str = meta_field("og:description")
    locale: str = meta_field("og:locale")
    images: list[OgImage] = field(default_factory=list)
    videos: list[OgVideo] = field(default_factory=list)
    audios: list[OgAudio] = field(default_factory=list)
    twitter: Optional[TwitterCard] = None
    # Filled by the content extractor, not from meta tags.
    content: str = ""
