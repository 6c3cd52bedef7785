"""Page fact extractor: turn raw HTML text into a RawData fact sheet.

Each field comes from its own narrow regex scan, so broken or partial markup
only ever costs the affected field. Nothing here touches the network and
nothing raises for malformed input: a missing signal becomes None or an
empty tuple.
"""

import re
from urllib.parse import urljoin, urlparse

from models import Heading, Image, Link, RawData

_TITLE_RE = re.compile(r"<title[^>]*>(.*?)</title>", re.I | re.S)
_CANONICAL_RE = re.compile(r"""<link[^>]+rel=["']canonical["'][^>]+href=["']([^"']*)["']""", re.I)
_HEADING_RE = re.compile(r"<(h[1-6])[^>]*>(.*?)</\1>", re.I | re.S)
_TAG_RE = re.compile(r"<[^>]*>")
_IMG_RE = re.compile(r"<img[^>]*>", re.I)
_SRC_RE = re.compile(r"""src=["']([^"']*)["']""", re.I)
_ALT_RE = re.compile(r"""alt=["']([^"']*)["']""", re.I)
_ANCHOR_RE = re.compile(r"""<a[^>]+href=["']([^"']*)["'][^>]*>""", re.I)
_CHARSET_RE = re.compile(r"""<meta[^>]+charset=["']([^"']*)["']""", re.I)
_LANG_RE = re.compile(r"""<html[^>]+lang=["']([^"']*)["']""", re.I)
_INLINE_STYLE_RE = re.compile(r"""style=["']""", re.I)
_SCRIPT_RE = re.compile(r"<script", re.I)


def _meta_pattern(key: str) -> "re.Pattern[str]":
    key = re.escape(key)
    return re.compile(
        rf"""<meta[^>]+(?:name|property)=["']{key}["'][^>]+content=["']([^"']*)["']"""
        rf"""|<meta[^>]+content=["']([^"']*)["'][^>]+(?:name|property)=["']{key}["']""",
        re.I,
    )


META_KEYS = (
    "description",
    "robots",
    "viewport",
    "og:title",
    "og:description",
    "og:image",
    "og:url",
    "twitter:card",
    "twitter:title",
    "twitter:description",
)
_META_PATTERNS = {key: _meta_pattern(key) for key in META_KEYS}


def extract_meta(html: str, key: str) -> str | None:
    """Return the content of the first <meta> whose name or property is `key`."""
    pattern = _META_PATTERNS.get(key) or _meta_pattern(key)
    match = pattern.search(html)
    if match is None:
        return None
    return match.group(1) if match.group(1) is not None else match.group(2)


def _first_group(pattern: "re.Pattern[str]", html: str) -> str | None:
    match = pattern.search(html)
    return match.group(1) if match else None


def extract_title(html: str) -> str | None:
    match = _TITLE_RE.search(html)
    return match.group(1).strip() if match else None


def extract_headings(html: str) -> list[Heading]:
    """All h1-h6 elements in document order with inner tags stripped."""
    return [
        Heading(tag=match.group(1).upper(), text=_TAG_RE.sub("", match.group(2)).strip())
        for match in _HEADING_RE.finditer(html)
    ]


def extract_images(html: str) -> list[Image]:
    images: list[Image] = []
    for match in _IMG_RE.finditer(html):
        tag = match.group(0)
        src_match = _SRC_RE.search(tag)
        if not src_match:
            continue
        alt_match = _ALT_RE.search(tag)
        images.append(Image(src=src_match.group(1), alt=alt_match.group(1) if alt_match else None))
    return images


def _hostname(url: str) -> str:
    try:
        return urlparse(url).hostname or ""
    except ValueError:
        return ""


def is_external_link(href: str, page_url: str) -> bool:
    """Compare the resolved link hostname against the page hostname.

    Hrefs that cannot be resolved count as internal.
    """
    try:
        resolved = urlparse(urljoin(page_url, href))
        return (resolved.hostname or "") != _hostname(page_url)
    except ValueError:
        return False


def extract_links(html: str, page_url: str) -> list[Link]:
    return [
        Link(href=match.group(1), is_external=is_external_link(match.group(1), page_url))
        for match in _ANCHOR_RE.finditer(html)
    ]


def parse_raw_data(html: str, page_url: str) -> RawData:
    """Build the fact sheet for one page.

    `page_url` is only used to decide whether links leave the site.
    """
    html = html or ""
    return RawData(
        title=extract_title(html),
        meta_description=extract_meta(html, "description"),
        canonical=_first_group(_CANONICAL_RE, html),
        robots=extract_meta(html, "robots"),
        og_title=extract_meta(html, "og:title"),
        og_description=extract_meta(html, "og:description"),
        og_image=extract_meta(html, "og:image"),
        og_url=extract_meta(html, "og:url"),
        twitter_card=extract_meta(html, "twitter:card"),
        twitter_title=extract_meta(html, "twitter:title"),
        twitter_description=extract_meta(html, "twitter:description"),
        headings=tuple(extract_headings(html)),
        images=tuple(extract_images(html)),
        links=tuple(extract_links(html, page_url)),
        viewport=extract_meta(html, "viewport"),
        charset=_first_group(_CHARSET_RE, html),
        lang=_first_group(_LANG_RE, html),
        inline_style_count=len(_INLINE_STYLE_RE.findall(html)),
        script_count=len(_SCRIPT_RE.findall(html)),
    )
