"""
Display models for post pages.

A raw CMS document is decoded once, at the boundary, into frozen dataclasses.
Fields the page relies on must be present with the right type; anything else
in the document is dropped.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from .richtext import TrustedHTML, as_html, as_text


class DecodeError(ValueError):
    """Raised when a CMS document is missing a field or has the wrong shape."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field


def _require_mapping(value: Any, field: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise DecodeError(field, f"expected an object, got {type(value).__name__}")
    return value


def _require_str(source: Mapping[str, Any], key: str, field: str) -> str:
    if key not in source:
        raise DecodeError(field, "missing")
    value = source[key]
    if not isinstance(value, str):
        raise DecodeError(field, f"expected a string, got {type(value).__name__}")
    return value


def _optional_str(source: Mapping[str, Any], key: str, field: str) -> Optional[str]:
    value = source.get(key)
    if value is not None and not isinstance(value, str):
        raise DecodeError(field, f"expected a string or null, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class ContentBlock:
    """One heading plus its rich-text body."""

    heading: str
    body: Tuple[Dict[str, Any], ...]

    @property
    def body_text(self) -> str:
        return as_text(self.body)

    @property
    def body_html(self) -> TrustedHTML:
        return as_html(self.body)

    @classmethod
    def from_raw(cls, raw: Any, field: str) -> "ContentBlock":
        entry = _require_mapping(raw, field)
        if 'heading' not in entry:
            raise DecodeError(f"{field}.heading", "missing")
        # Prismic stores an empty key-text field as null
        heading = _optional_str(entry, 'heading', f"{field}.heading")
        body = entry.get('body')
        if not isinstance(body, list):
            raise DecodeError(f"{field}.body", "expected a list of rich-text blocks")
        for index, block in enumerate(body):
            _require_mapping(block, f"{field}.body[{index}]")
        return cls(heading=heading or '', body=tuple(copy.deepcopy(dict(b)) for b in body))


@dataclass(frozen=True)
class Banner:
    url: str


@dataclass(frozen=True)
class Post:
    """Render-ready projection of a ``post`` document."""

    uid: Optional[str]
    first_publication_date: Optional[str]
    title: str
    subtitle: Optional[str]
    banner: Banner
    author: str
    content: Tuple[ContentBlock, ...]

    @classmethod
    def from_document(cls, document: Any) -> "Post":
        """Decode a raw Prismic document.

        Raises:
            DecodeError: If a required field is missing or mistyped
        """
        doc = _require_mapping(document, 'document')
        data = _require_mapping(doc.get('data'), 'data')
        banner = _require_mapping(data.get('banner'), 'data.banner')
        raw_content = data.get('content')
        if not isinstance(raw_content, list):
            raise DecodeError('data.content', 'expected a list')

        return cls(
            uid=_optional_str(doc, 'uid', 'uid'),
            first_publication_date=_optional_str(doc, 'first_publication_date', 'first_publication_date'),
            title=_require_str(data, 'title', 'data.title'),
            subtitle=_optional_str(data, 'subtitle', 'data.subtitle'),
            banner=Banner(url=_require_str(banner, 'url', 'data.banner.url')),
            author=_require_str(data, 'author', 'data.author'),
            content=tuple(
                ContentBlock.from_raw(entry, f"data.content[{index}]")
                for index, entry in enumerate(raw_content)
            ),
        )

