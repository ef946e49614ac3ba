"""Prismic rich-text conversion to plain text and HTML.

A rich-text field is a list of blocks, each shaped like::

    {"type": "paragraph", "text": "Hello world", "spans": [
        {"start": 0, "end": 5, "type": "strong"},
    ]}

``as_text`` flattens the blocks for word counting; ``as_html`` serializes them
to markup. The markup is wrapped in :class:`TrustedHTML` because the CMS is
treated as a trusted source: it is emitted verbatim by the page renderer and
never sanitized.
"""

from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

_BLOCK_TAGS = {
    'paragraph': 'p',
    'preformatted': 'pre',
    'heading1': 'h1',
    'heading2': 'h2',
    'heading3': 'h3',
    'heading4': 'h4',
    'heading5': 'h5',
    'heading6': 'h6',
}

_LIST_TAGS = {
    'list-item': 'ul',
    'o-list-item': 'ol',
}

_SPAN_TAGS = {
    'strong': 'strong',
    'em': 'em',
}


@dataclass(frozen=True)
class TrustedHTML:
    """Markup that the renderer inserts without escaping."""

    html: str

    def __str__(self) -> str:
        return self.html


def as_text(blocks: Optional[Iterable[Mapping[str, Any]]], join: str = ' ') -> str:
    """Concatenate the text of every block, separated by *join*."""
    if not blocks:
        return ''
    return join.join(block.get('text') or '' for block in blocks)


def _escape(text: str) -> str:
    return html.escape(text).replace('\n', '<br />')


def _attr(value: Any) -> str:
    return html.escape(str(value), quote=True)


def _span_key(span: Mapping[str, Any]):
    return (span['start'], -span['end'])


def _open_span(span: Mapping[str, Any]) -> str:
    kind = span.get('type')
    if kind in _SPAN_TAGS:
        return f"<{_SPAN_TAGS[kind]}>"
    if kind == 'hyperlink':
        data = span.get('data') or {}
        target = data.get('target')
        extra = f' target="{_attr(target)}" rel="noopener"' if target else ''
        return f'<a href="{_attr(data.get("url", ""))}"{extra}>'
    if kind == 'label':
        label = (span.get('data') or {}).get('label', '')
        return f'<span class="{_attr(label)}">'
    return '<span>'


def _close_span(span: Mapping[str, Any]) -> str:
    kind = span.get('type')
    if kind in _SPAN_TAGS:
        return f"</{_SPAN_TAGS[kind]}>"
    if kind == 'hyperlink':
        return '</a>'
    return '</span>'


def _serialize_spans(text: str, spans: List[Dict[str, Any]], start: int, end: int) -> str:
    """Serialize ``text[start:end]`` with *spans* applied.

    A span that crosses the end of an enclosing span is split: the inner part
    is nested, the remainder is reopened after the enclosing span closes.
    """
    parts: List[str] = []
    cursor = start
    pending = sorted(spans, key=_span_key)
    while pending:
        span = pending.pop(0)
        span_start = max(span['start'], cursor)
        span_end = min(span['end'], end)
        if span_start >= span_end:
            continue

        inner: List[Dict[str, Any]] = []
        rest: List[Dict[str, Any]] = []
        for other in pending:
            if other['start'] < span_end:
                inner.append({**other, 'end': min(other['end'], span_end)})
                if other['end'] > span_end:
                    rest.append({**other, 'start': span_end})
            else:
                rest.append(other)
        pending = sorted(rest, key=_span_key)

        parts.append(_escape(text[cursor:span_start]))
        parts.append(_open_span(span))
        parts.append(_serialize_spans(text, inner, span_start, span_end))
        parts.append(_close_span(span))
        cursor = span_end

    parts.append(_escape(text[cursor:end]))
    return ''.join(parts)


def _utf16_offsets(text: str) -> List[int]:
    """Map each UTF-16 code unit offset in *text* to a code point index.

    Span offsets count UTF-16 code units, so characters outside the Basic
    Multilingual Plane occupy two positions. An offset that falls inside a
    surrogate pair maps to the start of that character.
    """
    offsets: List[int] = []
    for index, char in enumerate(text):
        offsets.append(index)
        if ord(char) > 0xFFFF:
            offsets.append(index)
    offsets.append(len(text))
    return offsets


def _block_inner_html(block: Mapping[str, Any]) -> str:
    text = block.get('text') or ''
    offsets = _utf16_offsets(text)
    last = len(offsets) - 1
    spans = [
        {**s, 'start': offsets[min(s['start'], last)], 'end': offsets[min(s['end'], last)]}
        for s in (block.get('spans') or [])
        if 'start' in s and 'end' in s
    ]
    return _serialize_spans(text, spans, 0, len(text))


def _label_attr(block: Mapping[str, Any]) -> str:
    label = block.get('label')
    return f' class="{_attr(label)}"' if label else ''


def _serialize_block(block: Mapping[str, Any]) -> str:
    kind = block.get('type')
    if kind in _BLOCK_TAGS:
        tag = _BLOCK_TAGS[kind]
        return f"<{tag}{_label_attr(block)}>{_block_inner_html(block)}</{tag}>"
    if kind in _LIST_TAGS:
        return f"<li{_label_attr(block)}>{_block_inner_html(block)}</li>"
    if kind == 'image':
        img = f'<img src="{_attr(block.get("url", ""))}" alt="{_attr(block.get("alt") or "")}" />'
        link = (block.get('linkTo') or {}).get('url')
        if link:
            img = f'<a href="{_attr(link)}">{img}</a>'
        return f'<p class="block-img">{img}</p>'
    if kind == 'embed':
        oembed = block.get('oembed') or {}
        return (
            f'<div data-oembed="{_attr(oembed.get("embed_url", ""))}"'
            f' data-oembed-type="{_attr(oembed.get("type", ""))}"'
            f' data-oembed-provider="{_attr(oembed.get("provider_name", ""))}">'
            f'{oembed.get("html") or ""}</div>'
        )
    # Unknown block types still carry readable text
    return f"<p>{_block_inner_html(block)}</p>"


def as_html(blocks: Optional[Sequence[Mapping[str, Any]]]) -> TrustedHTML:
    """Serialize rich-text blocks to HTML.

    Consecutive ``list-item`` / ``o-list-item`` blocks are grouped into a single
    ``<ul>`` / ``<ol>``.
    """
    parts: List[str] = []
    open_list: Optional[str] = None
    for block in blocks or []:
        list_tag = _LIST_TAGS.get(block.get('type'))
        if open_list and list_tag != open_list:
            parts.append(f"</{open_list}>")
            open_list = None
        if list_tag and open_list is None:
            parts.append(f"<{list_tag}>")
            open_list = list_tag
        parts.append(_serialize_block(block))
    if open_list:
        parts.append(f"</{open_list}>")
    return TrustedHTML(''.join(parts))
