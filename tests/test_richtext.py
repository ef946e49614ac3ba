from prismic_fakes import paragraph

from spacetraveling.core.richtext import TrustedHTML, as_html, as_text


def test_as_text_joins_blocks_with_space():
    blocks = [paragraph("Hello"), {"type": "heading2", "text": "world"}]
    assert as_text(blocks) == "Hello world"
    assert as_text([]) == ""
    assert as_text(None) == ""


def test_as_html_returns_trusted_markup():
    result = as_html([paragraph("Hi")])
    assert isinstance(result, TrustedHTML)
    assert str(result) == "<p>Hi</p>"


def test_text_is_escaped_and_newlines_become_breaks():
    result = as_html([paragraph("a < b & c\nnext")])
    assert result.html == "<p>a &lt; b &amp; c<br />next</p>"


def test_spans_are_nested_into_markup():
    block = paragraph(
        "Read the docs now",
        spans=[
            {"start": 0, "end": 4, "type": "strong"},
            {"start": 9, "end": 13, "type": "hyperlink", "data": {"url": "https://example.com/?a=1&b=2"}},
        ],
    )
    assert as_html([block]).html == (
        '<p><strong>Read</strong> the <a href="https://example.com/?a=1&amp;b=2">docs</a> now</p>'
    )


def test_overlapping_spans_are_split():
    block = paragraph(
        "abcdef",
        spans=[
            {"start": 0, "end": 4, "type": "strong"},
            {"start": 2, "end": 6, "type": "em"},
        ],
    )
    assert as_html([block]).html == "<p><strong>ab<em>cd</em></strong><em>ef</em></p>"


def test_hyperlink_target_and_label_span():
    block = paragraph(
        "go here",
        spans=[
            {"start": 0, "end": 2, "type": "hyperlink", "data": {"url": "https://x.dev", "target": "_blank"}},
            {"start": 3, "end": 7, "type": "label", "data": {"label": "codespan"}},
        ],
    )
    assert as_html([block]).html == (
        '<p><a href="https://x.dev" target="_blank" rel="noopener">go</a> '
        '<span class="codespan">here</span></p>'
    )


def test_consecutive_list_items_are_grouped():
    blocks = [
        {"type": "list-item", "text": "one", "spans": []},
        {"type": "list-item", "text": "two", "spans": []},
        {"type": "o-list-item", "text": "first", "spans": []},
        paragraph("after"),
    ]
    assert as_html(blocks).html == (
        "<ul><li>one</li><li>two</li></ul><ol><li>first</li></ol><p>after</p>"
    )


def test_headings_preformatted_and_images():
    blocks = [
        {"type": "heading3", "text": "Title", "spans": []},
        {"type": "preformatted", "text": "x = 1", "spans": []},
        {"type": "image", "url": "https://img/a.png", "alt": "A \"quoted\" alt"},
    ]
    assert as_html(blocks).html == (
        "<h3>Title</h3><pre>x = 1</pre>"
        '<p class="block-img"><img src="https://img/a.png" alt="A &quot;quoted&quot; alt" /></p>'
    )


def test_embed_keeps_provider_html():
    block = {
        "type": "embed",
        "oembed": {
            "embed_url": "https://youtu.be/x",
            "type": "video",
            "provider_name": "YouTube",
            "html": "<iframe src=\"https://youtube.com/embed/x\"></iframe>",
        },
    }
    assert as_html([block]).html == (
        '<div data-oembed="https://youtu.be/x" data-oembed-type="video" data-oembed-provider="YouTube">'
        '<iframe src="https://youtube.com/embed/x"></iframe></div>'
    )


def test_span_offsets_count_utf16_code_units():
    # The rocket emoji is two UTF-16 code units but one Python character
    block = paragraph("🚀 bold and 🌎 wide", spans=[
        {"start": 3, "end": 7, "type": "strong"},
        {"start": 12, "end": 19, "type": "em"},
    ])
    assert as_html([block]).html == "<p>🚀 <strong>bold</strong> and <em>🌎 wide</em></p>"


def test_span_offsets_in_bmp_text_are_unchanged():
    block = paragraph("ação rápida", spans=[{"start": 5, "end": 11, "type": "em"}])
    assert as_html([block]).html == "<p>ação <em>rápida</em></p>"
