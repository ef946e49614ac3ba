from prismic_fakes import make_document, paragraph

from spacetraveling.core.models import Post
from spacetraveling.processors.html_generator import CUSTOM_TEMPLATE_MARKER, PostPageRenderer


def _post(**overrides) -> Post:
    return Post.from_document(make_document(**overrides))


def test_ready_page_shows_header_fields_and_reading_time(data_dir):
    renderer = PostPageRenderer()
    page = renderer.render(_post(), 4)

    assert "<h1>Como utilizar Hooks</h1>" in page
    assert 'src="https://images.prismic.io/banner.png"' in page
    assert "15 mar 2021" in page
    assert "Joseph Oliveira" in page
    assert "4 min" in page
    assert "Carregando..." not in page


def test_blocks_render_in_order_with_trusted_body_html(data_dir):
    content = [
        {"heading": "First", "body": [paragraph("bold move", spans=[{"start": 0, "end": 4, "type": "strong"}])]},
        {"heading": "Second", "body": [paragraph("<em>raw</em> text")]},
    ]
    page = PostPageRenderer().render(_post(content=content), 1)

    assert page.index("<header>First</header>") < page.index("<header>Second</header>")
    assert "<strong>bold</strong> move" in page
    # Text typed into the CMS is escaped by the rich-text serializer
    assert "&lt;em&gt;raw&lt;/em&gt; text" in page


def test_plain_fields_are_escaped(data_dir):
    page = PostPageRenderer().render(
        _post(title="<script>alert(1)</script>", author="Tom & Jerry"), 1
    )
    assert "<script>alert(1)</script>" not in page
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in page
    assert "Tom &amp; Jerry" in page


def test_empty_content_still_renders_full_document(data_dir):
    page = PostPageRenderer().render(_post(content=[]), 0)
    assert page.rstrip().endswith("</html>")
    assert "0 min" in page
    assert '<div class="post-block">' not in page


def test_fallback_render_shows_only_loading_placeholder(data_dir):
    renderer = PostPageRenderer()
    page = renderer.render(_post(), 3, is_fallback=True)
    assert "Carregando..." in page
    assert "Como utilizar Hooks" not in page
    assert renderer.render(None, 0) == page


def test_templates_are_copied_into_data_dir(data_dir):
    PostPageRenderer()
    assert (data_dir / "templates" / "post_template.html").exists()
    assert (data_dir / "templates" / "loading_template.html").exists()


def test_custom_template_is_not_overwritten(data_dir):
    custom = data_dir / "templates" / "post_template.html"
    custom.parent.mkdir(parents=True, exist_ok=True)
    custom.write_text(f"<!-- {CUSTOM_TEMPLATE_MARKER} --><p>%{{title}} by %{{author}}</p>%{{content}}", encoding="utf-8")

    page = PostPageRenderer().render(_post(content=[]), 2)

    assert page == f"<!-- {CUSTOM_TEMPLATE_MARKER} --><p>Como utilizar Hooks by Joseph Oliveira</p>"


def test_unknown_template_name_falls_back_to_basic_template(data_dir):
    renderer = PostPageRenderer(template_path="missing_template.html")
    page = renderer.render(_post(), 1)
    assert (data_dir / "templates" / "missing_template.html").exists()
    assert "<h1>Como utilizar Hooks</h1>" in page


def test_write_page_creates_parent_directories(tmp_path, data_dir):
    target = tmp_path / "out" / "post" / "hello.html"
    PostPageRenderer().write_page(str(target), "<html></html>")
    assert target.read_text(encoding="utf-8") == "<html></html>"


def test_subtitle_is_rendered(data_dir):
    page = PostPageRenderer().render(_post(subtitle="Pensando em sincronização"), 1)
    assert "Pensando em sincronização" in page


def test_token_text_inside_values_is_not_substituted(data_dir):
    content = [{"heading": "Usando %{title}", "body": [paragraph("Escreva %{author} no template")]}]
    post = _post(
        title="Templates com %{author}",
        author="Autor %{reading_time}",
        subtitle="Sobre %{content}",
        content=content,
    )

    page = PostPageRenderer().render(post, 7)

    assert "<h1>Templates com %{author}</h1>" in page
    assert "Autor %{reading_time}" in page
    assert "Sobre %{content}" in page
    assert "<header>Usando %{title}</header>" in page
    assert "Escreva %{author} no template" in page
    assert "7 min" in page
