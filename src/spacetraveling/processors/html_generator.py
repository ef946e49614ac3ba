"""
HTML page generation for posts.

Pages are rendered from file templates carrying ``%{token}`` placeholders.
Templates are bundled under ``system/templates`` and copied into the runtime
data directory, where they can be customised.
"""

import html
import logging
import re
import shutil
from pathlib import Path
from string import Template
from typing import Any, Dict, List, Optional

from ..core.dates import DEFAULT_LOCALE, format_publication_date
from ..core.models import Post
from ..core.paths import get_system_path, resolve_data_path
from ..core.richtext import TrustedHTML

CUSTOM_TEMPLATE_MARKER = "spacetraveling:custom-template"
_TOKEN_PATTERN = re.compile(r"%\{(\w+)\}")

logger = logging.getLogger(__name__)

BLOCK_TEMPLATE = Template(
    '<div class="post-block">\n'
    '  <header>$heading</header>\n'
    '  <section class="post-content-body">$body</section>\n'
    '</div>'
)

_BASIC_POST_TEMPLATE = (
    "<!DOCTYPE html>\n"
    "<html>\n"
    "<head>\n"
    "<meta charset=\"UTF-8\">\n"
    "<title>%{title} | spacetraveling</title>\n"
    "</head>\n"
    "<body>\n"
    "<header class=\"site-header\"><a href=\"/\">spacetraveling.</a></header>\n"
    "<div class=\"banner\"><img src=\"%{banner_url}\" alt=\"%{title}\"></div>\n"
    "<main>\n"
    "<h1>%{title}</h1>\n"
    "<div class=\"summary\">\n"
    "<time>%{publication_date}</time>\n"
    "<span>%{author}</span>\n"
    "<span>%{reading_time} min</span>\n"
    "</div>\n"
    "%{content}\n"
    "</main>\n"
    "</body>\n"
    "</html>\n"
)

_BASIC_LOADING_TEMPLATE = (
    "<!DOCTYPE html>\n"
    "<html>\n"
    "<head>\n"
    "<meta charset=\"UTF-8\">\n"
    "<title>spacetraveling</title>\n"
    "</head>\n"
    "<body>\n"
    "<h1>Carregando...</h1>\n"
    "</body>\n"
    "</html>\n"
)

_BASIC_TEMPLATES = {
    "post_template.html": _BASIC_POST_TEMPLATE,
    "loading_template.html": _BASIC_LOADING_TEMPLATE,
}


def _html_value(value: Any) -> str:
    """Escape plain values; pass :class:`TrustedHTML` through untouched."""
    if isinstance(value, TrustedHTML):
        return value.html
    if value is None:
        return ''
    return html.escape(str(value), quote=True)


class PostPageRenderer:
    """Renders a post page in either the ``ready`` or the ``loading`` state."""

    def __init__(
        self,
        template_path: str = "post_template.html",
        loading_template_path: str = "loading_template.html",
        locale: str = DEFAULT_LOCALE,
        timezone: str = "UTC",
    ):
        """Prepare the renderer, resolving template paths into the data directory."""
        self.template_path = self._resolve_template(template_path)
        self.loading_template_path = self._resolve_template(loading_template_path)
        self.locale = locale
        self.timezone = timezone

    def render(self, post: Optional[Post], reading_time: int, is_fallback: bool = False) -> str:
        """Render a full page for *post*.

        While the page is still being generated on demand (``is_fallback``), or
        when no post is available yet, the loading placeholder is returned.
        """
        if is_fallback or post is None:
            return self.render_loading()

        context = {
            'title': _html_value(post.title),
            'subtitle': _html_value(post.subtitle),
            'banner_url': _html_value(post.banner.url),
            'publication_date': _html_value(
                format_publication_date(post.first_publication_date, self.locale, self.timezone)
            ),
            'author': _html_value(post.author),
            'reading_time': _html_value(reading_time),
            'content': '\n'.join(self._render_blocks(post)),
        }
        return self._fill(self._read_template(self.template_path), context)

    def render_loading(self) -> str:
        """Render the transient placeholder shown while a page is generated."""
        return self._read_template(self.loading_template_path)

    def write_page(self, output_path: str, page_html: str) -> None:
        """Write *page_html* to *output_path*, creating parent directories."""
        output_path_obj = Path(output_path)
        output_path_obj.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path_obj, 'w', encoding='utf-8') as f:
            f.write(page_html)
        logger.debug("Wrote %s", output_path_obj)

    def _render_blocks(self, post: Post) -> List[str]:
        return [
            BLOCK_TEMPLATE.substitute(
                heading=_html_value(block.heading),
                body=_html_value(block.body_html),
            )
            for block in post.content
        ]

    @staticmethod
    def _fill(template: str, context: Dict[str, str]) -> str:
        # Single pass: inserted values are never rescanned for tokens
        return _TOKEN_PATTERN.sub(lambda m: context.get(m.group(1), m.group(0)), template)

    @staticmethod
    def _read_template(template_path: str) -> str:
        with open(template_path, 'r', encoding='utf-8') as tmpl:
            return tmpl.read()

    def _create_basic_template(self, target: Path) -> None:
        """Create a basic HTML template if none exists."""
        content = _BASIC_TEMPLATES.get(target.name, _BASIC_POST_TEMPLATE)
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, 'w', encoding='utf-8') as f:
            f.write(content)

    def _ensure_template_available(self, template_path: Path) -> Path:
        """
        Ensure a template is present in the runtime data directory.

        If a system template exists and the runtime copy differs, overwrite it unless the
        runtime template carries the custom-template marker comment.
        """
        if template_path.is_absolute():
            if template_path.exists():
                return template_path
            return self._ensure_template_available(Path(template_path.name))

        data_template = resolve_data_path('templates', *template_path.parts)
        system_template = get_system_path('templates', *template_path.parts)

        if system_template.exists():
            data_template.parent.mkdir(parents=True, exist_ok=True)

            runtime_has_marker = False
            if data_template.exists():
                try:
                    runtime_has_marker = CUSTOM_TEMPLATE_MARKER in data_template.read_text(encoding='utf-8')
                except (OSError, UnicodeDecodeError):
                    runtime_has_marker = False

            if runtime_has_marker:
                logger.debug("Skipping template refresh for %s (custom marker present)", data_template)
                return data_template

            needs_copy = True
            if data_template.exists():
                try:
                    needs_copy = data_template.read_bytes() != system_template.read_bytes()
                except OSError:
                    needs_copy = True

            if needs_copy:
                shutil.copyfile(system_template, data_template)
                logger.info("Refreshed HTML template %s from system copy", data_template.name)

            return data_template

        if not data_template.exists():
            self._create_basic_template(data_template)
        return data_template

    def _resolve_template(self, template_path: str) -> str:
        """Locate a template in the runtime or system directories."""
        return str(self._ensure_template_available(Path(template_path)))
