"""
Render post pages to static HTML.

Without a slug every path returned by the path hook is rendered. With a slug,
only that page is rendered; a slug missing from the precomputed paths is
generated on demand when the path hook allows fallback: the loading
placeholder is written first and replaced once the post has loaded.
"""

import logging
from pathlib import Path
from typing import List, Optional

from ..core.command_context import CommandContext
from ..core.prismic_client import PrismicClient
from ..processors.html_generator import PostPageRenderer
from ..processors.post_loader import get_static_paths, get_static_props
from ..processors.reading_time import WORDS_PER_MINUTE, estimate_reading_time

logger = logging.getLogger(__name__)


def _build_renderer(ctx: CommandContext) -> PostPageRenderer:
    return PostPageRenderer(
        template_path=ctx.get_setting('site', 'template', 'post_template.html'),
        loading_template_path=ctx.get_setting('site', 'loading_template', 'loading_template.html'),
        locale=ctx.get_setting('site', 'locale', 'pt-BR'),
        timezone=ctx.get_setting('site', 'timezone', 'UTC'),
    )


def render_page(
    client: PrismicClient,
    renderer: PostPageRenderer,
    slug: str,
    output_path: Path,
    *,
    words_per_minute: int = WORDS_PER_MINUTE,
    on_demand: bool = False,
) -> Path:
    """Load one post and write its ready page to *output_path*.

    When *on_demand* is set the loading placeholder occupies *output_path*
    until the post is loaded; it is removed again if loading fails.
    """
    if on_demand:
        renderer.write_page(str(output_path), renderer.render(None, 0, is_fallback=True))
        logger.info(f"Generating '{slug}' on demand (placeholder at {output_path})")

    try:
        post = get_static_props(client, {'slug': slug})['props']['post']
    except Exception:
        if on_demand and output_path.exists():
            output_path.unlink()
        raise

    minutes = estimate_reading_time(post.content, words_per_minute)
    renderer.write_page(str(output_path), renderer.render(post, minutes))
    logger.info(f"Rendered '{slug}' ({minutes} min read): {output_path}")
    return output_path


def run(config_path: Optional[str] = None, slug: Optional[str] = None, client: Optional[PrismicClient] = None) -> List[Path]:
    """
    Render one or all post pages.

    Args:
        config_path: Path to the main configuration file
        slug: Optional post UID to render (if None, render every precomputed path)
        client: Optional content-source client (built from config when omitted)

    Returns:
        Paths of the written HTML files

    Raises:
        LookupError: If *slug* is not precomputed and fallback is disabled, or
            the CMS has no post with that UID
    """
    logger.info("Starting post page build")

    with CommandContext(config_path, client=client) as ctx:
        renderer = _build_renderer(ctx)
        words_per_minute = ctx.config_manager.get_words_per_minute()
        page_size = ctx.get_setting('prismic', 'page_size', 100)

        static_paths = get_static_paths(ctx.client, page_size=page_size)
        known_slugs = [p['params']['slug'] for p in static_paths['paths']]

        if slug:
            if slug not in known_slugs and not static_paths['fallback']:
                raise LookupError(f"Post '{slug}' is not among the generated paths")
            targets = [(slug, slug not in known_slugs)]
        else:
            targets = [(s, False) for s in known_slugs]

        written: List[Path] = []
        for target_slug, on_demand in targets:
            written.append(
                render_page(
                    ctx.client,
                    renderer,
                    target_slug,
                    ctx.output_path_for(target_slug),
                    words_per_minute=words_per_minute,
                    on_demand=on_demand,
                )
            )

    logger.info(f"Post page build completed ({len(written)} pages)")
    return written
