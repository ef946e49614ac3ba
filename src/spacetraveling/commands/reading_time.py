"""Report the estimated reading time of a single post."""

import logging
from typing import Optional

from ..core.command_context import CommandContext
from ..core.prismic_client import PrismicClient
from ..processors.post_loader import load_post
from ..processors.reading_time import estimate_reading_time

logger = logging.getLogger(__name__)


def run(config_path: Optional[str], slug: str, client: Optional[PrismicClient] = None) -> int:
    """Fetch *slug* and return its reading time in minutes."""
    with CommandContext(config_path, client=client) as ctx:
        post = load_post(ctx.client, slug)
        minutes = estimate_reading_time(post.content, ctx.config_manager.get_words_per_minute())
    logger.info(f"Post '{slug}': {minutes} min read")
    return minutes
