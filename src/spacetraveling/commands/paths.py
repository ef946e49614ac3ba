"""List the post page paths the CMS currently exposes."""

import logging
from typing import Any, Dict, Optional

from ..core.command_context import CommandContext
from ..core.prismic_client import PrismicClient
from ..processors.post_loader import get_static_paths

logger = logging.getLogger(__name__)


def run(config_path: Optional[str] = None, client: Optional[PrismicClient] = None) -> Dict[str, Any]:
    """Return ``{"paths": [{"params": {"slug": ...}}], "fallback": True}``."""
    with CommandContext(config_path, client=client) as ctx:
        page_size = ctx.get_setting('prismic', 'page_size', 100)
        static_paths = get_static_paths(ctx.client, page_size=page_size)
    logger.debug("Path listing returned %d paths", len(static_paths["paths"]))
    return static_paths
