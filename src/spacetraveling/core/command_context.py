"""
Command context for shared initialization across CLI commands.

Loads and validates the configuration and constructs the single Prismic
client that every data hook of a command receives.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Any

from .config import ConfigManager
from .http_client import HTTPClient
from .paths import post_page_path
from .prismic_client import PrismicClient


logger = logging.getLogger(__name__)


class CommandContext:
    """Encapsulates shared initialization logic for CLI commands.

    Example:
        ```python
        with CommandContext(config_path) as ctx:
            post = load_post(ctx.client, "my-first-post")
        ```
    """

    def __init__(self, config_path: Optional[str] = None, client: Optional[PrismicClient] = None):
        """Initialize command context with config and content-source client.

        Args:
            config_path: Path to main config file (None = use default)
            client: Optional pre-built client; built from config when omitted

        Raises:
            ValueError: If configuration is invalid
        """
        self.config_manager = ConfigManager(config_path)

        if not self.config_manager.validate_config():
            raise ValueError("Invalid configuration. Run 'spacetraveling status' for details.")

        self.config = self.config_manager.load_config()
        self.client = client or self._build_client()

        logger.debug(f"CommandContext initialized with config from {self.config_manager.config_path}")

    def _build_client(self) -> PrismicClient:
        prismic_cfg = self.config_manager.get_prismic_settings()
        http = HTTPClient(timeout=prismic_cfg.get('timeout', 15))
        return PrismicClient(
            prismic_cfg['api_endpoint'],
            access_token=self.config_manager.resolve_access_token(),
            http=http,
        )

    def get_setting(self, section: str, key: str, default: Any = None) -> Any:
        """Get ``config[section][key]`` or *default*.

        Example:
            ```python
            page_size = ctx.get_setting('prismic', 'page_size', 100)
            ```
        """
        values = self.config.get(section) or {}
        value = values.get(key)
        return value if value is not None else default

    def output_path_for(self, slug: str) -> Path:
        """Return the HTML file path for the post page *slug*."""
        return post_page_path(self.get_setting('site', 'output_dir', 'html'), slug)

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - close the client's HTTP session."""
        self.client.close()
