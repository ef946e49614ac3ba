from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional

from .commands import build as build_cmd
from .commands import paths as paths_cmd
from .commands import reading_time as reading_time_cmd
from .core.config import ConfigManager, DEFAULT_CONFIG_PATH

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = str(DEFAULT_CONFIG_PATH)

__all__ = [
    'build',
    'paths',
    'reading_time',
    'status',
]


def build(slug: Optional[str] = None, config_path: Optional[str] = None) -> List[str]:
    """Render post pages programmatically.

    Args:
        slug: Optional post UID; when omitted every listed post is rendered.
        config_path: Path to main YAML config; defaults to the data-dir config.

    Returns:
        Paths of the written HTML files.
    """
    cfg_path = config_path or _DEFAULT_CONFIG
    return [str(p) for p in build_cmd.run(cfg_path, slug)]


def paths(config_path: Optional[str] = None) -> List[str]:
    """Return the slugs of all posts in the CMS."""
    cfg_path = config_path or _DEFAULT_CONFIG
    return [entry['params']['slug'] for entry in paths_cmd.run(cfg_path)['paths']]


def reading_time(slug: str, config_path: Optional[str] = None) -> int:
    """Return the estimated reading time of one post, in minutes."""
    cfg_path = config_path or _DEFAULT_CONFIG
    return reading_time_cmd.run(cfg_path, slug)


def status(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Return configuration and environment status for programmatic use."""
    cfg_path = config_path or _DEFAULT_CONFIG
    info: Dict[str, Any] = {'config_path': cfg_path}
    if not os.path.exists(cfg_path):
        info.update({'valid': False, 'error': f'Config file not found: {cfg_path}'})
        return info
    try:
        cm = ConfigManager(cfg_path)
        valid = cm.validate_config()
        info.update({
            'valid': bool(valid),
            'api_endpoint': cm.get_prismic_settings().get('api_endpoint'),
            'has_access_token': cm.resolve_access_token() is not None,
            'site': cm.get_site_settings(),
        })
        return info
    except Exception as e:
        info.update({'valid': False, 'error': str(e)})
        return info
