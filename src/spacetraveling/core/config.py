"""Configuration management for the YAML config file."""

import os
import logging
import shutil
from pathlib import Path
from typing import Any, Dict, List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from .dates import MONTH_ABBREVIATIONS
from .paths import get_data_dir, get_system_path

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = get_data_dir() / "config"
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.yaml"
_TEMPLATE_CONFIG = get_system_path("config", "config.yaml")

DEFAULT_TOKEN_FILENAME = "prismic_token.env"
DEFAULT_WORDS_PER_MINUTE = 180

_DEFAULT_CONFIG_TEMPLATE = """# Auto-generated default configuration for spacetraveling
prismic:
  api_endpoint: "https://spacetraveling.cdn.prismic.io/api/v2"
  access_token_env: "PRISMIC_ACCESS_TOKEN"
  page_size: 100
  timeout: 15

site:
  output_dir: "html"
  locale: "pt-BR"
  timezone: "UTC"
  words_per_minute: 180
  template: "post_template.html"
  loading_template: "loading_template.html"
"""


def _write_template(path: Path, content: str) -> None:
    """Write templated YAML content to disk with a trailing newline."""
    path.write_text(content.strip() + "\n", encoding="utf-8")


def _load_token_from_file(path: Path) -> Optional[str]:
    """Return the first non-comment line of a token file, if any."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            for line in f:
                value = line.strip()
                if value and not value.startswith('#'):
                    return value
    except OSError:
        return None
    return None


class ConfigManager:
    """Manages loading and validation of the YAML configuration file."""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize the manager and ensure a baseline config file exists."""
        path = Path(config_path or DEFAULT_CONFIG_PATH).expanduser()
        if not path.is_absolute():
            path = path.resolve()
        self.config_path = str(path)
        self.base_dir = str(path.parent)
        self._config = None
        self._ensure_default_config()

    def load_config(self) -> Dict[str, Any]:
        """Load the main configuration file."""
        if self._config is None:
            try:
                with open(self.config_path, 'r', encoding='utf-8') as f:
                    self._config = yaml.safe_load(f) or {}
                logger.info(f"Loaded configuration from {self.config_path}")
            except Exception as e:
                logger.error(f"Failed to load config from {self.config_path}: {e}")
                raise

        return self._config

    def _ensure_default_config(self) -> None:
        """Create the default config file and secrets directory if missing."""
        config_file = Path(self.config_path)
        config_file.parent.mkdir(parents=True, exist_ok=True)

        if not config_file.exists():
            if _TEMPLATE_CONFIG.exists():
                try:
                    shutil.copyfile(_TEMPLATE_CONFIG, config_file)
                    logger.info("Created default config.yaml at %s", config_file)
                except Exception as exc:
                    logger.warning("Failed to copy template config: %s", exc)
                    _write_template(config_file, _DEFAULT_CONFIG_TEMPLATE)
            else:
                _write_template(config_file, _DEFAULT_CONFIG_TEMPLATE)
                logger.info("Created fallback default config.yaml at %s", config_file)

        (Path(self.base_dir) / "secrets").mkdir(parents=True, exist_ok=True)

    def get_prismic_settings(self) -> Dict[str, Any]:
        """Return the ``prismic`` section (empty dict when absent)."""
        return self.load_config().get('prismic') or {}

    def get_site_settings(self) -> Dict[str, Any]:
        """Return the ``site`` section (empty dict when absent)."""
        return self.load_config().get('site') or {}

    def get_words_per_minute(self) -> int:
        return int(self.get_site_settings().get('words_per_minute', DEFAULT_WORDS_PER_MINUTE))

    def resolve_access_token(self) -> Optional[str]:
        """Resolve the Prismic access token from a key file or the environment.

        Checks ``prismic.access_token_file`` (relative to the config directory),
        then ``secrets/prismic_token.env``, then the environment variable named
        by ``prismic.access_token_env``. Public repositories need no token, so
        ``None`` is returned when nothing is configured.
        """
        prismic_cfg = self.get_prismic_settings()
        base_dir = Path(self.base_dir)
        candidate_files: List[Path] = []

        token_file_cfg = (prismic_cfg.get('access_token_file') or '').strip()
        if token_file_cfg:
            token_path = Path(token_file_cfg).expanduser()
            candidate_files.append(token_path if token_path.is_absolute() else base_dir / token_path)
        candidate_files.append(base_dir / 'secrets' / DEFAULT_TOKEN_FILENAME)

        for path in candidate_files:
            token = _load_token_from_file(path)
            if token:
                logger.debug("Using Prismic access token from %s", path)
                return token

        env_var = prismic_cfg.get('access_token_env') or 'PRISMIC_ACCESS_TOKEN'
        token = os.environ.get(env_var)
        if token:
            return token.strip()

        logger.debug("No Prismic access token configured; using public API access")
        return None

    def validate_config(self) -> bool:
        """Validate the configuration file."""
        try:
            config = self.load_config()

            required_sections = ['prismic', 'site']
            for section in required_sections:
                if not isinstance(config.get(section), dict):
                    logger.error(f"Missing required section '{section}' in main config")
                    return False

            prismic_cfg = config['prismic']
            endpoint = prismic_cfg.get('api_endpoint')
            if not isinstance(endpoint, str) or not endpoint.strip():
                logger.error("'prismic.api_endpoint' must be a non-empty string")
                return False
            if not endpoint.startswith(('http://', 'https://')):
                logger.error(f"'prismic.api_endpoint' is not an http(s) URL: {endpoint}")
                return False

            for key in ('page_size', 'timeout'):
                value = prismic_cfg.get(key)
                if value is not None and (not isinstance(value, (int, float)) or value <= 0):
                    logger.error(f"'prismic.{key}' must be a positive number")
                    return False

            site_cfg = config['site']
            wpm = site_cfg.get('words_per_minute')
            if wpm is not None and (isinstance(wpm, bool) or not isinstance(wpm, int) or wpm < 1):
                logger.error("'site.words_per_minute' must be a whole number of at least 1")
                return False

            locale = site_cfg.get('locale')
            if locale is not None and locale not in MONTH_ABBREVIATIONS:
                logger.error(
                    f"Unsupported 'site.locale' {locale!r}; expected one of {sorted(MONTH_ABBREVIATIONS)}"
                )
                return False

            timezone = site_cfg.get('timezone')
            if timezone is not None and timezone != 'UTC':
                try:
                    ZoneInfo(timezone)
                except (ZoneInfoNotFoundError, ValueError):
                    logger.error(f"Unknown 'site.timezone' {timezone!r}")
                    return False

            logger.info("Configuration validation passed")
            return True

        except Exception as e:
            logger.error(f"Configuration validation failed: {e}")
            return False


__all__ = [
    "ConfigManager",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_CONFIG_DIR",
]
