"""
Site configuration loader for highlight_param.

The site configuration is a YAML file (by default _config.yml next to the
templates) holding site-wide settings and data:

    highlighter: rouge
    highlighter_prefix: "<figure>"
    highlighter_suffix: "</figure>"
    title: My Site

It selects the highlighter backend and is exposed to templates as `site`.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional

from ..config import appsettings


class SiteConfigError(Exception):
    """Raised when the site configuration cannot be loaded"""
    pass


# Top-level config keys that are also exposed as plain template variables
AFFIX_KEYS = ("highlighter_prefix", "highlighter_suffix")


class SiteConfig:
    """
    Represents a site's configuration.

    A missing configuration file is not an error: the site then runs on
    application defaults.
    """

    def __init__(self, config_path: Optional[Path] = None):
        """
        Load a site configuration file.

        Args:
            config_path: Path to the YAML config (None for an empty config)

        Raises:
            SiteConfigError: If the file exists but cannot be parsed, or does
                             not hold a mapping
        """
        self.config_path = Path(config_path) if config_path is not None else None
        self.config: Dict[str, Any] = self._config_load()

    def _config_load(self) -> Dict[str, Any]:
        """Load and parse the YAML config"""
        if self.config_path is None or not self.config_path.exists():
            return {}
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                config: Any = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise SiteConfigError(f"Failed to parse {self.config_path.name}: {e}")
        except OSError as e:
            raise SiteConfigError(f"Failed to load {self.config_path.name}: {e}")

        if config is None:
            return {}
        if not isinstance(config, dict):
            raise SiteConfigError(
                f"{self.config_path.name} must contain a mapping, "
                f"got {type(config).__name__}"
            )
        return config

    def config_get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Supports nested keys with dot notation:
          site.config_get('defaults.lang', 'text')

        Args:
            key: Configuration key (supports dot notation)
            default: Default value if key doesn't exist

        Returns:
            Configuration value or default
        """
        keys: list[str] = key.split('.')
        value: Any = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    @property
    def highlighter(self) -> str:
        """Configured highlighter backend (default: appsettings.highlighter)"""
        return self.config_get('highlighter', appsettings.highlighter)

    def variables(self) -> Dict[str, Any]:
        """
        Template variables contributed by the site configuration.

        Returns:
            {"site": <whole config>} plus any highlighter_prefix /
            highlighter_suffix keys, which the tag reads as plain variables
        """
        variables: Dict[str, Any] = {"site": self.config}
        for key in AFFIX_KEYS:
            if key in self.config:
                variables[key] = self.config[key]
        return variables

    def __repr__(self) -> str:
        return f"SiteConfig(path='{self.config_path}')"
