"""Configuration loader for the Regulation Explorer.

Provides centralized access to parser, explorer and filter defaults.
"""
from __future__ import annotations

import yaml
from pathlib import Path
from typing import Any, Optional
import structlog

logger = structlog.get_logger(__name__)

CONFIG_FILE = Path(__file__).parent / "explorer_config.yaml"


class ConfigLoader:
    """Process-wide view of explorer_config.yaml.

    A missing file is not an error; every accessor below carries its own
    fallback value.
    """

    _instance: Optional[ConfigLoader] = None
    _config: Optional[dict[str, Any]] = None

    def __new__(cls) -> ConfigLoader:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if self._config is None:
            self._load_config()

    def _load_config(self) -> None:
        if not CONFIG_FILE.exists():
            logger.warning("config_file_not_found", path=str(CONFIG_FILE))
            self._config = {}
            return
        with open(CONFIG_FILE, encoding="utf-8") as f:
            self._config = yaml.safe_load(f) or {}
        logger.info("config_loaded", path=str(CONFIG_FILE))

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a dotted key such as "filters.year_floor".

        Missing or null segments fall back to default, as does descending
        into a scalar.
        """
        node: Any = self._config or {}
        for part in key.split("."):
            if not isinstance(node, dict) or node.get(part) is None:
                return default
            node = node[part]
        return node

    def reload(self) -> None:
        """Re-read CONFIG_FILE, picking up a patched path or edited file."""
        self._config = None
        self._load_config()


# Singleton instance
_config = ConfigLoader()


def get_config() -> ConfigLoader:
    """Get the global config instance."""
    return _config


def get_preamble_rows() -> int:
    """Number of title/metadata rows at the top of the export."""
    return int(_config.get("parser.preamble_rows", 4))


def get_id_prefix() -> str:
    """Prefix every valid record id starts with."""
    return str(_config.get("parser.id_prefix", "reg/"))


def get_page_size() -> int:
    return int(_config.get("explorer.page_size", 50))


def get_data_path() -> str:
    return str(_config.get("explorer.data_path", "data/regulations.csv"))


def get_default_year_floor() -> int:
    """Lower bound of the default publication year range."""
    return int(_config.get("filters.year_floor", 1950))


def get_default_match_mode() -> str:
    """Comparison mode for tag and Yes/No filters (substring or exact)."""
    return str(_config.get("filters.match_mode", "substring"))
