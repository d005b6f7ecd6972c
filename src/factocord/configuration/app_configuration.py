from __future__ import annotations
from pathlib import Path
import fcntl
from typing import Any, Dict
import yaml

from factocord.util.logger import get_logger

logger = get_logger("app_configuration")


CONFIG_PATH = Path("./config/app_config.yml").resolve()

DEFAULT_DOCS_BASE_URL = "https://lua-api.factorio.com/latest"
DEFAULT_WIKI_BASE_URL = "https://wiki.factorio.com"
DEFAULT_FFF_BLOG_URL = "https://www.factorio.com/blog"
DEFAULT_MOD_PORTAL_URL = "https://mods.factorio.com"
DEFAULT_MOD_ASSETS_URL = "https://assets-mod.factorio.com"

# Both thresholds were picked by hand and are worth revisiting.
DEFAULT_FUZZY_THRESHOLD = 0.5
DEFAULT_LEAD_SECTION_MIN_LENGTH = 100


class AppConfig:
    """File-lock based accessor around the YAML application configuration.

    The class caches the contents of ``./config/app_config.yml`` and exposes
    dictionary-like access plus typed shortcuts for the documentation sources,
    refresh intervals and matching thresholds. Missing keys fall back to the
    public Factorio endpoints and defaults.
    """

    def __init__(self, config_path: Path) -> None:
        self.config_path = config_path
        self._data: Dict[str, Any] = {}
        self.reload()

    # --------------------------
    # Private helpers
    # --------------------------
    def load_from_disk(self) -> Dict[str, Any]:
        try:
            with self.config_path.open("r", encoding="utf-8") as f:
                fcntl.flock(f.fileno(), fcntl.LOCK_SH)
                data = yaml.safe_load(f)
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)
                return data if isinstance(data, dict) else {}
        except FileNotFoundError:
            logger.error("[APP CONFIGURATION] Config file %s not found.", self.config_path)
        except Exception as exc:
            logger.error("[APP CONFIGURATION] Failed to load config %s: %s", self.config_path, exc)
        return {}

    def _section(self, name: str) -> Dict[str, Any]:
        section = self._data.get(name, {})
        return section if isinstance(section, dict) else {}

    # --------------------------
    # Public API
    # --------------------------
    def reload(self) -> Dict[str, Any]:
        """Reload configuration from disk and return the loaded mapping.

        Returns an empty dict (and keeps every default) when the file is
        missing or unreadable.
        """
        self._data = self.load_from_disk()
        return self._data

    @property
    def data(self) -> Dict[str, Any]:
        """Return the current cached configuration mapping. Do not mutate it."""
        return self._data

    def get(self, key: str, default: Any = None) -> Any:
        """Safe lookup for top-level configuration keys."""
        return self._data.get(key, default)

    # --------------------------
    # API documentation
    # --------------------------
    @property
    def docs_base_url(self) -> str:
        return str(self._section("api").get("docs_base_url") or DEFAULT_DOCS_BASE_URL).rstrip("/")

    @property
    def runtime_api_url(self) -> str:
        return str(self._section("api").get("runtime_url") or f"{self.docs_base_url}/runtime-api.json")

    @property
    def data_api_url(self) -> str:
        return str(self._section("api").get("data_url") or f"{self.docs_base_url}/prototype-api.json")

    @property
    def api_refresh_interval(self) -> float:
        """Seconds between documentation refreshes. Defaults to one day."""
        return float(self._section("api").get("refresh_interval_seconds", 86400.0))

    @property
    def request_timeout(self) -> float:
        return float(self._section("api").get("request_timeout_seconds", 30.0))

    # --------------------------
    # Wiki
    # --------------------------
    @property
    def wiki_base_url(self) -> str:
        return str(self._section("wiki").get("base_url") or DEFAULT_WIKI_BASE_URL).rstrip("/")

    @property
    def wiki_api_url(self) -> str:
        return str(self._section("wiki").get("api_url") or f"{self.wiki_base_url}/api.php")

    @property
    def lead_section_min_length(self) -> int:
        """Lead sections shorter than this also get the first following section."""
        return int(self._section("wiki").get("lead_section_min_length", DEFAULT_LEAD_SECTION_MIN_LENGTH))

    # --------------------------
    # Friday Facts and mod portal
    # --------------------------
    @property
    def fff_blog_url(self) -> str:
        return str(self._section("fff").get("blog_url") or DEFAULT_FFF_BLOG_URL).rstrip("/")

    @property
    def mod_portal_url(self) -> str:
        return str(self._section("mods").get("portal_url") or DEFAULT_MOD_PORTAL_URL).rstrip("/")

    @property
    def mod_search_api_url(self) -> str:
        return str(self._section("mods").get("search_api_url") or f"{self.mod_portal_url}/api/search")

    @property
    def mod_assets_url(self) -> str:
        return str(self._section("mods").get("assets_url") or DEFAULT_MOD_ASSETS_URL).rstrip("/")

    # --------------------------
    # About
    # --------------------------
    @property
    def source_url(self) -> str | None:
        return self._section("about").get("source_url") or None

    @property
    def invite_url(self) -> str | None:
        return self._section("about").get("invite_url") or None

    # --------------------------
    # FAQ
    # --------------------------
    @property
    def fuzzy_threshold(self) -> float:
        """Minimum similarity (0-1, exclusive) for a closest-match FAQ suggestion."""
        return float(self._section("faq").get("fuzzy_threshold", DEFAULT_FUZZY_THRESHOLD))

    @property
    def faq_cache_refresh_interval(self) -> float:
        return float(self._section("faq").get("cache_refresh_interval_seconds", 300.0))

    # --------------------------
    # Storage
    # --------------------------
    @property
    def database_path(self) -> Path:
        return Path(self._section("database").get("path") or "./data/factocord.db").resolve()


# Shared application-wide configuration instance
app_config = AppConfig(CONFIG_PATH)
