"""
Server Configuration

Loads configuration from environment variables and provides defaults.
Supports loading from .env file using python-dotenv.
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from boat_feed.models.config import DEFAULT_CONFIG, FeedConfig

# Single .env at the project root
root_env = Path(__file__).resolve().parent.parent / ".env"
if root_env.exists():
    load_dotenv(root_env)


@dataclass
class ServerConfig:
    """Server configuration."""

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    # Catalog: "http" (remote catalog API) | "json" (local file)
    catalog_source: str = "http"
    catalog_api_url: str = "https://batoo.api.digibusiness.it/Navis2WS/v2/boats"
    catalog_api_token: Optional[str] = None
    catalog_timeout_seconds: float = 10.0
    catalog_json_path: Optional[Path] = None

    # Broker notification; no URL means notifications are only logged
    contact_api_url: Optional[str] = None
    default_broker_email: str = "info@batoo.it"

    # Optional persistence of swipe ledgers and daily counters
    swipes_json_path: Optional[Path] = None

    # Optional JSON file merged over FeedConfig defaults
    feed_config_path: Optional[Path] = None

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Load configuration from environment variables."""
        base_dir = Path(__file__).parent.parent
        catalog_source = os.getenv("CATALOG_SOURCE", "").strip().lower() or "http"
        if catalog_source not in ("http", "json"):
            catalog_source = "http"

        def _path_env(key: str) -> Optional[Path]:
            v = os.getenv(key)
            if not v:
                return None
            p = Path(v)
            return p if p.is_absolute() else (base_dir / p).resolve()

        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            catalog_source=catalog_source,
            catalog_api_url=os.getenv("CATALOG_API_URL", cls.catalog_api_url),
            catalog_api_token=os.getenv("CATALOG_API_TOKEN") or None,
            catalog_timeout_seconds=float(os.getenv("CATALOG_TIMEOUT_SECONDS", "10")),
            catalog_json_path=_path_env("CATALOG_JSON_PATH"),
            contact_api_url=os.getenv("CONTACT_API_URL") or None,
            default_broker_email=os.getenv("DEFAULT_BROKER_EMAIL", cls.default_broker_email),
            swipes_json_path=_path_env("SWIPES_JSON_PATH"),
            feed_config_path=_path_env("FEED_CONFIG_PATH"),
        )

    def validate(self) -> tuple[bool, list[str]]:
        """
        Validate the configuration.

        Returns:
            (is_valid, list_of_errors)
        """
        errors = []

        if self.catalog_source == "json":
            if not self.catalog_json_path:
                errors.append("CATALOG_JSON_PATH is required when CATALOG_SOURCE=json")
            elif not self.catalog_json_path.exists():
                errors.append(f"Catalog JSON not found: {self.catalog_json_path}")
        elif not self.catalog_api_url:
            errors.append("CATALOG_API_URL is required when CATALOG_SOURCE=http")

        if self.catalog_timeout_seconds <= 0:
            errors.append("CATALOG_TIMEOUT_SECONDS must be positive")

        if self.feed_config_path and not self.feed_config_path.exists():
            errors.append(f"Feed config not found: {self.feed_config_path}")

        return len(errors) == 0, errors

    def load_feed_config(self) -> FeedConfig:
        """FeedConfig from feed_config_path merged over defaults, or the defaults."""
        if not self.feed_config_path:
            return DEFAULT_CONFIG
        with open(self.feed_config_path) as f:
            return FeedConfig.from_dict(json.load(f))


# Global config instance
_config: Optional[ServerConfig] = None


def get_config() -> ServerConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ServerConfig.from_env()
    return _config


def reload_config() -> ServerConfig:
    """Reload configuration from environment."""
    global _config
    _config = None
    return get_config()
