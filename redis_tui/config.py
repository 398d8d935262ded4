# coding: utf-8
"""
Connection settings for the Redis terminal inspector.

Settings come from three layers: built-in defaults, an optional JSON config
file and command-line flags, each overriding the previous one.
"""
import json
import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple
from urllib.parse import urlsplit, urlunsplit

logger = logging.getLogger(__name__)

# --- Config File Path ---
CONFIG_FILE = Path.home() / ".redis_tui_config.json"

DEFAULT_PATTERN = "*"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class ConnectionSettings:
    host: str = "127.0.0.1"
    port: int = 6379
    db: int = 0
    username: Optional[str] = None
    password: Optional[str] = None
    use_ssl: bool = False
    verify_ssl: bool = True
    timeout: float = 5.0
    url: Optional[str] = None

    def merged(self, overrides: Dict[str, Any]) -> "ConnectionSettings":
        """Return a copy with every non-None override applied."""
        known = {f.name for f in fields(self)}
        changes = {k: v for k, v in overrides.items() if k in known and v is not None}
        return replace(self, **changes)

    def describe(self) -> str:
        """Connection descriptor for display, with the password masked."""
        if self.url:
            return mask_url(self.url)
        scheme = "rediss" if self.use_ssl else "redis"
        auth = ""
        if self.username or self.password:
            auth = f"{self.username or ''}{':***' if self.password else ''}@"
        return f"{scheme}://{auth}{self.host}:{self.port}/{self.db}"


def mask_url(url: str) -> str:
    parts = urlsplit(url)
    if parts.password is None:
        return url
    userinfo = f"{parts.username or ''}:***"
    host = parts.hostname or ""
    if parts.port is not None:
        host = f"{host}:{parts.port}"
    return urlunsplit((parts.scheme, f"{userinfo}@{host}", parts.path, parts.query, parts.fragment))


def _coerce_connection(raw: Dict[str, Any]) -> Dict[str, Any]:
    # Ports and db indexes may be stored as strings ("6379").
    out: Dict[str, Any] = {}
    try:
        for name in ("host", "username", "password", "url"):
            if raw.get(name) not in (None, ""):
                out[name] = str(raw[name])
        if raw.get("port") not in (None, ""):
            out["port"] = int(raw["port"])
        if raw.get("db") not in (None, ""):
            out["db"] = int(raw["db"])
        if raw.get("timeout") not in (None, ""):
            out["timeout"] = float(raw["timeout"])
        if "ssl" in raw:
            out["use_ssl"] = bool(raw["ssl"])
        if "verify_ssl" in raw:
            out["verify_ssl"] = bool(raw["verify_ssl"])
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid connection value in config file: {e}")
    return out


def load_settings(path: Optional[Path] = None) -> Tuple[ConnectionSettings, str]:
    """Load connection settings and key pattern from the JSON config file.

    A missing default file yields defaults. A missing or malformed file that
    was asked for explicitly raises ConfigError.
    """
    explicit = path is not None
    config_path = Path(path) if explicit else CONFIG_FILE
    if not os.path.exists(config_path):
        if explicit:
            raise ConfigError(f"Config file not found: {config_path}")
        return ConnectionSettings(), DEFAULT_PATTERN
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            settings = json.load(f)
    except (IOError, json.JSONDecodeError) as e:
        raise ConfigError(f"Could not load or parse config file: {e}")
    if not isinstance(settings, dict):
        raise ConfigError("Config file must contain a JSON object")
    logger.info("Loaded settings from %s", config_path)
    connection = settings.get("connection", {})
    if not isinstance(connection, dict):
        raise ConfigError("'connection' must be a JSON object")
    pattern = settings.get("pattern") or DEFAULT_PATTERN
    return ConnectionSettings().merged(_coerce_connection(connection)), str(pattern)
