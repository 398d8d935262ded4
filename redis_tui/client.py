# coding: utf-8
"""
Read-only Redis gateway used by the terminal inspector.

Every failure coming out of redis-py, whether connectivity, timeout or
protocol, is re-raised as StoreError so callers only handle one error kind.
"""
import logging
import ssl
from typing import Any, Dict, List, Optional

import redis

from .config import ConnectionSettings

logger = logging.getLogger(__name__)

# Commands returning the element count for each collection type tag.
COUNT_COMMANDS = {
    "list": "LLEN",
    "set": "SCARD",
    "zset": "ZCARD",
}


class StoreError(Exception):
    pass


def _b2s(val: Any) -> Any:
    """Convert Redis bytes to str recursively."""
    if isinstance(val, bytes):
        try:
            return val.decode("utf-8")
        except UnicodeDecodeError:
            return val.decode("utf-8", errors="replace")
    if isinstance(val, list):
        return [_b2s(v) for v in val]
    if isinstance(val, tuple):
        return tuple(_b2s(v) for v in val)
    if isinstance(val, dict):
        return {_b2s(k): _b2s(v) for k, v in val.items()}
    return val


def _pool_kwargs(settings: ConnectionSettings) -> Dict[str, Any]:
    kwargs: Dict[str, Any] = dict(
        host=settings.host,
        port=settings.port,
        db=settings.db,
        socket_timeout=settings.timeout,
        socket_connect_timeout=settings.timeout,
        decode_responses=False,
    )
    if settings.password:
        kwargs['password'] = settings.password
    if settings.username:
        kwargs['username'] = settings.username
    if settings.use_ssl:
        kwargs['connection_class'] = redis.connection.SSLConnection
        kwargs['ssl_cert_reqs'] = ssl.CERT_REQUIRED if settings.verify_ssl else ssl.CERT_NONE
        kwargs['ssl_check_hostname'] = settings.verify_ssl
    return kwargs


class RedisGateway:
    """Synchronous accessor for the handful of read commands the browser needs."""

    def __init__(self, client: "redis.Redis", pattern: str = "*", scan_count: int = 500):
        self.client = client
        self.pattern = pattern
        self.scan_count = scan_count

    @classmethod
    def from_settings(cls, settings: ConnectionSettings, pattern: str = "*") -> "RedisGateway":
        try:
            if settings.url:
                pool = redis.ConnectionPool.from_url(
                    settings.url,
                    socket_timeout=settings.timeout,
                    socket_connect_timeout=settings.timeout,
                    decode_responses=False,
                )
            else:
                pool = redis.ConnectionPool(**_pool_kwargs(settings))
            client = redis.Redis(connection_pool=pool)
        except Exception as e:
            raise StoreError(f"Failed to initialize Redis client: {e}")
        return cls(client, pattern=pattern)

    def close(self) -> None:
        try:
            self.client.connection_pool.disconnect()
        except Exception as e:
            logger.debug("Ignoring error while disconnecting: %s", e)

    def ping(self) -> bool:
        try:
            return bool(self.client.ping())
        except Exception as e:
            raise StoreError(str(e))

    def list_keys(self) -> List[str]:
        try:
            keys = [_b2s(k) for k in self.client.scan_iter(match=self.pattern, count=self.scan_count)]
            # SCAN may yield a key more than once; keep the first occurrence.
            return list(dict.fromkeys(keys))
        except Exception as e:
            raise StoreError(str(e))

    def get_type(self, key: str) -> str:
        try:
            return _b2s(self.client.type(key))  # bytes or str depending on version
        except Exception as e:
            raise StoreError(str(e))

    def get_ttl(self, key: str) -> int:
        try:
            return int(self.client.ttl(key))
        except Exception as e:
            raise StoreError(str(e))

    def get_value(self, key: str) -> str:
        try:
            val = _b2s(self.client.get(key))
        except Exception as e:
            raise StoreError(str(e))
        return "" if val is None else str(val)

    def get_hash_fields(self, key: str) -> Dict[str, str]:
        try:
            return _b2s(self.client.hgetall(key))
        except Exception as e:
            raise StoreError(str(e))

    def get_count(self, key: str, type_tag: str) -> int:
        command: Optional[str] = COUNT_COMMANDS.get(type_tag)
        if command is None:
            raise StoreError(f"No element count for type {type_tag}")
        try:
            return int(self.client.execute_command(command, key))
        except Exception as e:
            raise StoreError(str(e))
