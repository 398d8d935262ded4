# coding: utf-8
"""
Per-key metadata: type dispatch, summary formatting and the detail cache.
"""
import enum
import logging
from dataclasses import dataclass
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class KeyType(enum.Enum):
    STRING = "string"
    HASH = "hash"
    LIST = "list"
    SET = "set"
    SORTED_SET = "zset"
    UNKNOWN = "unknown"

    @classmethod
    def from_tag(cls, raw: str) -> "KeyType":
        for member in cls:
            if member is not cls.UNKNOWN and member.value == raw:
                return member
        return cls.UNKNOWN


COLLECTION_LABELS = {
    KeyType.LIST: "List",
    KeyType.SET: "Set",
    KeyType.SORTED_SET: "ZSet",
}


@dataclass(frozen=True)
class KeyDetails:
    key_type: KeyType
    raw_type: str
    ttl_seconds: int
    summary: str
    fields: Optional[Dict[str, str]] = None


def format_ttl(ttl: int) -> str:
    if ttl == -1:
        return "Never expires"
    if ttl == -2:
        return "Key does not exist"
    return f"{ttl} seconds"


def detail_row_count(details: KeyDetails) -> int:
    """Number of scrollable rows: hash fields, or logical lines of the value.

    Word wrapping happens in the terminal surface and does not add rows.
    """
    if details.key_type is KeyType.HASH:
        return len(details.fields or {})
    return max(1, len(details.summary.splitlines()))


class DetailCache:
    """Memoizes KeyDetails per key until the key list is reloaded."""

    def __init__(self, gateway):
        self.gateway = gateway
        self._entries: Dict[str, KeyDetails] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def get(self, key: str) -> Optional[KeyDetails]:
        return self._entries.get(key)

    def clear(self) -> None:
        self._entries.clear()

    def ensure_details(self, key: str) -> KeyDetails:
        """Return cached details for key, fetching them on a miss.

        Raises StoreError when any gateway call fails; nothing is cached then.
        """
        cached = self._entries.get(key)
        if cached is not None:
            logger.debug("Detail cache hit for %r", key)
            return cached
        logger.debug("Detail cache miss for %r", key)
        details = self._fetch(key)
        self._entries[key] = details
        return details

    def _fetch(self, key: str) -> KeyDetails:
        raw_type = self.gateway.get_type(key)
        key_type = KeyType.from_tag(raw_type)
        ttl = self.gateway.get_ttl(key)
        fields: Optional[Dict[str, str]] = None

        if key_type is KeyType.STRING:
            summary = self.gateway.get_value(key)
        elif key_type is KeyType.HASH:
            fields = dict(self.gateway.get_hash_fields(key))
            summary = f"Hash type, {len(fields)} fields"
        elif key_type in COLLECTION_LABELS:
            count = self.gateway.get_count(key, key_type.value)
            summary = f"{COLLECTION_LABELS[key_type]} type, {count} elements"
        elif key_type is KeyType.UNKNOWN:
            summary = f"Unknown type {raw_type}"
        else:
            raise AssertionError(f"Unhandled key type {key_type}")

        return KeyDetails(key_type=key_type, raw_type=raw_type, ttl_seconds=ttl,
                          summary=summary, fields=fields)
