"""Store implementations."""

from mailrelay.infrastructure.stores.factory import get_mail_cache, get_status_store
from mailrelay.infrastructure.stores.memory import MemoryMailCache, MemoryStatusStore
from mailrelay.infrastructure.stores.redis_mail_cache import RedisMailCache
from mailrelay.infrastructure.stores.redis_status_store import RedisStatusStore

__all__ = [
    "MemoryMailCache",
    "MemoryStatusStore",
    "RedisMailCache",
    "RedisStatusStore",
    "get_mail_cache",
    "get_status_store",
]
