"""Pick Redis or in-memory stores from settings."""

from __future__ import annotations

from loguru import logger

from mailrelay.application.ports.mail_cache import MailCache
from mailrelay.application.ports.status_store import StatusStore
from mailrelay.infrastructure.redis_client import get_redis_client
from mailrelay.infrastructure.stores.memory import MemoryMailCache, MemoryStatusStore
from mailrelay.infrastructure.stores.redis_mail_cache import RedisMailCache
from mailrelay.infrastructure.stores.redis_status_store import RedisStatusStore

_status_store: StatusStore | None = None
_mail_cache: MailCache | None = None


def get_status_store() -> StatusStore:
    """Get or create the status store singleton."""
    global _status_store
    if _status_store is None:
        redis = get_redis_client()
        if redis.configured:
            _status_store = RedisStatusStore(redis.client)
        else:
            logger.warning("REDIS_URL not set, delivery status kept in memory only")
            _status_store = MemoryStatusStore()
    return _status_store


def get_mail_cache() -> MailCache:
    """Get or create the mail preview cache singleton."""
    global _mail_cache
    if _mail_cache is None:
        redis = get_redis_client()
        if redis.configured:
            _mail_cache = RedisMailCache(redis.client)
        else:
            logger.warning("REDIS_URL not set, mail previews kept in memory only")
            _mail_cache = MemoryMailCache()
    return _mail_cache
