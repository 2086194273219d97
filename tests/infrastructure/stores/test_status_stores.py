"""Tests for the Redis and in-memory stores."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from mailrelay.domain import DeliveryStatus, ParsedMail
from mailrelay.infrastructure.stores import (
    MemoryMailCache,
    MemoryStatusStore,
    RedisMailCache,
    RedisStatusStore,
)


def _redis(get_value=None) -> MagicMock:
    client = MagicMock()
    client.get = AsyncMock(return_value=get_value)
    client.set = AsyncMock(return_value=True)
    return client


class TestRedisStatusStore:
    @pytest.mark.anyio
    async def test_load_without_guardian_returns_fresh_status(self) -> None:
        client = _redis(json.dumps({"forwarded_to": ["a@x"], "notified": True}))
        store = RedisStatusStore(client)

        status = await store.load("<id@x>", guardian_mode=False)

        assert status == DeliveryStatus()
        client.get.assert_not_awaited()

    @pytest.mark.anyio
    async def test_load_unknown_key_returns_empty_status(self) -> None:
        store = RedisStatusStore(_redis(None))

        status = await store.load("<id@x>", guardian_mode=True)

        assert status.forwarded_to == []
        assert status.notified is False

    @pytest.mark.anyio
    async def test_load_existing_status(self) -> None:
        client = _redis(json.dumps({"forwarded_to": ["a@x"], "notified": True}))
        store = RedisStatusStore(client)

        status = await store.load("<id@x>", guardian_mode=True)

        assert status == DeliveryStatus(forwarded_to=["a@x"], notified=True)
        client.get.assert_awaited_once_with("mailrelay:status:<id@x>")

    @pytest.mark.anyio
    @pytest.mark.parametrize("payload", ["not json", "[1, 2]"])
    async def test_load_unreadable_payload_starts_fresh(self, payload: str) -> None:
        store = RedisStatusStore(_redis(payload))

        assert await store.load("<id@x>", guardian_mode=True) == DeliveryStatus()

    @pytest.mark.anyio
    async def test_save_sets_json_with_ttl(self) -> None:
        client = _redis()
        store = RedisStatusStore(client)

        await store.save("<id@x>", DeliveryStatus(forwarded_to=["a@x"]), ttl_seconds=3600)

        key, value = client.set.call_args.args
        assert key == "mailrelay:status:<id@x>"
        assert json.loads(value) == {"forwarded_to": ["a@x"], "notified": False}
        assert client.set.call_args.kwargs == {"ex": 3600}


class TestRedisMailCache:
    @pytest.mark.anyio
    async def test_put_and_get(self) -> None:
        mail = ParsedMail(id="abc", message_id="<m@x>", sender="a@x", recipient="b@x", subject="Hi", text="t")
        client = _redis(json.dumps(mail.to_dict()))
        cache = RedisMailCache(client)

        await cache.put(mail, ttl_seconds=60)
        loaded = await cache.get("abc")

        client.set.assert_awaited_once()
        assert client.set.call_args.args[0] == "mailrelay:mail:abc"
        assert client.set.call_args.kwargs == {"ex": 60}
        assert loaded == mail

    @pytest.mark.anyio
    async def test_get_missing_returns_none(self) -> None:
        assert await RedisMailCache(_redis(None)).get("nope") is None


class TestMemoryStores:
    @pytest.mark.anyio
    async def test_status_round_trip_in_guardian_mode(self) -> None:
        store = MemoryStatusStore()

        await store.save("k", DeliveryStatus(forwarded_to=["a@x"], notified=True), ttl_seconds=60)

        assert await store.load("k", guardian_mode=True) == DeliveryStatus(["a@x"], True)
        assert await store.load("k", guardian_mode=False) == DeliveryStatus()
        assert store.saves == 1

    @pytest.mark.anyio
    async def test_loaded_status_is_a_copy(self) -> None:
        store = MemoryStatusStore()
        await store.save("k", DeliveryStatus(), ttl_seconds=60)

        loaded = await store.load("k", guardian_mode=True)
        loaded.mark_forwarded("a@x")

        assert (await store.load("k", guardian_mode=True)).forwarded_to == []

    @pytest.mark.anyio
    async def test_entries_expire(self) -> None:
        now = [1000.0]
        store = MemoryStatusStore(clock=lambda: now[0])
        cache = MemoryMailCache(clock=lambda: now[0])
        mail = ParsedMail(id="abc", message_id=None, sender=None, recipient=None, subject=None)

        await store.save("k", DeliveryStatus(notified=True), ttl_seconds=3600)
        await cache.put(mail, ttl_seconds=10)
        now[0] += 11

        assert await cache.get("abc") is None
        assert (await store.load("k", guardian_mode=True)).notified is True

        now[0] += 3600
        assert (await store.load("k", guardian_mode=True)).notified is False
