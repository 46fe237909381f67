"""
Tests for storage adapters: availability probing, pass-through behavior,
lenient reads and the cookie adapter's wire format and scoping.
"""

from email.utils import parsedate_to_datetime
from unittest.mock import MagicMock

import pytest

from storekit.adapters import (
    CookieOptions,
    CookieStorageAdapter,
    LocalStorageAdapter,
    MemoryStorageAdapter,
    SessionStorageAdapter,
)
from storekit.adapters.cookie import DAY_MS
from storekit.errors import BackendUnavailableError, StorageWriteError
from storekit.host import CookieJar, DictRawStore, FileRawStore, RawStore
from storekit.item import StorageItem, serialize_item
from storekit.util.encoding import uri_component_encode


class TestAvailability:
    """Test construction-time availability probing"""

    def test_memory_always_available(self):
        adapter = MemoryStorageAdapter()
        assert adapter.available is True
        assert adapter.unavailable_reason is None

    def test_missing_raw_store_is_unavailable(self):
        adapter = LocalStorageAdapter(None)
        assert adapter.available is False
        assert "localStorage" in adapter.unavailable_reason

    def test_failing_raw_store_is_unavailable(self):
        raw = MagicMock(spec=RawStore)
        raw.set_raw.side_effect = OSError("storage disabled")

        adapter = SessionStorageAdapter(raw)
        assert adapter.available is False
        assert "storage disabled" in adapter.unavailable_reason

    def test_probe_leaves_no_trace(self):
        raw = DictRawStore()
        LocalStorageAdapter(raw)
        assert raw.list_keys() == []

    def test_probe_runs_once(self):
        raw = MagicMock(spec=RawStore)
        raw.get_raw.return_value = None
        adapter = LocalStorageAdapter(raw)
        assert raw.set_raw.call_count == 1

        for _ in range(3):
            adapter.ensure_available()
        assert raw.set_raw.call_count == 1

    @pytest.mark.asyncio
    async def test_unavailable_adapter_fails_fast(self):
        adapter = LocalStorageAdapter(None)
        item = StorageItem("v", 1)

        with pytest.raises(BackendUnavailableError):
            await adapter.put("k", item)
        with pytest.raises(BackendUnavailableError):
            await adapter.fetch("k")
        with pytest.raises(BackendUnavailableError):
            await adapter.delete("k")
        with pytest.raises(BackendUnavailableError):
            await adapter.wipe()
        with pytest.raises(BackendUnavailableError):
            await adapter.list_keys()


class TestRawStoreAdapters:
    """Test memory, local and session pass-through adapters"""

    @pytest.mark.asyncio
    async def test_put_writes_envelope_text(self):
        raw = DictRawStore()
        adapter = LocalStorageAdapter(raw)
        item = StorageItem({"a": 1}, created_at=100, ttl=50)

        await adapter.put("k", item)

        assert raw.get_raw("k") == serialize_item(item)
        assert await adapter.fetch("k") == item

    @pytest.mark.asyncio
    async def test_fetch_missing_and_empty(self):
        raw = DictRawStore({"empty": ""})
        adapter = SessionStorageAdapter(raw)

        assert await adapter.fetch("missing") is None
        assert await adapter.fetch("empty") is None

    @pytest.mark.asyncio
    async def test_fetch_foreign_data_leniently(self, clock):
        raw = DictRawStore({"json": '{"external": true}', "text": "written by someone else"})
        adapter = LocalStorageAdapter(raw, clock=clock)

        assert await adapter.fetch("json") == StorageItem({"external": True}, clock.now, None)
        assert await adapter.fetch("text") == StorageItem("written by someone else", clock.now, None)

    @pytest.mark.asyncio
    async def test_obfuscated_adapter(self):
        raw = DictRawStore()
        adapter = LocalStorageAdapter(raw, obfuscate=True)

        await adapter.put("k", StorageItem("secret value", 1))

        assert "secret value" not in raw.get_raw("k")
        assert (await adapter.fetch("k")).value == "secret value"

    @pytest.mark.asyncio
    async def test_per_call_obfuscation_override(self):
        raw = DictRawStore()
        adapter = LocalStorageAdapter(raw, obfuscate=False)

        await adapter.put("k", StorageItem("hidden", 1), obfuscate=True)

        assert "hidden" not in raw.get_raw("k")
        assert (await adapter.fetch("k")).value == "hidden"

    @pytest.mark.asyncio
    async def test_delete_wipe_and_list(self):
        adapter = MemoryStorageAdapter()
        for key in ("a", "b", "c"):
            await adapter.put(key, StorageItem(key, 1))

        await adapter.delete("b")
        await adapter.delete("missing")
        assert sorted(await adapter.list_keys()) == ["a", "c"]

        await adapter.wipe()
        assert await adapter.list_keys() == []

    @pytest.mark.asyncio
    async def test_memory_instances_do_not_share_state(self):
        first = MemoryStorageAdapter()
        second = MemoryStorageAdapter()

        await first.put("k", StorageItem("v", 1))
        assert await second.fetch("k") is None

    @pytest.mark.asyncio
    async def test_quota_exceeded_raises_write_error(self, tmp_path):
        adapter = LocalStorageAdapter(FileRawStore(tmp_path / "local.json", max_bytes=200))

        with pytest.raises(StorageWriteError) as exc_info:
            await adapter.put("big", StorageItem("x" * 500, 1))

        assert exc_info.value.adapter == "localStorage"
        assert exc_info.value.to_dict()["error"] == "write_failed"
        assert exc_info.value.is_retryable() is False

    @pytest.mark.asyncio
    async def test_unserializable_value_raises_write_error(self):
        adapter = MemoryStorageAdapter()
        with pytest.raises(StorageWriteError):
            await adapter.put("k", StorageItem({1, 2, 3}, 1))


class TestCookieAdapter:
    """Test the cookie adapter"""

    @pytest.fixture
    def jar(self, clock):
        return CookieJar(host="example.com", path="/", clock=clock)

    @pytest.mark.asyncio
    async def test_round_trip(self, jar, clock):
        adapter = CookieStorageAdapter(jar, clock=clock)
        item = StorageItem({"user": "ana", "tags": ["a; b", "c=d"]}, clock.now)

        await adapter.put("user prefs", item)

        assert await adapter.fetch("user prefs") == item
        assert await adapter.list_keys() == ["user prefs"]

    @pytest.mark.asyncio
    async def test_cookie_name_and_value_are_uri_encoded(self, jar, clock):
        adapter = CookieStorageAdapter(jar, clock=clock)
        item = StorageItem("v", clock.now)

        await adapter.put("a b", item)

        cookie = jar.all_cookies()[0]
        assert cookie.name == uri_component_encode("a b")
        assert cookie.value == uri_component_encode(serialize_item(item))

    @pytest.mark.asyncio
    async def test_default_expiry_in_days(self, jar, clock):
        adapter = CookieStorageAdapter(jar, clock=clock)
        await adapter.put("k", StorageItem("v", clock.now))

        cookie = jar.all_cookies()[0]
        # HTTP dates have second precision
        assert abs(cookie.expires_at - (clock.now + 7 * DAY_MS)) < 1000

    @pytest.mark.asyncio
    async def test_ttl_rounded_up_to_whole_days(self, jar, clock):
        adapter = CookieStorageAdapter(jar, clock=clock)
        await adapter.put("k", StorageItem("v", clock.now, ttl=int(1.5 * DAY_MS)))

        cookie = jar.all_cookies()[0]
        assert abs(cookie.expires_at - (clock.now + 2 * DAY_MS)) < 1000

    @pytest.mark.asyncio
    async def test_attributes_written(self, clock):
        jar = MagicMock(spec=CookieJar)
        jar.get_cookie_string.return_value = ""
        options = CookieOptions(path="/app", domain="example.com", secure=True, same_site="strict")
        adapter = CookieStorageAdapter(jar, options=options, clock=clock)
        jar.set_cookie.reset_mock()

        await adapter.put("k", StorageItem("v", clock.now))

        cookie_string = jar.set_cookie.call_args[0][0]
        parts = [part.strip() for part in cookie_string.split(";")]
        assert parts[0].startswith("k=")
        assert parts[1].startswith("expires=")
        assert parsedate_to_datetime(parts[1][len("expires="):]) is not None
        assert parts[2:] == ["path=/app", "domain=example.com", "secure", "samesite=strict"]

    @pytest.mark.asyncio
    async def test_host_enforces_expiry(self, jar, clock):
        adapter = CookieStorageAdapter(jar, clock=clock)
        await adapter.put("k", StorageItem("v", clock.now, ttl=1000))

        clock.advance(DAY_MS + 1000)
        assert await adapter.fetch("k") is None

    @pytest.mark.asyncio
    async def test_delete(self, jar, clock):
        adapter = CookieStorageAdapter(jar, options=CookieOptions(domain="example.com"), clock=clock)
        await adapter.put("k", StorageItem("v", clock.now))

        await adapter.delete("k")
        await adapter.delete("never-set")
        assert await adapter.fetch("k") is None

    @pytest.mark.asyncio
    async def test_wipe_is_bounded_by_path(self, clock):
        jar = CookieJar(path="/app/page", clock=clock)
        jar.set_cookie("foreign=1; path=/")
        adapter = CookieStorageAdapter(jar, options=CookieOptions(path="/app"), clock=clock)
        await adapter.put("k", StorageItem("v", clock.now))

        await adapter.wipe()

        # The cookie written under another path survives
        assert await adapter.fetch("k") is None
        assert jar.cookie == "foreign=1"
        assert await adapter.list_keys() == ["foreign"]

    @pytest.mark.asyncio
    async def test_oversized_value_raises_write_error(self, jar, clock):
        adapter = CookieStorageAdapter(jar, clock=clock)
        with pytest.raises(StorageWriteError):
            await adapter.put("k", StorageItem("x" * 5000, clock.now))

    def test_missing_jar_is_unavailable(self):
        adapter = CookieStorageAdapter(None)
        assert adapter.available is False

    def test_secure_cookies_in_insecure_context_unavailable(self, clock):
        jar = CookieJar(secure_context=False, clock=clock)
        adapter = CookieStorageAdapter(jar, options=CookieOptions(secure=True), clock=clock)
        assert adapter.available is False

    def test_invalid_same_site_rejected(self, jar):
        with pytest.raises(ValueError):
            CookieStorageAdapter(jar, options=CookieOptions(same_site="sometimes"))
