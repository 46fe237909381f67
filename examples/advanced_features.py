"""
Advanced storekit features example.

This example demonstrates advanced storekit features:
- Cookie storage with custom attributes
- Namespaces sharing one backend
- Obfuscated values
- File-backed local storage
- Error handling
"""

import asyncio
import logging
import tempfile
from pathlib import Path

from storekit import (
    CookieOptions,
    FileRawStore,
    SimpleStore,
    StorageHost,
    StorageManager,
    StorageManagerOptions,
)
from storekit.errors import AdapterNotFoundError, StorageError


async def advanced_example():
    """Demonstrate advanced storekit features"""
    print("Advanced storekit Example")
    print("=" * 30)

    host = StorageHost.in_memory(host="app.example.com")

    # 1. Cookies with explicit attributes
    cookies = StorageManager(
        host=host,
        cookie_options=CookieOptions(default_days=30, path="/", same_site="strict"),
    )
    await cookies.set("consent", {"analytics": False}, adapter="cookie")
    print(f"✓ Cookie header: {host.cookies.get_cookie_string()[:60]}...")
    print(f"✓ Consent read back: {await cookies.get('consent', adapter='cookie')}")

    # 2. Two namespaces over the same local store
    billing = StorageManager(StorageManagerOptions(namespace="billing"), host=host)
    profile = StorageManager(StorageManagerOptions(namespace="profile"), host=host)
    await billing.set("id", "inv-001")
    await profile.set("id", "user-42")
    print(f"✓ Raw local keys: {host.local.list_keys()}")
    print(f"✓ Billing keys: {await billing.keys()}")

    # 3. Obfuscated values
    secrets = StorageManager(StorageManagerOptions(default_encrypt=True), host=host)
    await secrets.set("token", "s3cr3t")
    print(f"✓ Stored text: {host.local.get_raw('token')}")
    print(f"✓ Decoded value: {await secrets.get('token')}")

    # 4. File-backed local storage survives a new store
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "local.json"
        store = SimpleStore(host=StorageHost(local=FileRawStore(path)))
        await store.put("theme", "dark")

        reopened = SimpleStore(host=StorageHost(local=FileRawStore(path)))
        print(f"✓ Persisted theme: {await reopened.get('theme')}")

    # 5. Error handling
    try:
        await cookies.get("anything", adapter="redis")
    except AdapterNotFoundError as e:
        print(f"  ✓ Unknown adapter rejected: {e.to_dict()}")

    bare = StorageManager(host=StorageHost())
    try:
        await bare.set("k", "v", adapter="session")
    except StorageError as e:
        print(f"  ✓ Missing backend reported: {type(e).__name__}: {e}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(advanced_example())
