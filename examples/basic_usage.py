"""
Basic storekit usage example.

This example demonstrates the fundamental storekit operations:
- Creating a storage manager
- Storing and reading values
- Expiration
- Choosing an adapter
"""

import asyncio

from storekit import AdapterType, StorageHost, StorageManager, StorageManagerOptions


async def basic_example():
    """Demonstrate basic storekit usage"""
    print("Basic storekit Example")
    print("=" * 30)

    # 1. Create configuration
    options = StorageManagerOptions(default_expires="1h")

    # 2. Create the manager over in-process backends
    manager = StorageManager(options, host=StorageHost.in_memory())
    print(f"✓ Created manager, default adapter: {manager.default_adapter}")
    print(f"✓ Registered adapters: {', '.join(manager.adapter_names())}")

    # 3. Store and read a value
    await manager.set("user", {"id": 1, "name": "Ana"})
    user = await manager.get("user")
    print(f"✓ Read back user: {user}")

    # 4. Short-lived value
    await manager.set("otp", "493021", expires=100)
    print(f"✓ OTP before expiry: {await manager.get('otp')}")
    await asyncio.sleep(0.2)
    print(f"✓ OTP after expiry: {await manager.get('otp')}")

    # 5. Route to a specific adapter
    await manager.set("draft", "unsaved text", adapter=AdapterType.SESSION_STORAGE)
    print(f"✓ Session draft: {await manager.get('draft', adapter='session')}")
    print(f"✓ Draft visible in local storage: {await manager.has('draft')}")

    # 6. Remove and list
    await manager.remove("user")
    print(f"✓ Keys after removal: {await manager.keys()}")


if __name__ == "__main__":
    asyncio.run(basic_example())
