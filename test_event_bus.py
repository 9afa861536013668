"""
Test the event bus used to notify UI collaborators.
"""

import asyncio

from glam_agents.application.event_bus import EventBus, Events, get_event_bus


def test_sync_and_async_handlers():
    """Handler errors are logged, not raised; unsubscribe stops delivery."""
    print("\n=== TESTING EVENT BUS ===\n")

    bus = EventBus()
    received = []

    def sync_handler(data):
        received.append(("sync", data["n"]))

    async def async_handler(data):
        received.append(("async", data["n"]))

    def broken_handler(data):
        raise RuntimeError("boom")

    async def broken_async_handler(data):
        raise RuntimeError("async boom")

    bus.subscribe("evt", sync_handler)
    bus.subscribe("evt", async_handler)
    bus.subscribe("evt", broken_handler)
    bus.subscribe("evt", broken_async_handler)

    asyncio.run(bus.emit("evt", {"n": 1}))
    bus.unsubscribe("evt", sync_handler)
    asyncio.run(bus.emit("evt", {"n": 2}))

    print(f"  Received: {received}")
    assert received == [("sync", 1), ("async", 1), ("async", 2)]


def test_events_are_scoped_by_type():
    bus = EventBus()
    looks = []
    bus.subscribe(Events.LOOK_APPLIED, lambda data: looks.append(data["look"]))

    asyncio.run(bus.emit(Events.FILTER_APPLIED, {"type": "lipstick"}))
    asyncio.run(bus.emit(Events.LOOK_APPLIED, {"look": "Bridal"}))
    asyncio.run(bus.emit("unknownEvent", {}))

    assert looks == ["Bridal"]


def test_global_bus_is_shared():
    assert get_event_bus() is get_event_bus()


def main():
    test_sync_and_async_handlers()
    test_events_are_scoped_by_type()
    test_global_bus_is_shared()
    print("\n✅ All event bus tests passed")


if __name__ == "__main__":
    main()
