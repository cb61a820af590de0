"""
Basic smoke tests for leave-behind core components.
"""

from leave_behind import Coordinate, Event, EventBus, EventFilter, Place, PlaceRegistry


def test_place_creation():
    """Test basic Place dataclass creation."""
    place = Place(
        id="office",
        name="Office",
        center=Coordinate(37.0, -122.0),
        radius_meters=50,
    )
    assert place.id == "office"
    assert place.name == "Office"
    assert place.center.latitude == 37.0
    assert place.modules == {}


def test_registry_create():
    """Test PlaceRegistry place creation."""
    registry = PlaceRegistry()

    home = registry.create_place("Home", 37.0, -122.0, 80)
    assert home.id == "place_1"
    assert home.radius_meters == 80

    office = registry.create_place("Office", 37.1, -122.1)
    assert office.id == "place_2"
    assert office.radius_meters == 60.0

    assert registry.get_place("place_1") == home
    assert registry.all_places() == [home, office]


def test_event_bus_basic():
    """Test basic event bus publish/subscribe."""
    bus = EventBus()
    received = []

    def handler(event: Event):
        received.append(event)

    bus.subscribe(handler)

    event = Event(
        type="position.updated",
        source="host",
        payload={"latitude": 37.0, "longitude": -122.0},
    )
    bus.publish(event)

    assert len(received) == 1
    assert received[0].type == "position.updated"
    assert received[0].payload["latitude"] == 37.0


def test_event_bus_filtering():
    """Test event bus filtering by type."""
    bus = EventBus()
    entered = []
    left = []

    bus.subscribe(lambda e: entered.append(e), EventFilter(event_type="presence.entered"))
    bus.subscribe(lambda e: left.append(e), EventFilter(event_type="presence.left"))

    bus.publish(Event(type="presence.entered", source="presence", place_id="place_1"))
    bus.publish(Event(type="presence.left", source="presence", place_id="place_1"))
    bus.publish(Event(type="reminder.triggered", source="reminders"))

    assert len(entered) == 1
    assert len(left) == 1


def test_event_bus_error_isolation():
    """Test that handler errors don't crash the bus."""
    bus = EventBus()
    received = []

    def bad_handler(event: Event):
        raise ValueError("Intentional error")

    def good_handler(event: Event):
        received.append(event)

    bus.subscribe(bad_handler)
    bus.subscribe(good_handler)

    bus.publish(Event(type="presence.left", source="presence"))

    assert len(received) == 1


def test_event_bus_unsubscribe():
    """Test unsubscribing a handler."""
    bus = EventBus()
    received = []

    def handler(event: Event):
        received.append(event)

    bus.subscribe(handler)
    bus.unsubscribe(handler)
    bus.publish(Event(type="presence.left", source="presence"))

    assert received == []
