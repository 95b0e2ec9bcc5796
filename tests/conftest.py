import pytest

from vehicle_rental import (
    BookingLedger,
    NotificationSystem,
    Observer,
    RentalCatalog,
    RentalSystemFactory,
    User,
    UserRole,
    Vehicle,
)


class RecordingObserver(Observer):
    """Observer that appends (name, message) to a shared log"""

    def __init__(self, name, log):
        self.name = name
        self.log = log

    def update(self, message):
        self.log.append((self.name, message))


@pytest.fixture
def notification_system():
    return NotificationSystem()


@pytest.fixture
def ledger(notification_system):
    return BookingLedger(notification_system)


@pytest.fixture
def catalog():
    return RentalCatalog(seed=True)


@pytest.fixture
def system():
    return RentalSystemFactory.create_seeded_system()


@pytest.fixture
def customer():
    return User("customer1", "pass123", "Budi Santoso", UserRole.CUSTOMER)


@pytest.fixture
def avanza():
    return Vehicle("V001", "Toyota Avanza", "MPV", 15000)


@pytest.fixture
def scripted_input():
    """Build an input function that replays the given answers"""
    def build(answers):
        replies = iter(answers)
        return lambda prompt="": next(replies)
    return build


@pytest.fixture
def delivery_log():
    return []


@pytest.fixture
def make_observer(delivery_log):
    def build(name):
        return RecordingObserver(name, delivery_log)
    return build
