from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional, Dict, Tuple, Type
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from threading import Lock, RLock


# ==================== Enums ====================

class UserRole(Enum):
    """Role of a system user"""
    ADMIN = "ADMIN"
    CUSTOMER = "CUSTOMER"


class BookingStatus(Enum):
    """Status of a booking"""
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    REJECTED = "REJECTED"
    COMPLETED = "COMPLETED"     # Defined, no transition leads here yet


# ==================== Formatting Helpers ====================

TIMESTAMP_FORMAT = "%d-%m-%Y %H:%M"


def format_rupiah(amount: float) -> str:
    """Format an amount as Rupiah with thousands separators, halves round up"""
    rounded = Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return f"Rp {rounded:,}"


# ==================== Core Models ====================

class Vehicle:
    """Represents a rental vehicle"""

    def __init__(self, vehicle_id: str, name: str, vehicle_type: str,
                 base_price: float, available: bool = True):
        self._vehicle_id = vehicle_id
        self._name = name
        self._vehicle_type = vehicle_type
        self._base_price = base_price     # per hour
        self._available = available
        self._lock = Lock()

    def get_id(self) -> str:
        return self._vehicle_id

    def get_name(self) -> str:
        return self._name

    def get_type(self) -> str:
        return self._vehicle_type

    def get_base_price(self) -> float:
        return self._base_price

    def is_available(self) -> bool:
        with self._lock:
            return self._available

    def set_available(self, available: bool) -> None:
        with self._lock:
            self._available = available

    def __str__(self) -> str:
        status = "Tersedia" if self.is_available() else "Disewa"
        price = format_rupiah(self._base_price)
        return (f"{self._vehicle_id:<8} | {self._name:<20} | "
                f"{self._vehicle_type:<10} | {price}/jam | {status}")

    def __repr__(self) -> str:
        return f"Vehicle({self._vehicle_id}, {self._name})"

    def __hash__(self) -> int:
        return hash(self._vehicle_id)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vehicle):
            return False
        return self._vehicle_id == other._vehicle_id


class User:
    """Represents an administrator or a customer account"""

    def __init__(self, username: str, password: str, full_name: str,
                 role: UserRole = UserRole.CUSTOMER):
        self._username = username
        self._password = password
        self._full_name = full_name
        self._role = role

    def get_username(self) -> str:
        return self._username

    def get_full_name(self) -> str:
        return self._full_name

    def get_role(self) -> UserRole:
        return self._role

    def is_admin(self) -> bool:
        return self._role == UserRole.ADMIN

    def check_password(self, password: str) -> bool:
        return self._password == password

    def __repr__(self) -> str:
        return f"User({self._username}, {self._full_name}, {self._role.value})"


# ==================== Strategy Pattern: Pricing Strategies ====================

class PricingStrategy(ABC):
    """
    Maps a base hourly price and a duration to a rental price.

    Duration must be a positive integer; strategies do not validate it.
    """

    @abstractmethod
    def calculate_price(self, base_price: float, duration: int) -> float:
        """Calculate the rental price for the given duration"""
        pass

    @abstractmethod
    def get_strategy_name(self) -> str:
        pass

    @abstractmethod
    def get_duration_unit(self) -> str:
        """Unit the duration is counted in"""
        pass


class HourlyPricing(PricingStrategy):
    """Straight hourly rate"""

    def calculate_price(self, base_price: float, duration: int) -> float:
        return base_price * duration

    def get_strategy_name(self) -> str:
        return "Per Jam"

    def get_duration_unit(self) -> str:
        return "jam"


class DailyPricing(PricingStrategy):
    """Daily rate billed as a fixed number of hours per day"""

    def __init__(self, hours_per_day: int = 20):
        self._hours_per_day = hours_per_day

    def calculate_price(self, base_price: float, duration: int) -> float:
        return base_price * duration * self._hours_per_day

    def get_strategy_name(self) -> str:
        return "Per Hari"

    def get_duration_unit(self) -> str:
        return "hari"


class WeeklyPricing(PricingStrategy):
    """Weekly rate with a discount"""

    def __init__(self, hours_per_day: int = 20, discount: float = 0.15):
        self._hours_per_day = hours_per_day
        self._discount = discount

    def calculate_price(self, base_price: float, duration: int) -> float:
        daily_price = base_price * self._hours_per_day
        weekly_price = daily_price * 7 * duration
        return weekly_price * (1 - self._discount)

    def get_strategy_name(self) -> str:
        return f"Per Minggu (Diskon {self._discount * 100:.0f}%)"

    def get_duration_unit(self) -> str:
        return "minggu"


class MonthlyPricing(PricingStrategy):
    """Monthly rate (30 days) with a discount"""

    def __init__(self, hours_per_day: int = 20, discount: float = 0.25):
        self._hours_per_day = hours_per_day
        self._discount = discount

    def calculate_price(self, base_price: float, duration: int) -> float:
        daily_price = base_price * self._hours_per_day
        monthly_price = daily_price * 30 * duration
        return monthly_price * (1 - self._discount)

    def get_strategy_name(self) -> str:
        return f"Per Bulan (Diskon {self._discount * 100:.0f}%)"

    def get_duration_unit(self) -> str:
        return "bulan"


# Menu choice -> strategy
PRICING_STRATEGIES: Dict[str, PricingStrategy] = {
    "1": HourlyPricing(),
    "2": DailyPricing(),
    "3": WeeklyPricing(),
    "4": MonthlyPricing(),
}


# ==================== Decorator Pattern: Rental Add-ons ====================

class Rental(ABC):
    """A priced rental quote"""

    @abstractmethod
    def get_cost(self) -> float:
        pass

    @abstractmethod
    def get_description(self) -> str:
        pass


class BasicRental(Rental):
    """Root of a quote: one vehicle, one pricing strategy, one duration"""

    def __init__(self, vehicle: Vehicle, strategy: PricingStrategy, duration: int):
        self._vehicle = vehicle
        self._strategy = strategy
        self._duration = duration

    def get_cost(self) -> float:
        return self._strategy.calculate_price(self._vehicle.get_base_price(),
                                              self._duration)

    def get_description(self) -> str:
        return f"{self._vehicle.get_name()} - {self._strategy.get_strategy_name()}"

    def get_vehicle(self) -> Vehicle:
        return self._vehicle

    def get_strategy(self) -> PricingStrategy:
        return self._strategy

    def get_duration(self) -> int:
        return self._duration


class RentalDecorator(Rental):
    """
    Adds a fixed surcharge and description suffix to the rental it wraps.

    Subclasses only declare SURCHARGE and SUFFIX. Surcharges are flat amounts
    in Rupiah and do not depend on the rental duration.
    """

    SURCHARGE: float = 0
    SUFFIX: str = ""

    def __init__(self, rental: Rental):
        self._rental = rental

    def get_wrapped(self) -> Rental:
        return self._rental

    def get_cost(self) -> float:
        return self._rental.get_cost() + self.SURCHARGE

    def get_description(self) -> str:
        return self._rental.get_description() + self.SUFFIX


class InsuranceDecorator(RentalDecorator):
    SURCHARGE = 50000
    SUFFIX = " + Asuransi"


class DriverDecorator(RentalDecorator):
    SURCHARGE = 100000
    SUFFIX = " + Supir"


class GPSDecorator(RentalDecorator):
    SURCHARGE = 25000
    SUFFIX = " + GPS"


class ChildSeatDecorator(RentalDecorator):
    SURCHARGE = 30000
    SUFFIX = " + Kursi Anak"


# Menu choice -> add-on
ADD_ONS: Dict[str, Tuple[str, Type[RentalDecorator]]] = {
    "1": ("Asuransi", InsuranceDecorator),
    "2": ("Supir", DriverDecorator),
    "3": ("GPS", GPSDecorator),
    "4": ("Kursi Anak", ChildSeatDecorator),
}


def apply_add_ons(rental: Rental, selection: str) -> Rental:
    """
    Wrap a rental in the add-ons picked from the menu, in the order given.

    The selection is comma separated ("1,3"). "0" or an empty string means
    no add-ons; unknown entries are ignored.
    """
    selection = selection.strip()
    if not selection or selection == "0":
        return rental

    for choice in selection.split(","):
        add_on = ADD_ONS.get(choice.strip())
        if add_on:
            rental = add_on[1](rental)
    return rental


def find_basic_rental(rental: Rental) -> Optional[BasicRental]:
    """Walk down the decorator chain to the BasicRental at its root"""
    current = rental
    while True:
        if isinstance(current, BasicRental):
            return current
        if isinstance(current, RentalDecorator):
            current = current.get_wrapped()
            continue
        return None


# ==================== Observer Pattern: Notifications ====================

class Observer(ABC):
    """Receives broadcast notification messages"""

    @abstractmethod
    def update(self, message: str) -> None:
        pass


class Subscriber(Observer):
    """A notification target for an admin or a customer"""

    def __init__(self, name: str, role: UserRole):
        self._name = name
        self._role = role
        self._received: List[str] = []

    def get_name(self) -> str:
        return self._name

    def get_role(self) -> UserRole:
        return self._role

    def get_received(self) -> List[str]:
        return self._received.copy()

    def get_prefix(self) -> str:
        return f"[NOTIFIKASI {self._role.value} - {self._name}]"

    def update(self, message: str) -> None:
        self._received.append(message)
        print(f"\n{self.get_prefix()} {message}")

    def __repr__(self) -> str:
        return f"Subscriber({self._name}, {self._role.value})"


class NotificationSystem:
    """Delivers each message to every attached observer, in attach order"""

    def __init__(self):
        self._observers: List[Observer] = []
        self._lock = RLock()

    def attach(self, observer: Observer) -> bool:
        """Attach an observer; returns False if it was already attached"""
        with self._lock:
            if self.is_attached(observer):
                return False
            self._observers.append(observer)
            return True

    def detach(self, observer: Observer) -> None:
        """Detach an observer; unknown observers are ignored"""
        with self._lock:
            self._observers = [o for o in self._observers if o is not observer]

    def is_attached(self, observer: Observer) -> bool:
        with self._lock:
            return any(o is observer for o in self._observers)

    def get_observers(self) -> List[Observer]:
        with self._lock:
            return self._observers.copy()

    def notify_observers(self, message: str) -> None:
        # Snapshot: observers may detach during delivery
        for observer in self.get_observers():
            observer.update(message)

    def notify_one_shot(self, observer: Observer, message: str) -> None:
        """
        Deliver one message with the observer attached. An observer that was
        not attached before is detached again afterwards.
        """
        attached_here = self.attach(observer)
        try:
            self.notify_observers(message)
        finally:
            if attached_here:
                self.detach(observer)


# ==================== Bookings ====================

class Booking:
    """A committed rental; cost and description are captured at creation"""

    def __init__(self, booking_id: str, customer: User, rental: Rental):
        self._booking_id = booking_id
        self._customer = customer
        self._rental = rental
        self._cost = rental.get_cost()
        self._description = rental.get_description()
        self._status = BookingStatus.PENDING
        self._created_at = datetime.now()

    def get_id(self) -> str:
        return self._booking_id

    def get_customer(self) -> User:
        return self._customer

    def get_rental(self) -> Rental:
        return self._rental

    def get_cost(self) -> float:
        return self._cost

    def get_description(self) -> str:
        return self._description

    def get_status(self) -> BookingStatus:
        return self._status

    def set_status(self, status: BookingStatus) -> None:
        self._status = status

    def get_created_at(self) -> datetime:
        return self._created_at

    def get_vehicle(self) -> Optional[Vehicle]:
        basic_rental = find_basic_rental(self._rental)
        return basic_rental.get_vehicle() if basic_rental else None

    def __str__(self) -> str:
        return (f"{self._booking_id:<8} | {self._customer.get_full_name():<15} | "
                f"{self._description:<40} | {format_rupiah(self._cost)} | "
                f"{self._status.value:<10} | "
                f"{self._created_at.strftime(TIMESTAMP_FORMAT)}")

    def __repr__(self) -> str:
        return (f"Booking({self._booking_id}, {self._customer.get_full_name()}, "
                f"{self._status.value})")


class BookingLedger:
    """
    Owns all bookings and their status transitions.

    PENDING -> CONFIRMED or PENDING -> REJECTED; both end states are final.
    Every transition is announced through the notification system.
    """

    def __init__(self, notification_system: NotificationSystem,
                 id_prefix: str = "BK"):
        self._notification_system = notification_system
        self._id_prefix = id_prefix
        self._counter = 0
        self._bookings: List[Booking] = []
        self._lock = RLock()

    def _next_id(self) -> str:
        self._counter += 1
        return f"{self._id_prefix}{self._counter:03d}"

    def create_booking(self, customer: User, rental: Rental) -> Booking:
        """
        Record a PENDING booking and take its vehicle off the market.

        The vehicle is expected to be available; that is checked when the
        rental is built, not here.
        """
        with self._lock:
            booking = Booking(self._next_id(), customer, rental)
            self._bookings.append(booking)

            vehicle = booking.get_vehicle()
            if vehicle:
                vehicle.set_available(False)

            print(f"[Ledger] Created {booking!r}")
            self._notification_system.notify_observers(
                f"Booking baru! {booking.get_id()} - {customer.get_full_name()} - "
                f"{booking.get_description()}"
            )
            return booking

    def _find_pending(self, booking_id: str) -> Optional[Booking]:
        for booking in self._bookings:
            if (booking.get_id() == booking_id and
                    booking.get_status() == BookingStatus.PENDING):
                return booking
        return None

    def _notify_customer(self, booking: Booking, message: str) -> None:
        customer_subscriber = Subscriber(booking.get_customer().get_full_name(),
                                         UserRole.CUSTOMER)
        self._notification_system.notify_one_shot(customer_subscriber, message)

    def confirm_booking(self, booking_id: str) -> bool:
        """
        Confirm a PENDING booking. Returns False when the id is unknown or the
        booking was already processed. The vehicle stays rented.
        """
        with self._lock:
            booking = self._find_pending(booking_id)
            if not booking:
                print(f"[Ledger] Booking not found or already processed: {booking_id}")
                return False

            booking.set_status(BookingStatus.CONFIRMED)
            print(f"[Ledger] Booking {booking_id} confirmed")
            self._notify_customer(
                booking,
                f"Booking {booking_id} telah dikonfirmasi! Silakan ambil kendaraan."
            )
            return True

    def reject_booking(self, booking_id: str) -> bool:
        """Reject a PENDING booking and release its vehicle"""
        with self._lock:
            booking = self._find_pending(booking_id)
            if not booking:
                print(f"[Ledger] Booking not found or already processed: {booking_id}")
                return False

            booking.set_status(BookingStatus.REJECTED)
            vehicle = booking.get_vehicle()
            if vehicle:
                vehicle.set_available(True)

            print(f"[Ledger] Booking {booking_id} rejected")
            self._notify_customer(
                booking,
                f"Booking {booking_id} ditolak. Silakan hubungi admin untuk info lebih lanjut."
            )
            return True

    def get_revenue(self) -> Tuple[float, int]:
        """Total cost and number of CONFIRMED bookings"""
        with self._lock:
            confirmed = [b for b in self._bookings
                         if b.get_status() == BookingStatus.CONFIRMED]
        return sum(b.get_cost() for b in confirmed), len(confirmed)

    def get_bookings(self) -> List[Booking]:
        with self._lock:
            return list(self._bookings)

    def get_bookings_for(self, customer: User) -> List[Booking]:
        """Booking history of one customer, oldest first"""
        return [b for b in self.get_bookings() if b.get_customer() is customer]

    def find_booking(self, booking_id: str) -> Optional[Booking]:
        for booking in self.get_bookings():
            if booking.get_id() == booking_id:
                return booking
        return None


# ==================== Catalog ====================

class RentalCatalog:
    """Vehicle fleet and user accounts"""

    def __init__(self, seed: bool = True):
        self._vehicles: List[Vehicle] = []
        self._users: List[User] = []
        if seed:
            self._load_seed_data()

    def _load_seed_data(self) -> None:
        self._vehicles.extend([
            Vehicle("V001", "Toyota Avanza", "MPV", 15000),
            Vehicle("V002", "Honda Jazz", "Hatchback", 12000),
            Vehicle("V003", "Mitsubishi Pajero", "SUV", 25000),
            Vehicle("V004", "Toyota Fortuner", "SUV", 30000),
            Vehicle("V005", "Honda CBR 150", "Motor", 8000),
        ])
        self._users.extend([
            User("admin", "admin123", "Admin", UserRole.ADMIN),
            User("customer1", "pass123", "Budi Santoso", UserRole.CUSTOMER),
        ])

    def get_vehicles(self) -> List[Vehicle]:
        return list(self._vehicles)

    def get_available_vehicles(self) -> List[Vehicle]:
        return [v for v in self._vehicles if v.is_available()]

    def find_vehicle(self, vehicle_id: str) -> Optional[Vehicle]:
        for vehicle in self._vehicles:
            if vehicle.get_id() == vehicle_id:
                return vehicle
        return None

    def find_available_vehicle(self, vehicle_id: str) -> Optional[Vehicle]:
        vehicle = self.find_vehicle(vehicle_id)
        if vehicle and vehicle.is_available():
            return vehicle
        return None

    def set_available(self, vehicle_id: str, available: bool) -> bool:
        vehicle = self.find_vehicle(vehicle_id)
        if not vehicle:
            print(f"[Catalog] Vehicle not found: {vehicle_id}")
            return False
        vehicle.set_available(available)
        return True

    def add_vehicle(self, vehicle: Vehicle) -> bool:
        if self.find_vehicle(vehicle.get_id()):
            print(f"[Catalog] Duplicate vehicle id: {vehicle.get_id()}")
            return False
        self._vehicles.append(vehicle)
        print(f"[Catalog] Added {vehicle!r}")
        return True

    def get_users(self) -> List[User]:
        return list(self._users)

    def find_user(self, username: str) -> Optional[User]:
        for user in self._users:
            if user.get_username() == username:
                return user
        return None

    def add_user(self, user: User) -> bool:
        if self.find_user(user.get_username()):
            print(f"[Catalog] Username already taken: {user.get_username()}")
            return False
        self._users.append(user)
        print(f"[Catalog] Registered {user!r}")
        return True

    def authenticate(self, username: str, password: str) -> Optional[User]:
        user = self.find_user(username)
        if user and user.check_password(password):
            return user
        return None


# ==================== Rental System ====================

@dataclass
class Session:
    """A logged-in user and the subscriber attached on their behalf"""
    user: User
    subscriber: Subscriber


class RentalSystem:
    """Application context holding the catalog, ledger and notifications"""

    def __init__(self, catalog: RentalCatalog):
        self._catalog = catalog
        self._notification_system = NotificationSystem()
        self._ledger = BookingLedger(self._notification_system)

    def get_catalog(self) -> RentalCatalog:
        return self._catalog

    def get_ledger(self) -> BookingLedger:
        return self._ledger

    def get_notification_system(self) -> NotificationSystem:
        return self._notification_system

    def login(self, username: str, password: str) -> Optional[Session]:
        user = self._catalog.authenticate(username, password)
        if not user:
            print(f"[System] Login failed for {username}")
            return None

        subscriber = Subscriber(user.get_full_name(), user.get_role())
        self._notification_system.attach(subscriber)
        print(f"[System] {user.get_full_name()} logged in")
        return Session(user, subscriber)

    def logout(self, session: Session) -> None:
        self._notification_system.detach(session.subscriber)
        print(f"[System] {session.user.get_full_name()} logged out")

    def register(self, username: str, password: str, full_name: str) -> Optional[User]:
        """Self-registration always creates a customer account"""
        user = User(username, password, full_name, UserRole.CUSTOMER)
        if not self._catalog.add_user(user):
            return None
        return user

    def quote(self, vehicle_id: str, strategy: PricingStrategy, duration: int,
              add_ons: str = "0") -> Optional[Rental]:
        """Build a rental for an available vehicle, or None if it is taken"""
        vehicle = self._catalog.find_available_vehicle(vehicle_id)
        if not vehicle:
            print(f"[System] Vehicle not available: {vehicle_id}")
            return None
        return apply_add_ons(BasicRental(vehicle, strategy, duration), add_ons)


# ==================== Factory Pattern ====================

class RentalSystemFactory:
    """Factory for creating rental system configurations"""

    @staticmethod
    def create_seeded_system() -> RentalSystem:
        """System preloaded with the demo fleet and accounts"""
        return RentalSystem(RentalCatalog(seed=True))

    @staticmethod
    def create_empty_system() -> RentalSystem:
        return RentalSystem(RentalCatalog(seed=False))


# ==================== Demo Usage ====================

def run_demo():
    """Demo the vehicle rental system"""
    print("=== RentVehicle Pro Demo ===\n")

    system = RentalSystemFactory.create_seeded_system()
    catalog = system.get_catalog()
    ledger = system.get_ledger()

    admin_session = system.login("admin", "admin123")
    customer_session = system.login("customer1", "pass123")

    print("\n--- Fleet ---")
    for vehicle in catalog.get_vehicles():
        print(vehicle)

    print("\n--- Budi books a weekly Avanza with insurance and GPS ---")
    rental = system.quote("V001", WeeklyPricing(), 2, "1,3")
    print(f"Deskripsi: {rental.get_description()}")
    print(f"Total Biaya: {format_rupiah(rental.get_cost())}")
    booking1 = ledger.create_booking(customer_session.user, rental)

    print("\n--- Budi books a daily Jazz with a driver ---")
    rental = system.quote("V002", DailyPricing(), 3, "2")
    booking2 = ledger.create_booking(customer_session.user, rental)

    print("\n--- Attempting to book the Avanza again ---")
    if not system.quote("V001", HourlyPricing(), 5):
        print("[Expected] Vehicle is no longer available")

    print("\n--- Admin confirms the first booking and rejects the second ---")
    ledger.confirm_booking(booking1.get_id())
    ledger.reject_booking(booking2.get_id())

    print("\n--- Rejecting the confirmed booking again ---")
    if not ledger.reject_booking(booking1.get_id()):
        print("[Expected] Booking already processed")

    print("\n--- Bookings ---")
    for booking in ledger.get_bookings():
        print(booking)

    total, count = ledger.get_revenue()
    print(f"\nTotal Booking Terkonfirmasi: {count}")
    print(f"Total Pendapatan: {format_rupiah(total)}")

    system.logout(customer_session)
    system.logout(admin_session)

    print("\n=== Demo Complete ===")


if __name__ == "__main__":
    run_demo()


# Key Design Decisions

# Strategy Pattern: pricing per hour, day, week or month. New billing periods
# subclass PricingStrategy without touching the existing ones.

# Decorator Pattern: each add-on wraps one rental and adds a flat surcharge.
# find_basic_rental walks back to the root to reach the vehicle on rejection.

# Observer Pattern: one Subscriber type with a role tag. Customers are
# notified of confirm/reject through a one-shot subscriber.

# Application context instead of a singleton: RentalSystem is built by the
# factory and handed to whoever needs it.
