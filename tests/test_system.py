import pytest

from vehicle_rental import (
    BasicRental,
    RentalCatalog,
    RentalSystemFactory,
    Subscriber,
    User,
    UserRole,
    Vehicle,
    WeeklyPricing,
    format_rupiah,
    run_demo,
)


class TestCatalog:
    """Fleet and accounts"""

    def test_seed_fleet(self, catalog):
        assert [v.get_id() for v in catalog.get_vehicles()] == \
            ["V001", "V002", "V003", "V004", "V005"]
        avanza = catalog.find_vehicle("V001")
        assert avanza.get_name() == "Toyota Avanza"
        assert avanza.get_base_price() == 15000
        assert all(v.is_available() for v in catalog.get_vehicles())

    def test_seed_accounts(self, catalog):
        assert catalog.find_user("admin").is_admin()
        assert catalog.find_user("customer1").get_full_name() == "Budi Santoso"
        assert not catalog.find_user("customer1").is_admin()

    def test_unseeded(self):
        catalog = RentalCatalog(seed=False)
        assert catalog.get_vehicles() == []
        assert catalog.get_users() == []

    def test_add_vehicle(self, catalog):
        assert catalog.add_vehicle(Vehicle("V006", "Suzuki Ertiga", "MPV", 14000))
        assert catalog.find_available_vehicle("V006").get_name() == "Suzuki Ertiga"

    def test_duplicate_vehicle_rejected(self, catalog):
        assert not catalog.add_vehicle(Vehicle("V001", "Lain", "MPV", 1))
        assert catalog.find_vehicle("V001").get_name() == "Toyota Avanza"

    def test_availability(self, catalog):
        assert catalog.set_available("V002", False)
        assert catalog.find_available_vehicle("V002") is None
        assert catalog.find_vehicle("V002") is not None
        assert "V002" not in [v.get_id() for v in catalog.get_available_vehicles()]
        assert not catalog.set_available("V999", True)

    def test_unknown_vehicle(self, catalog):
        assert catalog.find_vehicle("V999") is None
        assert catalog.find_available_vehicle("V999") is None

    def test_duplicate_username_rejected(self, catalog):
        assert not catalog.add_user(User("admin", "x", "Palsu"))
        assert catalog.find_user("admin").get_full_name() == "Admin"

    @pytest.mark.parametrize("username,password,expected", [
        ("admin", "admin123", "Admin"),
        ("customer1", "pass123", "Budi Santoso"),
        ("admin", "salah", None),
        ("nobody", "admin123", None),
    ])
    def test_authenticate(self, catalog, username, password, expected):
        user = catalog.authenticate(username, password)
        assert (user.get_full_name() if user else None) == expected

    def test_vehicle_row(self, catalog):
        row = str(catalog.find_vehicle("V001"))
        assert row == "V001     | Toyota Avanza        | MPV        | Rp 15,000/jam | Tersedia"
        catalog.set_available("V001", False)
        assert str(catalog.find_vehicle("V001")).endswith("| Disewa")


class TestRentalSystem:
    """Sessions and quotes"""

    def test_login_attaches_subscriber(self, system):
        session = system.login("admin", "admin123")
        assert session.user.is_admin()
        assert isinstance(session.subscriber, Subscriber)
        assert session.subscriber.get_role() == UserRole.ADMIN
        assert system.get_notification_system().get_observers() == [session.subscriber]

    def test_failed_login(self, system):
        assert system.login("admin", "wrong") is None
        assert system.get_notification_system().get_observers() == []

    def test_logout_detaches(self, system):
        session = system.login("customer1", "pass123")
        system.logout(session)
        system.logout(session)
        assert system.get_notification_system().get_observers() == []

    def test_register_creates_customer(self, system):
        user = system.register("siti", "rahasia", "Siti Aminah")
        assert user.get_role() == UserRole.CUSTOMER
        assert system.login("siti", "rahasia").user is user
        assert system.register("siti", "lain", "Siti Lain") is None

    def test_quote(self, system):
        rental = system.quote("V001", WeeklyPricing(), 2, "1,3")
        assert rental.get_cost() == pytest.approx(3645000)
        assert rental.get_description() == \
            "Toyota Avanza - Per Minggu (Diskon 15%) + Asuransi + GPS"

    def test_quote_without_add_ons(self, system):
        assert isinstance(system.quote("V002", WeeklyPricing(), 1), BasicRental)

    def test_quote_for_taken_vehicle(self, system):
        system.get_catalog().set_available("V001", False)
        assert system.quote("V001", WeeklyPricing(), 1) is None
        assert system.quote("V999", WeeklyPricing(), 1) is None

    def test_admin_sees_new_booking_customer_sees_decision(self, system):
        admin = system.login("admin", "admin123")
        customer = system.login("customer1", "pass123")
        ledger = system.get_ledger()

        booking = ledger.create_booking(customer.user, system.quote("V003", WeeklyPricing(), 1))
        system.logout(customer)
        ledger.confirm_booking(booking.get_id())

        assert admin.subscriber.get_received()[0].startswith("Booking baru! BK001 - Budi Santoso")
        assert len(customer.subscriber.get_received()) == 1
        assert "telah dikonfirmasi" in admin.subscriber.get_received()[1]

    def test_end_to_end_confirm(self, system):
        customer = system.login("customer1", "pass123").user
        ledger = system.get_ledger()
        avanza = system.get_catalog().find_vehicle("V001")

        booking = ledger.create_booking(customer, system.quote("V001", WeeklyPricing(), 2, "1,3"))
        assert not avanza.is_available()
        ledger.confirm_booking(booking.get_id())
        assert not avanza.is_available()
        total, count = ledger.get_revenue()
        assert count == 1 and total == pytest.approx(3645000)

    def test_end_to_end_reject(self, system):
        customer = system.login("customer1", "pass123").user
        ledger = system.get_ledger()
        avanza = system.get_catalog().find_vehicle("V001")

        booking = ledger.create_booking(customer, system.quote("V001", WeeklyPricing(), 2, "1,3"))
        ledger.reject_booking(booking.get_id())
        assert avanza.is_available()
        assert ledger.get_revenue() == (0, 0)

    def test_empty_factory(self):
        system = RentalSystemFactory.create_empty_system()
        assert system.get_catalog().get_vehicles() == []


class TestDemo:
    def test_demo_runs(self, capsys):
        run_demo()
        out = capsys.readouterr().out
        assert "Total Booking Terkonfirmasi: 1" in out
        assert "Total Pendapatan: Rp 3,645,000" in out
        assert "=== Demo Complete ===" in out


class TestFormatting:
    """Rupiah rendering"""

    @pytest.mark.parametrize("amount,expected", [
        (3645000, "Rp 3,645,000"),
        (3645000.0, "Rp 3,645,000"),
        (2.5, "Rp 3"),
        (3.5, "Rp 4"),
        (12345.5, "Rp 12,346"),
        (12345.49, "Rp 12,345"),
        (0, "Rp 0"),
    ])
    def test_half_rounds_up(self, amount, expected):
        assert format_rupiah(amount) == expected
