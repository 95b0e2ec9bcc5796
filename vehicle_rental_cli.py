import argparse
import math
from typing import Callable, Optional

from vehicle_rental import (
    ADD_ONS,
    PRICING_STRATEGIES,
    BasicRental,
    RentalSystem,
    RentalSystemFactory,
    Session,
    Vehicle,
    apply_add_ons,
    format_rupiah,
    run_demo,
)


INVALID_NUMBER = -1

VEHICLE_HEADER = "ID       | Nama                 | Tipe       | Harga/Jam    | Status"
BOOKING_HEADER = ("ID       | Customer        | Deskripsi                                "
                  "| Total           | Status     | Waktu")


# ==================== Input Parsing ====================

def parse_int(text: str) -> int:
    """Parse an integer, returning -1 for anything malformed"""
    try:
        return int(text.strip())
    except ValueError:
        return INVALID_NUMBER


def parse_float(text: str) -> float:
    """Parse a number, returning -1 for anything malformed"""
    try:
        return float(text.strip())
    except ValueError:
        return INVALID_NUMBER


# ==================== Console ====================

class RentalConsole:
    """Interactive text menu on top of a RentalSystem"""

    def __init__(self, system: RentalSystem,
                 input_fn: Optional[Callable[[str], str]] = None):
        self._system = system
        self._input = input_fn
        self._session: Optional[Session] = None
        self._running = False

    def _ask(self, prompt: str) -> str:
        if self._input:
            return self._input(prompt)
        return input(prompt)

    def run(self) -> None:
        print("=======================================================")
        print("   SELAMAT DATANG DI RENTVEHICLE PRO SYSTEM")
        print("=======================================================")

        self._running = True
        while self._running:
            if self._session is None:
                self.show_login_menu()
            elif self._session.user.is_admin():
                self.show_admin_menu()
            else:
                self.show_customer_menu()

    # ---------- Menus ----------

    def show_login_menu(self) -> None:
        print("\n=== LOGIN ===")
        print("1. Login")
        print("2. Register")
        print("3. Exit")
        choice = parse_int(self._ask("Pilih menu: "))

        if choice == 1:
            self.login()
        elif choice == 2:
            self.register()
        elif choice == 3:
            print("\nTerima kasih telah menggunakan RentVehicle Pro!")
            self._running = False
        else:
            print("Pilihan tidak valid!")

    def show_admin_menu(self) -> None:
        print("\n=== MENU ADMIN ===")
        print("1. Lihat Semua Kendaraan")
        print("2. Tambah Kendaraan")
        print("3. Lihat Semua Booking")
        print("4. Konfirmasi Booking")
        print("5. Reject Booking")
        print("6. Laporan Pendapatan")
        print("7. Logout")
        choice = parse_int(self._ask("Pilih menu: "))

        actions = {
            1: self.view_all_vehicles,
            2: self.add_vehicle,
            3: self.view_all_bookings,
            4: self.confirm_booking,
            5: self.reject_booking,
            6: self.show_revenue,
            7: self.logout,
        }
        action = actions.get(choice)
        if action:
            action()
        else:
            print("Pilihan tidak valid!")

    def show_customer_menu(self) -> None:
        print("\n=== MENU CUSTOMER ===")
        print("1. Lihat Kendaraan Tersedia")
        print("2. Buat Booking")
        print("3. Lihat History Booking Saya")
        print("4. Logout")
        choice = parse_int(self._ask("Pilih menu: "))

        actions = {
            1: self.view_available_vehicles,
            2: self.create_booking,
            3: self.view_my_bookings,
            4: self.logout,
        }
        action = actions.get(choice)
        if action:
            action()
        else:
            print("Pilihan tidak valid!")

    # ---------- Session ----------

    def login(self) -> None:
        username = self._ask("Username: ")
        password = self._ask("Password: ")

        session = self._system.login(username, password)
        if not session:
            print("\nUsername atau password salah!")
            return

        self._session = session
        print(f"\nLogin berhasil! Selamat datang, {session.user.get_full_name()}")

    def register(self) -> None:
        username = self._ask("Username: ")
        password = self._ask("Password: ")
        full_name = self._ask("Nama Lengkap: ")

        if not username.strip() or not full_name.strip():
            print("\nData registrasi tidak lengkap!")
            return

        if self._system.register(username, password, full_name):
            print("\nRegistrasi berhasil! Silakan login.")
        else:
            print("\nUsername sudah digunakan!")

    def logout(self) -> None:
        if self._session:
            self._system.logout(self._session)
        self._session = None
        print("\nLogout berhasil!")

    # ---------- Vehicles ----------

    def _print_vehicles(self, title: str, vehicles) -> None:
        print(f"\n=== {title} ===")
        print(VEHICLE_HEADER)
        print("-" * 73)
        for vehicle in vehicles:
            print(vehicle)

    def view_all_vehicles(self) -> None:
        self._print_vehicles("SEMUA KENDARAAN", self._system.get_catalog().get_vehicles())

    def view_available_vehicles(self) -> None:
        self._print_vehicles("KENDARAAN TERSEDIA",
                             self._system.get_catalog().get_available_vehicles())

    def add_vehicle(self) -> None:
        print("\n=== TAMBAH KENDARAAN ===")
        vehicle_id = self._ask("ID Kendaraan: ")
        name = self._ask("Nama Kendaraan: ")
        vehicle_type = self._ask("Tipe: ")
        price = parse_float(self._ask("Harga per jam: "))

        if not math.isfinite(price) or price < 0:
            print("\nHarga tidak valid!")
            return

        if self._system.get_catalog().add_vehicle(
                Vehicle(vehicle_id, name, vehicle_type, price)):
            print("\nKendaraan berhasil ditambahkan!")
        else:
            print("\nID kendaraan sudah terdaftar!")

    # ---------- Bookings ----------

    def create_booking(self) -> None:
        print("\n=== BUAT BOOKING ===")
        self.view_available_vehicles()
        vehicle_id = self._ask("\nMasukkan ID kendaraan: ")

        vehicle = self._system.get_catalog().find_available_vehicle(vehicle_id)
        if not vehicle:
            print("Kendaraan tidak tersedia!")
            return

        print("\n=== PILIH STRATEGI PRICING ===")
        for key, strategy in PRICING_STRATEGIES.items():
            print(f"{key}. {strategy.get_strategy_name()}")
        strategy = PRICING_STRATEGIES.get(str(parse_int(self._ask("Pilih: "))))
        if not strategy:
            print("Pilihan tidak valid!")
            return

        duration = parse_int(self._ask(f"Durasi ({strategy.get_duration_unit()}): "))
        if duration <= 0:
            print("Durasi tidak valid!")
            return

        print("\n=== TAMBAH LAYANAN ===")
        print("Pilih layanan tambahan (pisahkan dengan koma, contoh: 1,2,3)")
        for key, (label, decorator) in ADD_ONS.items():
            print(f"{key}. {label} (+{format_rupiah(decorator.SURCHARGE)})")
        print("0. Tidak ada")
        rental = apply_add_ons(BasicRental(vehicle, strategy, duration),
                               self._ask("Pilih: "))

        print("\n=== RINGKASAN BOOKING ===")
        print(f"Deskripsi: {rental.get_description()}")
        print(f"Total Biaya: {format_rupiah(rental.get_cost())}")
        if self._ask("\nKonfirmasi booking (y/n)? ").strip().lower() != "y":
            print("Booking dibatalkan.")
            return

        booking = self._system.get_ledger().create_booking(self._session.user, rental)
        print(f"\nBooking berhasil dibuat dengan ID: {booking.get_id()}")
        print("Menunggu konfirmasi admin...")

    def _print_bookings(self, title: str, bookings) -> None:
        print(f"\n=== {title} ===")
        print(BOOKING_HEADER)
        print("-" * 125)
        for booking in bookings:
            print(booking)

    def view_all_bookings(self) -> None:
        self._print_bookings("SEMUA BOOKING", self._system.get_ledger().get_bookings())

    def view_my_bookings(self) -> None:
        self._print_bookings(
            "HISTORY BOOKING SAYA",
            self._system.get_ledger().get_bookings_for(self._session.user)
        )

    def confirm_booking(self) -> None:
        self.view_all_bookings()
        booking_id = self._ask("\nMasukkan ID booking yang akan dikonfirmasi: ").strip()
        if self._system.get_ledger().confirm_booking(booking_id):
            print("\nBooking berhasil dikonfirmasi!")
        else:
            print("Booking tidak ditemukan atau sudah diproses!")

    def reject_booking(self) -> None:
        self.view_all_bookings()
        booking_id = self._ask("\nMasukkan ID booking yang akan direject: ").strip()
        if self._system.get_ledger().reject_booking(booking_id):
            print("\nBooking berhasil direject!")
        else:
            print("Booking tidak ditemukan atau sudah diproses!")

    def show_revenue(self) -> None:
        total, count = self._system.get_ledger().get_revenue()
        print("\n=== LAPORAN PENDAPATAN ===")
        print(f"Total Booking Terkonfirmasi: {count}")
        print(f"Total Pendapatan: {format_rupiah(total)}")


# ==================== Entry Point ====================

def main(argv=None):
    parser = argparse.ArgumentParser(description="RentVehicle Pro rental console")
    parser.add_argument("--demo", action="store_true",
                        help="run the scripted demo instead of the interactive menu")
    args = parser.parse_args(argv)

    if args.demo:
        run_demo()
        return

    console = RentalConsole(RentalSystemFactory.create_seeded_system())
    try:
        console.run()
    except (EOFError, KeyboardInterrupt):
        print("\nTerima kasih telah menggunakan RentVehicle Pro!")


if __name__ == "__main__":
    main()
