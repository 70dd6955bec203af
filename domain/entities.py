"""Domain Entities - Aggregates"""
from pydantic import BaseModel, Field
from uuid import UUID, uuid4
from datetime import datetime, date, timedelta, timezone
from typing import Iterator, Set
from decimal import Decimal

from domain.enums import RoomCategory, ReservationStatus
from domain.exceptions import ValidationError
from domain.value_objects import DateRange, category_info


CENTS = Decimal("0.01")


def iter_nights(check_in: date, check_out: date) -> Iterator[date]:
    """Yield every night of the half-open range [check_in, check_out)"""
    night = check_in
    while night < check_out:
        yield night
        night += timedelta(days=1)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Room(BaseModel):
    """Room Aggregate Root Entity

    Owns the set of nights it is booked for. The set only changes through
    book_dates / unbook_dates / hold_dates; callers are expected to check
    is_available before book_dates.
    """

    # Identity
    room_number: str

    category: RoomCategory
    price_per_night: Decimal = Field(ge=0)
    capacity: int = Field(ge=1)

    # State
    booked_dates: Set[date] = Field(default_factory=set)

    # ==================== FACTORY METHOD ====================
    @staticmethod
    def create(room_number: str, category: RoomCategory) -> "Room":
        """Create a room priced from its category"""
        if not room_number or not room_number.strip():
            raise ValidationError("Room number is required")

        info = category_info(category)
        return Room(
            room_number=room_number.strip(),
            category=category,
            price_per_night=info.base_price,
            capacity=info.capacity
        )

    # ==================== QUERY METHODS ====================
    def is_available(self, check_in: date, check_out: date) -> bool:
        """Check that no night of the range is booked"""
        for night in iter_nights(check_in, check_out):
            if night in self.booked_dates:
                return False
        return True

    @property
    def display_name(self) -> str:
        return category_info(self.category).display_name

    # ==================== STATE METHODS ====================
    def book_dates(self, check_in: date, check_out: date) -> None:
        """Mark every night of the range as booked"""
        self.booked_dates.update(iter_nights(check_in, check_out))

    def unbook_dates(self, check_in: date, check_out: date) -> None:
        """Free every night of the range"""
        for night in iter_nights(check_in, check_out):
            self.booked_dates.discard(night)

    def hold_dates(self, check_in: date, check_out: date) -> bool:
        """Book the range only if it is entirely free"""
        if not self.is_available(check_in, check_out):
            return False
        self.book_dates(check_in, check_out)
        return True

    def adjust_price(self, new_price: Decimal) -> None:
        """Change the nightly price for future reservations"""
        if new_price < 0:
            raise ValidationError("Price per night cannot be negative")
        self.price_per_night = Decimal(new_price)

    def __str__(self) -> str:
        return (
            f"Room {self.room_number} ({self.display_name}) - "
            f"Price: ${self.price_per_night}/night, Capacity: {self.capacity}"
        )


class Reservation(BaseModel):
    """Reservation Aggregate Root Entity"""

    # Identity
    booking_id: str = Field(default_factory=lambda: str(uuid4()))

    # References
    guest_id: UUID
    room: Room

    check_in: date
    check_out: date
    total_amount: Decimal

    status: ReservationStatus = ReservationStatus.PENDING_PAYMENT

    # Metadata
    created_at: datetime = Field(default_factory=_utcnow)
    modified_at: datetime = Field(default_factory=_utcnow)
    version: int = 1

    # ==================== FACTORY METHOD ====================
    @staticmethod
    def create(guest_id: UUID, room: Room, date_range: DateRange) -> "Reservation":
        """Create a pending reservation priced at the room's current rate"""
        nights = date_range.nights()
        if nights < 1:
            raise ValidationError("Minimum stay is 1 night")

        total = (room.price_per_night * nights).quantize(CENTS)

        return Reservation(
            guest_id=guest_id,
            room=room,
            check_in=date_range.check_in,
            check_out=date_range.check_out,
            total_amount=total,
            status=ReservationStatus.PENDING_PAYMENT
        )

    # ==================== STATE TRANSITION METHODS ====================
    def confirm(self) -> None:
        """Confirm reservation after payment"""
        if self.status != ReservationStatus.PENDING_PAYMENT:
            raise ValidationError(
                f"Cannot confirm reservation with status {self.status.value}"
            )

        self.status = ReservationStatus.CONFIRMED
        self._touch()

    def cancel(self) -> bool:
        """Cancel reservation; returns False if it was already cancelled"""
        if self.status == ReservationStatus.CANCELLED:
            return False

        if self.status != ReservationStatus.CONFIRMED:
            raise ValidationError(
                f"Cannot cancel reservation with status {self.status.value}"
            )

        self.status = ReservationStatus.CANCELLED
        self._touch()
        return True

    # ==================== QUERY METHODS ====================
    @property
    def nights(self) -> int:
        return (self.check_out - self.check_in).days

    @property
    def room_number(self) -> str:
        return self.room.room_number

    def is_active(self) -> bool:
        """Active reservations hold their room's dates"""
        return self.status != ReservationStatus.CANCELLED

    def _touch(self) -> None:
        self.modified_at = _utcnow()
        self.version += 1
