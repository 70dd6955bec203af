"""Application Services - Business use cases"""
import asyncio
from uuid import UUID
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional, Union

from domain.auth import User, UserInDB
from domain.entities import Room, Reservation, iter_nights
from domain.enums import RoomCategory, ReservationStatus
from domain.exceptions import (
    ReservationError, ValidationError, ConflictError, PaymentError, NotFoundError, DuplicateError
)
from domain.outcomes import Outcome
from domain.payment import PaymentGateway
from domain.repositories import RoomRepository, ReservationRepository, GuestRepository
from domain.value_objects import DateRange, parse_category
from infrastructure.config import Settings, get_settings
from infrastructure.logger import get_logger
from infrastructure.security import get_password_hash, verify_password


logger = get_logger(__name__)


def build_date_range(
    check_in: date,
    check_out: date,
    max_stay_nights: Optional[int] = None
) -> DateRange:
    """Validate a requested stay and return it as a DateRange"""
    try:
        date_range = DateRange(check_in=check_in, check_out=check_out)
    except ValueError:
        raise ValidationError("Invalid dates: check-out date must be after check-in date")

    if max_stay_nights is not None and date_range.nights() > max_stay_nights:
        raise ValidationError(f"Maximum stay is {max_stay_nights} nights")
    return date_range


class RoomService:
    """Service for searching and managing the room inventory"""

    def __init__(self, repository: RoomRepository, settings: Optional[Settings] = None):
        self.repository = repository
        self.settings = settings or get_settings()

    async def add_room(self, room_number: str, category: Union[RoomCategory, str]) -> Outcome[Room]:
        """Add a room to the inventory"""
        try:
            room = Room.create(room_number, self._category(category))
            if await self.repository.find_by_number(room.room_number):
                raise DuplicateError(f"Room {room.room_number} already exists")
        except ReservationError as e:
            return Outcome.failure(e)

        await self.repository.save(room)
        logger.info("Room %s (%s) added to inventory", room.room_number, room.category.value)
        return Outcome.success(room)

    async def list_rooms(self) -> List[Room]:
        """Get every room in inventory order"""
        return await self.repository.find_all()

    async def get_room(self, room_number: str) -> Outcome[Room]:
        """Get room by number"""
        room = await self.repository.find_by_number(room_number)
        if room is None:
            return Outcome.failure(NotFoundError(f"Room {room_number} not found"))
        return Outcome.success(room)

    async def search_available(
        self,
        category: Union[RoomCategory, str],
        check_in: date,
        check_out: date
    ) -> Outcome[List[Room]]:
        """Find rooms of a category that are free for the whole stay.

        The result is a snapshot; reserve() re-checks availability.
        """
        try:
            category = self._category(category)
            date_range = build_date_range(check_in, check_out, self.settings.max_stay_nights)
        except ReservationError as e:
            return Outcome.failure(e)

        rooms = await self.repository.find_by_category(category)
        available = [
            room for room in rooms
            if room.is_available(date_range.check_in, date_range.check_out)
        ]
        return Outcome.success(available)

    async def adjust_price(self, room_number: str, new_price: Decimal) -> Outcome[Room]:
        """Change a room's nightly price; existing reservations keep their totals"""
        room = await self.repository.find_by_number(room_number)
        if room is None:
            return Outcome.failure(NotFoundError(f"Room {room_number} not found"))

        try:
            room.adjust_price(new_price)
        except ReservationError as e:
            return Outcome.failure(e)

        await self.repository.save(room)
        logger.info("Room %s price set to %s", room_number, room.price_per_night)
        return Outcome.success(room)

    @staticmethod
    def _category(category: Union[RoomCategory, str]) -> RoomCategory:
        if isinstance(category, RoomCategory):
            return category
        return parse_category(category)


class ReservationService:
    """Allocator: reserves and releases rooms without double-booking.

    Each room has its own asyncio.Lock. A reservation takes a hold on the
    room's nights under the lock, charges the guest outside it, and either
    confirms or releases the hold.
    """

    def __init__(self,
                 repository: ReservationRepository,
                 room_repo: RoomRepository,
                 payment_gateway: PaymentGateway,
                 settings: Optional[Settings] = None):
        self.repository = repository
        self.room_repo = room_repo
        self.payment_gateway = payment_gateway
        self.settings = settings or get_settings()
        self._room_locks: Dict[str, asyncio.Lock] = {}

    def _lock_for(self, room_number: str) -> asyncio.Lock:
        lock = self._room_locks.get(room_number)
        if lock is None:
            lock = asyncio.Lock()
            self._room_locks[room_number] = lock
        return lock

    async def reserve(
        self,
        guest_id: UUID,
        room_number: str,
        check_in: date,
        check_out: date
    ) -> Outcome[Reservation]:
        """Reserve a room for a guest, charging the total up front"""
        try:
            reservation = await self._reserve(guest_id, room_number, check_in, check_out)
        except ReservationError as e:
            logger.info("Reservation on room %s rejected: %s", room_number, e.message)
            return Outcome.failure(e)
        return Outcome.success(reservation)

    async def _reserve(self, guest_id: UUID, room_number: str, check_in: date, check_out: date) -> Reservation:
        date_range = build_date_range(check_in, check_out, self.settings.max_stay_nights)

        room = await self.room_repo.find_by_number(room_number)
        if room is None:
            raise NotFoundError(f"Room {room_number} not found")

        async with self._lock_for(room.room_number):
            reservation = Reservation.create(guest_id, room, date_range)
            if not room.hold_dates(date_range.check_in, date_range.check_out):
                raise ConflictError(
                    f"Room {room.room_number} is not available for the selected dates"
                )

        # The held nights belong to this attempt alone until it confirms or releases them
        try:
            await self._charge(reservation.total_amount)
            reservation.confirm()
            await self.repository.save(reservation)
        except BaseException:
            room.unbook_dates(date_range.check_in, date_range.check_out)
            raise

        logger.info(
            "Reservation %s confirmed: room %s, %s to %s, total %s",
            reservation.booking_id, room.room_number,
            reservation.check_in, reservation.check_out, reservation.total_amount
        )
        return reservation

    async def _charge(self, amount: Decimal) -> None:
        try:
            paid = await asyncio.wait_for(
                self.payment_gateway.charge(amount),
                timeout=self.settings.payment_timeout_seconds
            )
        except asyncio.TimeoutError:
            logger.warning("Payment of %s timed out", amount)
            raise PaymentError("Payment timed out. Reservation could not be completed.")
        except Exception as e:
            logger.exception("Payment gateway error")
            raise PaymentError(f"Payment failed: {e}")

        if not paid:
            raise PaymentError("Payment failed. Reservation could not be completed.")

    async def cancel(self, booking_id: str) -> Outcome[bool]:
        """Cancel a reservation and free its nights.

        The value is True when the reservation changed state, False when it
        was already cancelled.
        """
        reservation = await self.repository.find_by_id(booking_id)
        if reservation is None:
            return Outcome.failure(NotFoundError(f"Booking with ID {booking_id} not found"))

        async with self._lock_for(reservation.room_number):
            if reservation.status == ReservationStatus.CANCELLED:
                return Outcome.success(False, message=f"Booking {booking_id} is already cancelled")

            try:
                reservation.cancel()
            except ReservationError as e:
                return Outcome.failure(e)

            reservation.room.unbook_dates(reservation.check_in, reservation.check_out)
            await self.repository.update(reservation)

        logger.info("Booking %s cancelled, room %s released", booking_id, reservation.room_number)
        return Outcome.success(True, message=f"Booking {booking_id} cancelled successfully")

    async def get_reservation(self, booking_id: str) -> Outcome[Reservation]:
        """Get reservation by booking ID"""
        reservation = await self.repository.find_by_id(booking_id)
        if reservation is None:
            return Outcome.failure(NotFoundError(f"Booking with ID {booking_id} not found"))
        return Outcome.success(reservation)

    async def list_by_guest(self, guest_id: UUID) -> List[Reservation]:
        """Get all reservations for a guest"""
        return await self.repository.find_by_guest_id(guest_id)

    async def list_reservations(self) -> List[Reservation]:
        """Get all reservations"""
        return await self.repository.find_all()

    async def check_consistency(self) -> List[str]:
        """Describe every room whose booked nights differ from its active reservations.

        Nights held by a reservation still waiting on payment show up here too.
        """
        problems = []
        for room in await self.room_repo.find_all():
            expected = set()
            for reservation in await self.repository.find_by_room_number(room.room_number):
                if reservation.is_active():
                    expected.update(iter_nights(reservation.check_in, reservation.check_out))

            if expected != room.booked_dates:
                problems.append(
                    f"Room {room.room_number}: missing {sorted(expected - room.booked_dates)}, "
                    f"unexpected {sorted(room.booked_dates - expected)}"
                )
        return problems


def _public(user: UserInDB) -> User:
    return User(**user.model_dump(exclude={"hashed_password"}))


class GuestService:
    """Service for guest registration and login"""

    def __init__(self, repository: GuestRepository):
        self.repository = repository

    async def register(self, username: str, password: str) -> Outcome[User]:
        """Register a new guest"""
        username = (username or "").strip()
        if not username or not password:
            return Outcome.failure(ValidationError("Username and password are required"))

        if await self.repository.find_by_username(username):
            return Outcome.failure(DuplicateError(f"Username {username} already exists"))

        user = UserInDB(username=username, hashed_password=get_password_hash(password))
        await self.repository.save(user)
        logger.info("Guest %s registered with ID %s", username, user.user_id)
        return Outcome.success(_public(user))

    async def authenticate(self, username: str, password: str) -> Outcome[User]:
        """Check a guest's credentials"""
        user = await self.repository.find_by_username(username)
        if user is None or not verify_password(password, user.hashed_password):
            return Outcome.failure(ValidationError("Invalid username or password"))
        return Outcome.success(_public(user))

    async def get_by_username(self, username: str) -> Outcome[User]:
        """Get guest by username"""
        user = await self.repository.find_by_username(username)
        if user is None:
            return Outcome.failure(NotFoundError(f"Guest {username} not found"))
        return Outcome.success(_public(user))
