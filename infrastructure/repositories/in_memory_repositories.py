"""In-Memory Repository Implementations"""
from typing import Optional, List, Dict
from uuid import UUID

from domain.auth import UserInDB
from domain.repositories import RoomRepository, ReservationRepository, GuestRepository
from domain.entities import Room, Reservation
from domain.enums import RoomCategory


class InMemoryRoomRepository(RoomRepository):
    """In-memory implementation of RoomRepository; keeps insertion order"""

    def __init__(self):
        self._storage: Dict[str, Room] = {}

    async def save(self, room: Room) -> Room:
        """Save room to memory"""
        self._storage[room.room_number] = room
        return room

    async def find_by_number(self, room_number: str) -> Optional[Room]:
        """Find room by room number"""
        return self._storage.get(room_number)

    async def find_by_category(self, category: RoomCategory) -> List[Room]:
        """Find rooms of a category"""
        return [r for r in self._storage.values() if r.category == category]

    async def find_all(self) -> List[Room]:
        """Find all rooms"""
        return list(self._storage.values())


class InMemoryReservationRepository(ReservationRepository):
    """In-memory implementation of ReservationRepository"""

    def __init__(self):
        self._storage: Dict[str, Reservation] = {}

    async def save(self, reservation: Reservation) -> Reservation:
        """Save reservation to memory"""
        self._storage[reservation.booking_id] = reservation
        return reservation

    async def find_by_id(self, booking_id: str) -> Optional[Reservation]:
        """Find reservation by booking ID"""
        return self._storage.get(booking_id)

    async def find_by_guest_id(self, guest_id: UUID) -> List[Reservation]:
        """Find reservations by guest ID"""
        return [r for r in self._storage.values() if r.guest_id == guest_id]

    async def find_by_room_number(self, room_number: str) -> List[Reservation]:
        """Find reservations made on a room"""
        return [r for r in self._storage.values() if r.room_number == room_number]

    async def find_all(self) -> List[Reservation]:
        """Find all reservations"""
        return list(self._storage.values())

    async def update(self, reservation: Reservation) -> Reservation:
        """Update reservation"""
        if reservation.booking_id in self._storage:
            self._storage[reservation.booking_id] = reservation
            return reservation
        raise ValueError("Reservation not found")


class InMemoryGuestRepository(GuestRepository):
    """In-memory implementation of GuestRepository, keyed by username"""

    def __init__(self):
        self._storage: Dict[str, UserInDB] = {}

    async def save(self, user: UserInDB) -> UserInDB:
        """Save guest to memory"""
        self._storage[user.username] = user
        return user

    async def find_by_username(self, username: str) -> Optional[UserInDB]:
        """Find guest by username"""
        return self._storage.get(username)

