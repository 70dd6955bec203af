"""Domain Repository Interfaces"""
from abc import ABC, abstractmethod
from typing import Optional, List
from uuid import UUID

from domain.auth import UserInDB
from domain.entities import Room, Reservation
from domain.enums import RoomCategory


class RoomRepository(ABC):
    """Repository interface for the room inventory"""

    @abstractmethod
    async def save(self, room: Room) -> Room:
        """Save room"""
        pass

    @abstractmethod
    async def find_by_number(self, room_number: str) -> Optional[Room]:
        """Find room by room number"""
        pass

    @abstractmethod
    async def find_by_category(self, category: RoomCategory) -> List[Room]:
        """Find rooms of a category, in inventory order"""
        pass

    @abstractmethod
    async def find_all(self) -> List[Room]:
        """Find all rooms, in inventory order"""
        pass


class ReservationRepository(ABC):
    """Repository interface for Reservation Aggregate"""

    @abstractmethod
    async def save(self, reservation: Reservation) -> Reservation:
        """Save reservation"""
        pass

    @abstractmethod
    async def find_by_id(self, booking_id: str) -> Optional[Reservation]:
        """Find reservation by booking ID"""
        pass

    @abstractmethod
    async def find_by_guest_id(self, guest_id: UUID) -> List[Reservation]:
        """Find reservations by guest ID"""
        pass

    @abstractmethod
    async def find_by_room_number(self, room_number: str) -> List[Reservation]:
        """Find reservations made on a room"""
        pass

    @abstractmethod
    async def find_all(self) -> List[Reservation]:
        """Find all reservations"""
        pass

    @abstractmethod
    async def update(self, reservation: Reservation) -> Reservation:
        """Update reservation"""
        pass


class GuestRepository(ABC):
    """Repository interface for registered guests"""

    @abstractmethod
    async def save(self, user: UserInDB) -> UserInDB:
        """Save guest"""
        pass

    @abstractmethod
    async def find_by_username(self, username: str) -> Optional[UserInDB]:
        """Find guest by login name"""
        pass
