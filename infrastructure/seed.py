"""Demo inventory and guests loaded at startup."""

from __future__ import annotations

from typing import List, Tuple

from application.services import GuestService, RoomService
from domain.enums import RoomCategory
from infrastructure.logger import get_logger


logger = get_logger(__name__)


DEMO_ROOMS: List[Tuple[str, RoomCategory]] = [
    ("101", RoomCategory.STANDARD),
    ("102", RoomCategory.STANDARD),
    ("201", RoomCategory.DELUXE),
    ("202", RoomCategory.DELUXE),
    ("301", RoomCategory.SUITE),
]

DEMO_GUESTS: List[Tuple[str, str]] = [
    ("user1", "pass1"),
    ("user2", "pass2"),
]


async def seed_demo_data(room_service: RoomService, guest_service: GuestService) -> None:
    """Populate an empty inventory with the demo rooms and guests."""
    if await room_service.list_rooms():
        logger.info("Inventory already present; skipping seed")
        return

    for room_number, category in DEMO_ROOMS:
        await room_service.add_room(room_number, category)
    for username, password in DEMO_GUESTS:
        await guest_service.register(username, password)

    logger.info("Seeded %d rooms and %d guests", len(DEMO_ROOMS), len(DEMO_GUESTS))
