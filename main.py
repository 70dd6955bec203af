from contextlib import asynccontextmanager
from datetime import date, timedelta
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, FastAPI, HTTPException
from fastapi.security import OAuth2PasswordRequestForm

from api.schemas import (
    # Rooms
    AdjustPriceRequest, RoomResponse, CategoryResponse,
    # Reservations
    CreateReservationRequest, ReservationResponse, CancellationResponse,
    # Auth
    RegisterGuestRequest, Token, UserResponse
)

from api.dependencies import (
    get_app_settings, get_current_active_user,
    get_guest_service, get_reservation_service, get_room_service
)
from infrastructure.config import Settings, get_settings
from infrastructure.logger import get_logger
from infrastructure.payment import SimulatedPaymentGateway
from infrastructure.security import create_access_token
from infrastructure.seed import seed_demo_data
from domain.auth import User
from domain.entities import Room, Reservation
from domain.enums import ErrorCode, ReservationStatus
from domain.outcomes import Outcome
from domain.payment import PaymentGateway
from domain.value_objects import ROOM_CATALOG

from application.services import GuestService, ReservationService, RoomService
from infrastructure.repositories.in_memory_repositories import (
    InMemoryGuestRepository, InMemoryReservationRepository, InMemoryRoomRepository
)


logger = get_logger(__name__)

router = APIRouter()

_STATUS_BY_ERROR = {
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.PAYMENT_FAILED: 402,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.CONFLICT: 409,
    ErrorCode.DUPLICATE: 409,
}


def create_app(
    settings: Optional[Settings] = None,
    payment_gateway: Optional[PaymentGateway] = None
) -> FastAPI:
    """Build the app with its repositories and services created once."""
    settings = settings or get_settings()

    room_service = RoomService(InMemoryRoomRepository(), settings)
    reservation_service = ReservationService(
        InMemoryReservationRepository(),
        room_service.repository,
        payment_gateway or SimulatedPaymentGateway(),
        settings
    )
    guest_service = GuestService(InMemoryGuestRepository())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.seed_demo_data:
            await seed_demo_data(room_service, guest_service)
        logger.info("%s %s started", settings.app_name, settings.app_version)
        yield

    app = FastAPI(
        title=settings.app_name,
        description="Room search, reservation and cancellation without double-booking",
        version=settings.app_version,
        lifespan=lifespan
    )
    app.include_router(router)

    app.state.settings = settings
    app.state.room_service = room_service
    app.state.reservation_service = reservation_service
    app.state.guest_service = guest_service
    return app


def _raise_for(outcome: Outcome) -> None:
    """Turn a failed outcome into the matching HTTP error"""
    if not outcome.ok:
        raise HTTPException(status_code=_STATUS_BY_ERROR.get(outcome.error, 400), detail=outcome.message)


def _reject_past_check_in(check_in: date, settings: Settings) -> None:
    if settings.reject_past_check_in and check_in < date.today():
        raise HTTPException(status_code=400, detail="Check-in date cannot be in the past")


# ============================================================================
# HEALTH & ENUM REFERENCE ENDPOINTS
# ============================================================================

@router.get("/api/health", tags=["Health"])
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "message": "API is running"}

@router.get("/api/enums/room-categories", response_model=List[CategoryResponse], tags=["Enum Reference"])
async def get_room_categories():
    """Get the room category catalog"""
    return [
        CategoryResponse(
            category=category,
            display_name=info.display_name,
            base_price=info.base_price,
            capacity=info.capacity
        )
        for category, info in ROOM_CATALOG.items()
    ]

@router.get("/api/enums/reservation-status", tags=["Enum Reference"])
async def get_reservation_statuses():
    """Get all ReservationStatus enum values"""
    return {
        "values": [item.name for item in ReservationStatus],
        "description": "Reservation status values: PENDING_PAYMENT, CONFIRMED, CANCELLED, CHECKED_IN, CHECKED_OUT"
    }

# ============================================================================
# AUTH ENDPOINTS
# ============================================================================

@router.post("/api/guests", response_model=UserResponse, status_code=201, tags=["Auth"])
async def register_guest(
    request: RegisterGuestRequest,
    service: GuestService = Depends(get_guest_service)
):
    """Register a new guest"""
    outcome = await service.register(request.username, request.password)
    _raise_for(outcome)
    return outcome.value

@router.post("/token", response_model=Token, tags=["Auth"])
async def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    service: GuestService = Depends(get_guest_service),
    settings: Settings = Depends(get_app_settings)
):
    outcome = await service.authenticate(form_data.username, form_data.password)
    if not outcome.ok:
        raise HTTPException(
            status_code=401,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    access_token_expires = timedelta(minutes=settings.access_token_expire_minutes)
    access_token = create_access_token(
        data={"sub": outcome.value.username}, expires_delta=access_token_expires, settings=settings
    )
    return {"access_token": access_token, "token_type": "bearer"}

@router.get("/users/me", response_model=UserResponse, tags=["Auth"])
async def read_users_me(current_user: User = Depends(get_current_active_user)):
    return current_user

# ============================================================================
# ROOM ENDPOINTS
# ============================================================================

@router.get("/api/rooms", response_model=List[RoomResponse], tags=["Rooms"])
async def list_rooms(
    service: RoomService = Depends(get_room_service),
    current_user: User = Depends(get_current_active_user)
):
    """Get the whole inventory"""
    rooms = await service.list_rooms()
    return [_room_to_response(r) for r in rooms]

@router.get("/api/rooms/search", response_model=List[RoomResponse], tags=["Rooms"])
async def search_rooms(
    category: str,
    check_in: date,
    check_out: date,
    service: RoomService = Depends(get_room_service),
    settings: Settings = Depends(get_app_settings),
    current_user: User = Depends(get_current_active_user)
):
    """Search available rooms of a category for a stay"""
    _reject_past_check_in(check_in, settings)
    outcome = await service.search_available(category, check_in, check_out)
    _raise_for(outcome)
    return [_room_to_response(r) for r in outcome.value]

@router.get("/api/rooms/{room_number}", response_model=RoomResponse, tags=["Rooms"])
async def get_room(
    room_number: str,
    service: RoomService = Depends(get_room_service),
    current_user: User = Depends(get_current_active_user)
):
    """Get room by number"""
    outcome = await service.get_room(room_number)
    _raise_for(outcome)
    return _room_to_response(outcome.value)

@router.put("/api/rooms/{room_number}/price", response_model=RoomResponse, tags=["Admin"])
async def adjust_room_price(
    room_number: str,
    request: AdjustPriceRequest,
    service: RoomService = Depends(get_room_service),
    current_user: User = Depends(get_current_active_user)
):
    """Change a room's nightly price.

    Open to any authenticated guest; there are no staff roles yet.
    """
    outcome = await service.adjust_price(room_number, request.price_per_night)
    _raise_for(outcome)
    return _room_to_response(outcome.value)

# ============================================================================
# RESERVATION ENDPOINTS
# ============================================================================

@router.post("/api/reservations", response_model=ReservationResponse, status_code=201, tags=["Reservations"])
async def create_reservation(
    request: CreateReservationRequest,
    service: ReservationService = Depends(get_reservation_service),
    settings: Settings = Depends(get_app_settings),
    current_user: User = Depends(get_current_active_user)
):
    """Reserve a room for the current guest"""
    _reject_past_check_in(request.check_in, settings)
    outcome = await service.reserve(
        guest_id=current_user.user_id,
        room_number=request.room_number,
        check_in=request.check_in,
        check_out=request.check_out
    )
    _raise_for(outcome)
    return _reservation_to_response(outcome.value)

@router.get("/api/reservations/me", response_model=List[ReservationResponse], tags=["Reservations"])
async def get_my_reservations(
    service: ReservationService = Depends(get_reservation_service),
    current_user: User = Depends(get_current_active_user)
):
    """Get the current guest's reservations"""
    reservations = await service.list_by_guest(current_user.user_id)
    return [_reservation_to_response(r) for r in reservations]

@router.get("/api/reservations/guest/{guest_id}", response_model=List[ReservationResponse], tags=["Reservations"])
async def get_guest_reservations(
    guest_id: UUID,
    service: ReservationService = Depends(get_reservation_service),
    current_user: User = Depends(get_current_active_user)
):
    """Get all reservations for a guest"""
    reservations = await service.list_by_guest(guest_id)
    return [_reservation_to_response(r) for r in reservations]

@router.get("/api/reservations/{booking_id}", response_model=ReservationResponse, tags=["Reservations"])
async def get_reservation(
    booking_id: str,
    service: ReservationService = Depends(get_reservation_service),
    current_user: User = Depends(get_current_active_user)
):
    """Get reservation by booking ID"""
    outcome = await service.get_reservation(booking_id)
    _raise_for(outcome)
    return _reservation_to_response(outcome.value)

@router.post("/api/reservations/{booking_id}/cancel", response_model=CancellationResponse, tags=["Reservations"])
async def cancel_reservation(
    booking_id: str,
    service: ReservationService = Depends(get_reservation_service),
    current_user: User = Depends(get_current_active_user)
):
    """Cancel reservation and release its nights"""
    outcome = await service.cancel(booking_id)
    _raise_for(outcome)
    return CancellationResponse(booking_id=booking_id, cancelled=outcome.value, message=outcome.message)

# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def _room_to_response(room: Room) -> RoomResponse:
    """Convert room entity to response DTO"""
    return RoomResponse(
        room_number=room.room_number,
        category=room.category,
        display_name=room.display_name,
        price_per_night=room.price_per_night,
        capacity=room.capacity
    )

def _reservation_to_response(reservation: Reservation) -> ReservationResponse:
    """Convert reservation entity to response DTO"""
    return ReservationResponse(
        booking_id=reservation.booking_id,
        guest_id=reservation.guest_id,
        room_number=reservation.room_number,
        room_category=reservation.room.category,
        check_in=reservation.check_in,
        check_out=reservation.check_out,
        nights=reservation.nights,
        total_amount=reservation.total_amount,
        status=reservation.status.value,
        created_at=reservation.created_at,
        modified_at=reservation.modified_at,
        version=reservation.version
    )


app = create_app()
