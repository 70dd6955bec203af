"""API Schemas - Request and Response DTOs"""
from pydantic import BaseModel, Field
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from domain.enums import RoomCategory


# ============================================================================
# ROOM SCHEMAS
# ============================================================================

class AdjustPriceRequest(BaseModel):
    """Adjust room price request DTO"""
    price_per_night: Decimal = Field(ge=0)


class RoomResponse(BaseModel):
    """Room response DTO"""
    room_number: str
    category: RoomCategory
    display_name: str
    price_per_night: Decimal
    capacity: int


class CategoryResponse(BaseModel):
    """Room category catalog entry DTO"""
    category: RoomCategory
    display_name: str
    base_price: Decimal
    capacity: int


# ============================================================================
# RESERVATION SCHEMAS
# ============================================================================

class CreateReservationRequest(BaseModel):
    """Create reservation request DTO"""
    room_number: str
    check_in: date
    check_out: date


class ReservationResponse(BaseModel):
    """Reservation response DTO"""
    booking_id: str
    guest_id: UUID
    room_number: str
    room_category: RoomCategory
    check_in: date
    check_out: date
    nights: int
    total_amount: Decimal
    status: str
    created_at: datetime
    modified_at: datetime
    version: int


class CancellationResponse(BaseModel):
    """Cancellation result DTO"""
    booking_id: str
    cancelled: bool
    message: str


# ============================================================================
# AUTH SCHEMAS
# ============================================================================

class RegisterGuestRequest(BaseModel):
    """Guest registration request DTO"""
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class Token(BaseModel):
    """Token response DTO"""
    access_token: str
    token_type: str


class UserResponse(BaseModel):
    """User response DTO"""
    user_id: UUID
    username: str
    disabled: bool

