"""API Dependencies - Services and Authentication"""
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer

from application.services import GuestService, ReservationService, RoomService
from domain.auth import User
from infrastructure.config import Settings, get_settings
from infrastructure.security import decode_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token")


def _from_state(request: Request, name: str):
    service = getattr(request.app.state, name, None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"{name} is not initialized",
        )
    return service


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def get_room_service(request: Request) -> RoomService:
    return _from_state(request, "room_service")


def get_reservation_service(request: Request) -> ReservationService:
    return _from_state(request, "reservation_service")


def get_guest_service(request: Request) -> GuestService:
    return _from_state(request, "guest_service")


async def get_current_user(
    token: str = Depends(oauth2_scheme),
    guest_service: GuestService = Depends(get_guest_service),
    settings: Settings = Depends(get_app_settings),
) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    username = decode_access_token(token, settings)
    if username is None:
        raise credentials_exception

    outcome = await guest_service.get_by_username(username)
    if not outcome.ok:
        raise credentials_exception
    return outcome.value


async def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    if current_user.disabled:
        raise HTTPException(status_code=400, detail="Inactive user")
    return current_user
