"""
Auth routes: register, login, logout, current user.
"""

from fastapi import APIRouter

from ..auth import CurrentUserId
from ..schemas import (
    AuthRequest,
    LoginResponse,
    MessageResponse,
    RegisterResponse,
    UserResponse,
)
from ..services import AuthServiceDep

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", status_code=201)
async def register(request: AuthRequest, service: AuthServiceDep) -> RegisterResponse:
    """Create an account. 409 if the username is taken."""
    user_id = service.register(request.username, request.password)
    return RegisterResponse(msg="Registered successfully", userId=user_id)


@router.post("/login")
async def login(request: AuthRequest, service: AuthServiceDep) -> LoginResponse:
    """Exchange credentials for a bearer token."""
    token, user = service.login(request.username, request.password)
    return LoginResponse(access_token=token, user=UserResponse.from_db(user))


@router.post("/logout")
async def logout() -> MessageResponse:
    """Tokens are stateless; the client discards its copy."""
    return MessageResponse(msg="Logged out")


@router.get("/me")
async def me(user_id: CurrentUserId, service: AuthServiceDep) -> UserResponse:
    """Get the authenticated user's profile."""
    return UserResponse.from_db(service.get_profile(user_id))
