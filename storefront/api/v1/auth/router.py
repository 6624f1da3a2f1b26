"""
Authentication API routes
"""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.database import get_db
from storefront.core.security import AdminAccount
from storefront.core.session import get_admin_account, start_session, end_session
from storefront.middleware.rate_limit import auth_limiter
from .schemas import (
    RegisterRequest,
    LoginRequest,
    RegisterResponse,
    LoginResponse,
    SessionResponse,
    MessageResponse,
    UserSummary,
)
from .services import AuthService

router = APIRouter()


def get_auth_service(
    db: AsyncSession = Depends(get_db),
    admin: AdminAccount = Depends(get_admin_account),
) -> AuthService:
    return AuthService(db, admin)


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register new user",
)
@auth_limiter
async def register(
    request: Request,
    payload: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
):
    """Create a customer account"""
    user_id = await service.register(
        email=payload.email,
        password=payload.password,
        name=payload.name,
        phone=payload.phone,
    )
    return RegisterResponse(message="User registered successfully", user_id=user_id)


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    summary="Login user",
)
@auth_limiter
async def login(
    request: Request,
    payload: LoginRequest,
    service: AuthService = Depends(get_auth_service),
):
    """Authenticate and establish the session"""
    principal = await service.login(payload.email, payload.password)
    start_session(request.session, principal)

    return LoginResponse(
        message="Login successful",
        user=UserSummary(id=principal.id, email=principal.email, name=principal.name),
    )


@router.post(
    "/logout",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Logout user",
)
async def logout(request: Request):
    """Destroy the session, including any session-resident cart"""
    end_session(request.session)
    return MessageResponse(message="Logged out successfully")


@router.get(
    "/session",
    response_model=SessionResponse,
    status_code=status.HTTP_200_OK,
    summary="Check session",
)
async def get_session(request: Request):
    """Report whether the caller is logged in"""
    return AuthService.current_session(request.session)
