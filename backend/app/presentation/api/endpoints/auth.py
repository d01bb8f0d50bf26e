"""Login, self-registration and current-user endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from app.application.schemas.auth import LoginRequest, LoginResponse, RegisterRequest, UserResponse
from app.application.services import AuthService
from app.domain.entities import User
from app.domain.exceptions import AuthenticationError, DuplicateEntityError, RegistrationError
from app.infrastructure.dependencies import get_auth_service, get_current_user

router = APIRouter(prefix="/auth", tags=["Auth"])

_LOGIN_STATUS = {
    AuthenticationError.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    AuthenticationError.USER_INACTIVE: status.HTTP_403_FORBIDDEN,
    AuthenticationError.PENDING_APPROVAL: status.HTTP_403_FORBIDDEN,
}


def problem(title: str, detail: str, status_code: int) -> JSONResponse:
    """Problem-style body the web client branches on via ``title``."""
    return JSONResponse(
        status_code=status_code,
        content={"title": title, "detail": detail, "status": status_code},
    )


@router.post("/login", response_model=LoginResponse)
async def login(
    data: LoginRequest,
    service: AuthService = Depends(get_auth_service),
):
    """Exchange email and password for a bearer token."""
    try:
        token, user = await service.login(data.email, data.password)
    except AuthenticationError as e:
        return problem(e.code, e.message, _LOGIN_STATUS.get(e.code, status.HTTP_401_UNAUTHORIZED))
    return LoginResponse(token=token, user=UserResponse.model_validate(user))


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    data: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
):
    """Create an account that stays inactive until an administrator approves it."""
    try:
        user = await service.register(data)
    except DuplicateEntityError as e:
        return problem("UserAlreadyExists", str(e), status.HTTP_409_CONFLICT)
    except RegistrationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return UserResponse.model_validate(user)


@router.get("/me", response_model=UserResponse)
async def me(user: User = Depends(get_current_user)) -> UserResponse:
    return UserResponse.model_validate(user)
