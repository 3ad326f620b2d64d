from fastapi import APIRouter, Depends, HTTPException
from fastapi import status as http_status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.dependencies import get_current_user
from app.auth.schemas import AuthResponse, CurrentUser, LoginRequest, RegisterRequest, UserInfo
from app.auth.services import ServiceError, get_user, login_user, register_user, user_to_info
from app.core.schemas import DataResponse, MessageResponse
from app.db.session import get_db

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=http_status.HTTP_201_CREATED,
)
async def register(
    payload: RegisterRequest,
    db: AsyncSession = Depends(get_db),
) -> AuthResponse:
    try:
        return await register_user(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post(
    "/login",
    response_model=AuthResponse,
    status_code=http_status.HTTP_200_OK,
)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db),
) -> AuthResponse:
    try:
        return await login_user(db, payload)
    except ServiceError as e:
        headers = {"WWW-Authenticate": "Bearer"} if e.status_code == http_status.HTTP_401_UNAUTHORIZED else None
        raise HTTPException(status_code=e.status_code, detail=e.message, headers=headers)


@router.post("/login-oauth")
async def login_oauth(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: AsyncSession = Depends(get_db),
):
    try:
        payload = LoginRequest(email=form_data.username.strip(), password=form_data.password)
        result = await login_user(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except ValueError:
        raise HTTPException(status_code=http_status.HTTP_400_BAD_REQUEST, detail="Invalid email")
    return {
        "access_token": result.token,
        "token_type": "bearer",
    }


@router.get("/me", response_model=DataResponse[UserInfo])
async def me(
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> DataResponse[UserInfo]:
    try:
        user = await get_user(db, current_user.id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return DataResponse[UserInfo](data=user_to_info(user))


@router.get("/logout", response_model=MessageResponse)
async def logout(current_user: CurrentUser = Depends(get_current_user)) -> MessageResponse:
    # Tokens are stateless; the client discards its copy
    return MessageResponse()
