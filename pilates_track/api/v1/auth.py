from fastapi import APIRouter, Depends, HTTPException, Response, status

from pilates_track.core.dependencies import get_current_user, get_user_repository
from pilates_track.models.user import User
from pilates_track.repositories.user_repository import UserRepository
from pilates_track.services.auth_service import auth_service
from pilates_track.schemas.auth import UserLogin, UserRegister, AuthResponse, RefreshTokenRequest, UserMe

router = APIRouter(tags=["auth"])


@router.post("/login", response_model=AuthResponse)
async def login(user: UserLogin, repo: UserRepository = Depends(get_user_repository)):
    """Аутентификация пользователя и выдача JWT токенов"""
    authenticated_user = await auth_service.authenticate_user(repo, user)
    if not authenticated_user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Неверный email или пароль",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return AuthResponse(**await auth_service.issue_tokens(repo, authenticated_user))


@router.post("/register", response_model=AuthResponse)
async def register(user: UserRegister, repo: UserRepository = Depends(get_user_repository)):
    """Регистрация нового пользователя и выдача JWT токенов"""
    new_user = await auth_service.register_user(repo, user)
    return AuthResponse(**await auth_service.issue_tokens(repo, new_user))


@router.post("/refresh", response_model=AuthResponse)
async def refresh_token(request: RefreshTokenRequest, repo: UserRepository = Depends(get_user_repository)):
    """Ротация refresh-токена: старый аннулируется, выдаётся новая пара"""
    user = await auth_service.rotate_refresh_token(repo, request.refresh_token)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired refresh token"
        )

    return AuthResponse(**await auth_service.issue_tokens(repo, user))


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(request: RefreshTokenRequest, repo: UserRepository = Depends(get_user_repository)):
    # Отвечаем 204 независимо от валидности токена
    await auth_service.logout_user(repo, request.refresh_token)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/me", response_model=UserMe)
async def get_me(current_user: User = Depends(get_current_user)):
    return UserMe(
        id=current_user.id,
        email=current_user.email,
        nickname=current_user.nickname,
        role=current_user.role.value if current_user.role else "user",
        weight_kg=current_user.weight_kg,
        created_at=current_user.created_at,
    )
