from fastapi import APIRouter, Depends, HTTPException, status

from app.core.dependencies import get_current_user, get_user_repository
from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.schemas.auth import UserLogin, UserRegister, UserRead, AuthResponse
from app.services.auth_service import auth_service

router = APIRouter(tags=["auth"])


def _auth_response(user: User) -> AuthResponse:
    access_token = auth_service.create_access_token(data={"sub": str(user.id)})
    return AuthResponse(user=UserRead.model_validate(user), token=access_token)


@router.post("/register", response_model=AuthResponse)
async def register(user: UserRegister, repo: UserRepository = Depends(get_user_repository)):
    """Регистрация нового пользователя и выдача JWT токена"""
    new_user = await auth_service.register_user(repo, user)
    return _auth_response(new_user)


@router.post("/login", response_model=AuthResponse)
async def login(user: UserLogin, repo: UserRepository = Depends(get_user_repository)):
    """Аутентификация пользователя по username и паролю"""
    authenticated_user = await auth_service.authenticate_user(repo, user.username, user.password)
    if not authenticated_user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Неверный username или пароль",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return _auth_response(authenticated_user)


@router.get("/me", response_model=UserRead)
async def me(current_user: User = Depends(get_current_user)):
    return current_user
