from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm

from gem_finder.api.v1.dependencies import get_uow
from gem_finder.core.config import settings
from gem_finder.domain.unit_of_work import UnitOfWork
from gem_finder.schemas.user_schema import (
    LoginResponse,
    SignupResponse,
    Token,
    UserCreate,
    UserLogin,
    UserResponse,
)
from gem_finder.services.user_service import UserService
from gem_finder.utils.logger import get_logger


logger = get_logger("auth_router")


class AuthRouter:
    def __init__(self) -> None:
        self.router = APIRouter(prefix="/auth", tags=["Auth"])
        self.register_routes()

    def register_routes(self) -> None:
        self.router.add_api_route(
            "/signup",
            self.signup,
            methods=["POST"],
            response_model=SignupResponse,
            status_code=status.HTTP_201_CREATED,
        )
        self.router.add_api_route(
            "/login",
            self.login,
            methods=["POST"],
            response_model=LoginResponse,
        )
        self.router.add_api_route(
            "/token",
            self.token,
            methods=["POST"],
            response_model=Token,
            summary="OAuth2 password form login (username is the email)",
        )

    async def signup(
        self, user_in: UserCreate, uow: UnitOfWork = Depends(get_uow)
    ) -> SignupResponse:
        user, token = UserService(uow).register_user(user_in)
        return SignupResponse(
            message="User registered",
            user=UserResponse.model_validate(user),
            token=token,
        )

    async def login(
        self, credentials: UserLogin, uow: UnitOfWork = Depends(get_uow)
    ) -> LoginResponse:
        _, token = UserService(uow).authenticate(
            credentials.email, credentials.password
        )
        return LoginResponse(
            token=token,
            expires_in=settings.auth.access_token_expires * 60,  # seconds
        )

    async def token(
        self,
        form_data: OAuth2PasswordRequestForm = Depends(),
        uow: UnitOfWork = Depends(get_uow),
    ) -> Token:
        _, token = UserService(uow).authenticate(
            form_data.username, form_data.password
        )
        return Token(access_token=token)


auth_router = AuthRouter().router
