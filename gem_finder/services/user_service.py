"""User application service - signup and credential checks."""

from typing import Tuple

from sqlalchemy.exc import IntegrityError

from gem_finder.core.security import SecurityManager
from gem_finder.domain.exceptions import InvalidCredentials, UserAlreadyExists
from gem_finder.domain.unit_of_work import UnitOfWork
from gem_finder.models.user_model import User
from gem_finder.schemas.user_schema import UserCreate
from gem_finder.utils.logger import get_logger


logger = get_logger("user_service")


class UserService:
    """Application service for user operations."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.repo = uow.users

    def register_user(self, user_in: UserCreate) -> Tuple[User, str]:
        """Register a new user and issue their first token."""
        try:
            with self.uow:
                logger.info(f"Registering user: {user_in.email}")
                if self.repo.get_by_email(user_in.email):
                    raise UserAlreadyExists("email", user_in.email)

                user_data = user_in.model_dump()
                user_data["name"] = user_data["name"].strip()
                user = self.repo.create(user_data)
                self.uow.commit()
        except IntegrityError:
            # a concurrent signup won the unique email index
            logger.warning(f"Concurrent signup for {user_in.email}")
            raise UserAlreadyExists("email", user_in.email) from None

        logger.info(f"User registered successfully: {user.id}")
        return user, SecurityManager.token_for_user(user)

    def authenticate(self, email: str, password: str) -> Tuple[User, str]:
        user = self.repo.get_by_email(email)
        if not user or not SecurityManager.verify_password(
            password, user.password_hash
        ):
            logger.warning(f"Failed login for {email}")
            raise InvalidCredentials()
        logger.info(f"Login successful for user: {user.id}")
        return user, SecurityManager.token_for_user(user)
