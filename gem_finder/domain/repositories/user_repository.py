from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from gem_finder.core.security import SecurityManager
from gem_finder.domain.repositories.base_sqlalchemy import SQLAlchemyRepository
from gem_finder.models.user_model import User


class UserRepository(SQLAlchemyRepository[User, int]):
    def __init__(self, db: Session):
        super().__init__(User, db)

    def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(func.lower(User.email) == email.lower())
        return self.db.scalar(stmt)

    def create(self, user_data: dict) -> User:
        """Create a user, hashing the plain password."""
        plain_password = user_data.pop("password", None)
        if plain_password is None:
            raise ValueError("Password is required")

        user = User(
            name=user_data["name"],
            email=user_data["email"].lower(),
            password_hash=SecurityManager.get_password_hash(plain_password),
            is_admin=user_data.get("is_admin", False),
        )
        self.db.add(user)
        self.db.flush()  # Flush to get id
        return user
