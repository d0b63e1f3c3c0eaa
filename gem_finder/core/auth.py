from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from gem_finder.core.security import security_manager
from gem_finder.db.session import get_db
from gem_finder.domain.repositories.user_repository import UserRepository
from gem_finder.models.user_model import User


# Swagger's "Authorize" button posts the OAuth2 form to this route.
oauth2_scheme: OAuth2PasswordBearer = OAuth2PasswordBearer(
    tokenUrl="/api/auth/token"
)


async def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)],
    db: Session = Depends(get_db),
) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    payload = security_manager.verify_token(token)
    if payload is None:
        raise credentials_exception

    subject: str | None = payload.get("sub")
    if subject is None or not subject.isdigit():
        raise credentials_exception

    user: User | None = UserRepository(db).get(int(subject))
    if user is None:
        raise credentials_exception
    return user
