from fastapi import Depends
from sqlalchemy.orm import Session

from gem_finder.core.auth import get_current_user, oauth2_scheme
from gem_finder.db.session import get_db
from gem_finder.domain.unit_of_work import UnitOfWork


__all__ = ["get_db", "oauth2_scheme", "get_uow", "get_current_user"]


def get_uow(db: Session = Depends(get_db)) -> UnitOfWork:
    """Get a Unit of Work instance for dependency injection."""
    return UnitOfWork(db)
