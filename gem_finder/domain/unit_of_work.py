from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from sqlalchemy.orm import Session

from gem_finder.domain.repositories.comment_repository import CommentRepository
from gem_finder.domain.repositories.favourite_repository import FavouriteRepository
from gem_finder.domain.repositories.place_repository import PlaceRepository
from gem_finder.domain.repositories.rating_repository import RatingRepository
from gem_finder.domain.repositories.report_repository import ReportRepository
from gem_finder.domain.repositories.user_repository import UserRepository


class IUnitOfWork(ABC):
    @abstractmethod
    def __enter__(self): ...
    @abstractmethod
    def __exit__(self, exc_type, exc_val, exc_tb): ...
    @abstractmethod
    def commit(self): ...
    @abstractmethod
    def rollback(self): ...


class UnitOfWork(AbstractContextManager, IUnitOfWork):
    """Coordinates repositories & transaction boundaries."""

    def __init__(self, db: Session):
        self.db = db
        self.users = UserRepository(db)
        self.places = PlaceRepository(db)
        self.ratings = RatingRepository(db)
        self.comments = CommentRepository(db)
        self.favorites = FavouriteRepository(db)
        self.reports = ReportRepository(db)

    # ---- context-manager API -----------------------------------------
    def __enter__(self):
        return self

    def __exit__(self, exc_type, *_):
        if exc_type is None:
            self.commit()
        else:
            self.rollback()

    # ---- public -------------------------------------------------------
    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
