from typing import List

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from gem_finder.domain.repositories.base_sqlalchemy import SQLAlchemyRepository
from gem_finder.models.favourite_model import Favorite
from gem_finder.models.place_model import Place


class FavouriteRepository(SQLAlchemyRepository[Favorite, int]):
    def __init__(self, db: Session):
        super().__init__(Favorite, db)

    def add_if_missing(self, user_id: int, place_id: int) -> bool:
        """Insert the favorite unless it exists. True when a row was added."""
        stmt = (
            self._insert()
            .values(user_id=user_id, place_id=place_id)
            .on_conflict_do_nothing(
                index_elements=["user_id", "place_id"]
            )
        )
        return self.db.connection().execute(stmt).rowcount == 1

    def remove(self, user_id: int, place_id: int) -> bool:
        stmt = delete(Favorite).where(
            Favorite.user_id == user_id, Favorite.place_id == place_id
        )
        return self.db.execute(stmt).rowcount > 0

    def places_for_user(self, user_id: int) -> List[Place]:
        stmt = (
            select(Place)
            .join(Favorite, Favorite.place_id == Place.id)
            .where(Favorite.user_id == user_id)
            .order_by(Favorite.created_at.desc(), Favorite.id.desc())
        )
        return list(self.db.scalars(stmt).all())

    def delete_for_place(self, place_id: int) -> int:
        result = self.db.execute(delete(Favorite).where(Favorite.place_id == place_id))
        return result.rowcount
