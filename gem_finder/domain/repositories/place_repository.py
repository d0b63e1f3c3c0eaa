from typing import List, Optional, Tuple

from sqlalchemy import desc, func, select
from sqlalchemy.orm import Session, joinedload

from gem_finder.domain.repositories.base_sqlalchemy import SQLAlchemyRepository
from gem_finder.models.place_model import Place
from gem_finder.models.rating_model import Rating


class PlaceRepository(SQLAlchemyRepository[Place, int]):
    def __init__(self, db: Session):
        super().__init__(Place, db)

    @staticmethod
    def _avg_rating():
        return func.coalesce(func.avg(Rating.rating), 0).label("avg_rating")

    def list_with_average(
        self, limit: Optional[int] = None
    ) -> List[Tuple[Place, float]]:
        """Places with their on-read average rating, best rated first.

        Unrated places average 0 and therefore sort last.
        """
        avg_rating = self._avg_rating()
        stmt = (
            select(Place, avg_rating)
            .outerjoin(Rating, Rating.place_id == Place.id)
            .group_by(Place.id)
            .order_by(desc(avg_rating), Place.created_at.desc(), Place.id.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        return [(place, float(avg)) for place, avg in self.db.execute(stmt).all()]

    def get_with_stats(self, place_id: int) -> Optional[Tuple[Place, float, int]]:
        """A single place with its average rating and rating count."""
        stmt = (
            select(
                Place,
                self._avg_rating(),
                func.count(Rating.id).label("rating_count"),
            )
            .options(joinedload(Place.owner))
            .outerjoin(Rating, Rating.place_id == Place.id)
            .where(Place.id == place_id)
            .group_by(Place.id)
        )
        row = self.db.execute(stmt).first()
        if row is None:
            return None
        place, avg, count = row
        return place, float(avg), int(count)

    def list_newest(self) -> List[Place]:
        stmt = select(Place).order_by(Place.created_at.desc(), Place.id.desc())
        return list(self.db.scalars(stmt).all())

    def list_by_user(self, user_id: int) -> List[Place]:
        stmt = (
            select(Place)
            .where(Place.user_id == user_id)
            .order_by(Place.created_at.desc(), Place.id.desc())
        )
        return list(self.db.scalars(stmt).all())

    def count_by_user(self, user_id: int) -> int:
        stmt = select(func.count(Place.id)).where(Place.user_id == user_id)
        return self.db.scalar(stmt) or 0

    def search(
        self, query: Optional[str] = None, category: Optional[str] = None
    ) -> List[Place]:
        """Case-insensitive title substring and exact category match."""
        stmt = select(Place)
        if query:
            stmt = stmt.where(Place.title.ilike(f"%{query}%"))
        if category:
            stmt = stmt.where(func.lower(Place.category) == category.lower())
        stmt = stmt.order_by(Place.created_at.desc(), Place.id.desc())
        return list(self.db.scalars(stmt).all())
