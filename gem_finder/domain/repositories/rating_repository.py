import datetime as dt
from typing import Dict, List, Optional

from sqlalchemy import delete, desc, func, select
from sqlalchemy.orm import Session

from gem_finder.domain.repositories.base_sqlalchemy import SQLAlchemyRepository
from gem_finder.models.place_model import Place
from gem_finder.models.rating_model import Rating


class RatingRepository(SQLAlchemyRepository[Rating, int]):
    def __init__(self, db: Session):
        super().__init__(Rating, db)

    def get_user_rating_for_place(
        self, user_id: int, place_id: int
    ) -> Optional[Rating]:
        """Get a user's rating for a specific place."""
        stmt = select(Rating).where(
            Rating.user_id == user_id,
            Rating.place_id == place_id,
        )
        return self.db.scalar(stmt)

    def upsert(self, user_id: int, place_id: int, value: int) -> Rating:
        """Insert or overwrite the (user, place) rating in one statement."""
        stmt = self._insert().values(
            user_id=user_id, place_id=place_id, rating=value
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id", "place_id"],
            set_={"rating": stmt.excluded.rating, "updated_at": dt.datetime.utcnow()},
        ).returning(Rating.id)
        rating_id = self.db.connection().execute(stmt).scalar_one()
        rating = self.db.get(Rating, rating_id, populate_existing=True)
        return rating

    def get_ratings_for_place(
        self, place_id: int, limit: int = 50
    ) -> List[Rating]:
        """Get all ratings for a place, ordered by most recent."""
        stmt = (
            select(Rating)
            .where(Rating.place_id == place_id)
            .order_by(desc(Rating.updated_at), desc(Rating.id))
            .limit(limit)
        )
        return list(self.db.scalars(stmt).all())

    def get_average_rating_for_place(self, place_id: int) -> float:
        """Calculate the average rating for a place."""
        stmt = select(func.avg(Rating.rating)).where(Rating.place_id == place_id)
        result = self.db.scalar(stmt)
        return float(result) if result else 0.0

    def get_rating_count_for_place(self, place_id: int) -> int:
        stmt = select(func.count(Rating.id)).where(Rating.place_id == place_id)
        return self.db.scalar(stmt) or 0

    def get_distribution_for_place(self, place_id: int) -> Dict[str, int]:
        """Number of ratings per star value, "1" through "5"."""
        distribution = {str(star): 0 for star in range(1, 6)}
        stmt = (
            select(Rating.rating, func.count(Rating.id))
            .where(Rating.place_id == place_id)
            .group_by(Rating.rating)
        )
        for value, count in self.db.execute(stmt).all():
            if str(value) in distribution:
                distribution[str(value)] = count
        return distribution

    def sum_received_by_owner(self, owner_id: int) -> int:
        """Sum of every rating value left on places owned by the user."""
        stmt = (
            select(func.coalesce(func.sum(Rating.rating), 0))
            .join(Place, Place.id == Rating.place_id)
            .where(Place.user_id == owner_id)
        )
        return int(self.db.scalar(stmt) or 0)

    def delete_for_place(self, place_id: int) -> int:
        result = self.db.execute(delete(Rating).where(Rating.place_id == place_id))
        return result.rowcount
