from typing import Tuple

from gem_finder.domain.exceptions import PlaceNotFound
from gem_finder.domain.services.place_domain_service import PlaceDomainService
from gem_finder.domain.unit_of_work import UnitOfWork
from gem_finder.models.rating_model import Rating
from gem_finder.models.user_model import User
from gem_finder.schemas.rating_schema import (
    PlaceRatingsResponse,
    PlaceRatingStats,
    RatingResponse,
)
from gem_finder.utils.logger import get_logger


logger = get_logger("rating_service")


class RatingService:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    def rate_place(
        self, place_id: int, value: int, current_user: User
    ) -> Tuple[RatingResponse, bool]:
        """Add or overwrite the caller's rating for a place.

        Returns the stored rating and whether it was the first vote. The
        write is a single upsert on the (user, place) unique key, so repeated
        or concurrent submissions always leave exactly one row.
        """
        value = PlaceDomainService.validate_rating(value)
        with self.uow:
            if self.uow.places.get(place_id) is None:
                raise PlaceNotFound(place_id)

            previous = self.uow.ratings.get_user_rating_for_place(
                current_user.id, place_id
            )
            rating = self.uow.ratings.upsert(current_user.id, place_id, value)
            self.uow.commit()

        created = previous is None
        logger.info(
            f"{'Added' if created else 'Updated'} rating {value} for place "
            f"{place_id} by user {current_user.id}"
        )
        return self._format_rating_output(rating), created

    def get_place_ratings(self, place_id: int, limit: int = 50) -> PlaceRatingsResponse:
        if self.uow.places.get(place_id) is None:
            raise PlaceNotFound(place_id)

        ratings = self.uow.ratings.get_ratings_for_place(place_id, limit)
        stats = PlaceRatingStats(
            place_id=place_id,
            average_rating=round(
                self.uow.ratings.get_average_rating_for_place(place_id), 2
            ),
            total_ratings=self.uow.ratings.get_rating_count_for_place(place_id),
            rating_distribution=self.uow.ratings.get_distribution_for_place(
                place_id
            ),
        )
        return PlaceRatingsResponse(
            ratings=[self._format_rating_output(r) for r in ratings],
            stats=stats,
        )

    @staticmethod
    def _format_rating_output(rating: Rating) -> RatingResponse:
        return RatingResponse(
            id=rating.id,
            place_id=rating.place_id,
            user_id=rating.user_id,
            rating=rating.rating,
            created_at=rating.created_at,
            updated_at=rating.updated_at,
            user_name=rating.user.name if rating.user else None,
        )
