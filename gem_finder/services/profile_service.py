from gem_finder.domain.unit_of_work import UnitOfWork
from gem_finder.models.user_model import User
from gem_finder.schemas.profile_schema import (
    ProfilePlace,
    ProfileResponse,
    ProfileStats,
    ProfileUser,
)
from gem_finder.utils.media_storage import LocalMediaStore, media_store


# Each star received on one of your places is worth this many coins
COINS_PER_STAR = 10


class ProfileService:
    def __init__(self, uow: UnitOfWork, media: LocalMediaStore = media_store):
        self.uow = uow
        self.media = media

    def get_profile(self, user: User) -> ProfileResponse:
        places = self.uow.places.list_by_user(user.id)
        stars = self.uow.ratings.sum_received_by_owner(user.id)
        return ProfileResponse(
            user=ProfileUser.model_validate(user),
            stats=ProfileStats(
                places_posted=self.uow.places.count_by_user(user.id),
                coins_earned=stars * COINS_PER_STAR,
            ),
            places=[
                ProfilePlace(
                    id=p.id,
                    title=p.title,
                    description=p.description,
                    image_url=self.media.public_url(p.image_path),
                    created_at=p.created_at,
                )
                for p in places
            ],
        )
