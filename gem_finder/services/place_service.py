from typing import List, Optional

from fastapi import UploadFile

from gem_finder.domain.exceptions import PlaceNotFound
from gem_finder.domain.services.place_domain_service import PlaceDomainService
from gem_finder.domain.unit_of_work import UnitOfWork
from gem_finder.models.place_model import Place
from gem_finder.models.user_model import User
from gem_finder.schemas.place_schema import (
    PlaceDetailResponse,
    PlaceResponse,
    PlaceUpdate,
    RatedPlaceResponse,
)
from gem_finder.utils.logger import get_logger
from gem_finder.utils.media_storage import LocalMediaStore, media_store


logger = get_logger("place_service")

TOP_RATED_LIMIT = 10


def serialize_place(place: Place, media: LocalMediaStore = media_store) -> PlaceResponse:
    """Place as returned over the wire, with one resolvable ``image_url``."""
    return PlaceResponse(
        id=place.id,
        user_id=place.user_id,
        title=place.title,
        description=place.description,
        category=place.category,
        location=place.location,
        image_url=media.public_url(place.image_path),
        created_at=place.created_at,
    )


class PlaceService:
    def __init__(self, uow: UnitOfWork, media: LocalMediaStore = media_store):
        self.uow = uow
        self.media = media
        self.domain_service = PlaceDomainService()

    # ---------------- create -----------------------------------------
    def create_place(
        self,
        title: str,
        description: Optional[str],
        category: Optional[str],
        location: str,
        image: Optional[UploadFile],
        current_user: User,
    ) -> PlaceResponse:
        title = self.domain_service.require_title(title)
        clean_location = self.domain_service.normalize_location(location)

        image_key = None
        if image is not None and image.filename:
            image_key = self.media.save_image(image)

        try:
            with self.uow:
                place = Place(
                    user_id=current_user.id,
                    title=title,
                    description=description,
                    category=category,
                    location=clean_location,
                    image_path=image_key,
                )
                self.uow.places.add(place)
                self.uow.places.flush()
                self.uow.commit()
        except Exception:
            self.media.delete(image_key)
            raise

        logger.info(f"Place {place.id} created by user {current_user.id}")
        return serialize_place(place, self.media)

    # ---------------- read -------------------------------------------
    def list_ranked(self) -> List[RatedPlaceResponse]:
        """Every place with its average rating, best first."""
        return [
            self._with_rating(place, round(avg, 1))
            for place, avg in self.uow.places.list_with_average()
        ]

    def top_rated(self, limit: int = TOP_RATED_LIMIT) -> List[RatedPlaceResponse]:
        return [
            self._with_rating(place, round(avg, 2))
            for place, avg in self.uow.places.list_with_average(limit=limit)
        ]

    def list_all(self) -> List[PlaceResponse]:
        return [serialize_place(p, self.media) for p in self.uow.places.list_newest()]

    def search(
        self, query: Optional[str] = None, category: Optional[str] = None
    ) -> List[PlaceResponse]:
        places = self.uow.places.search(
            query=(query or "").strip() or None,
            category=(category or "").strip() or None,
        )
        return [serialize_place(p, self.media) for p in places]

    def list_for_user(self, current_user: User) -> List[PlaceResponse]:
        return [
            serialize_place(p, self.media)
            for p in self.uow.places.list_by_user(current_user.id)
        ]

    def get_detail(self, place_id: int) -> PlaceDetailResponse:
        row = self.uow.places.get_with_stats(place_id)
        if row is None:
            raise PlaceNotFound(place_id)
        place, avg, count = row
        return PlaceDetailResponse(
            **serialize_place(place, self.media).model_dump(),
            avg_rating=round(avg, 2),
            rating_count=count,
            owner_name=place.owner.name if place.owner else None,
        )

    # ---------------- update / delete --------------------------------
    def update_place(
        self, place_id: int, data: PlaceUpdate, current_user: User
    ) -> PlaceResponse:
        with self.uow:
            place = self._get_or_raise(place_id)
            self.domain_service.ensure_can_edit(current_user, place)

            changes = data.model_dump(exclude_unset=True)
            if "title" in changes:
                changes["title"] = self.domain_service.require_title(changes["title"])
            if "location" in changes:
                changes["location"] = self.domain_service.normalize_location(
                    changes["location"]
                )
            for field, value in changes.items():
                setattr(place, field, value)
            self.uow.commit()

        logger.info(f"Place {place_id} updated by user {current_user.id}: {sorted(changes)}")
        return serialize_place(place, self.media)

    def delete_place(self, place_id: int, current_user: User) -> None:
        """Delete a place after its dependent rows, in one transaction."""
        with self.uow:
            place = self._get_or_raise(place_id)
            self.domain_service.ensure_can_delete(current_user, place)

            ratings = self.uow.ratings.delete_for_place(place_id)
            comments = self.uow.comments.delete_for_place(place_id)
            favorites = self.uow.favorites.delete_for_place(place_id)
            reports = self.uow.reports.delete_for_place(place_id)
            image_key = place.image_path
            self.uow.places.delete(place)
            self.uow.commit()

        self.media.delete(image_key)
        logger.info(
            f"Place {place_id} deleted by user {current_user.id} "
            f"(ratings={ratings}, comments={comments}, favorites={favorites}, reports={reports})"
        )

    # ---------------- helpers ----------------------------------------
    def _get_or_raise(self, place_id: int) -> Place:
        place = self.uow.places.get(place_id)
        if place is None:
            logger.warning(f"Place {place_id} not found")
            raise PlaceNotFound(place_id)
        return place

    def _with_rating(self, place: Place, avg: float) -> RatedPlaceResponse:
        return RatedPlaceResponse(
            **serialize_place(place, self.media).model_dump(), avg_rating=avg
        )
