from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, Response, UploadFile, status

from gem_finder.api.v1.dependencies import get_current_user, get_uow
from gem_finder.domain.unit_of_work import UnitOfWork
from gem_finder.models.user_model import User
from gem_finder.schemas.place_schema import (
    MessageResponse,
    MyPostsResponse,
    PlaceDetailResponse,
    PlaceListResponse,
    PlaceMutationResponse,
    PlaceResponse,
    PlaceUpdate,
    RatedPlaceResponse,
    TopRatedResponse,
)
from gem_finder.schemas.rating_schema import (
    PlaceRatingsResponse,
    RatingCreate,
    RatingSubmitResponse,
)
from gem_finder.schemas.social_schema import (
    CommentPosted,
    CommentSchema,
    CommentThread,
    FavouriteSchema,
    ReportSchema,
)
from gem_finder.services.place_service import PlaceService
from gem_finder.services.rating_service import RatingService
from gem_finder.services.social_service import SocialService
from gem_finder.utils.logger import get_logger


logger = get_logger("place_router")


class PlaceRouter:
    """Class wrapper around APIRouter to keep things OO."""

    def __init__(self) -> None:
        self.router = APIRouter(prefix="/places", tags=["Places"])
        self._register_routes()

    # ---------------------------------------------------------------------- #
    # private
    # ---------------------------------------------------------------------- #
    def _register_routes(self) -> None:
        # Listing and search - static paths before the parameterized ones
        self.router.get("", response_model=List[RatedPlaceResponse])(self._list_ranked)
        self.router.get("/all", response_model=PlaceListResponse)(self._list_all)
        self.router.get("/search", response_model=PlaceListResponse)(self._search)
        self.router.get("/top-rated", response_model=TopRatedResponse)(self._top_rated)
        self.router.get("/my-places", response_model=List[PlaceResponse])(self._my_places)
        self.router.get("/my-posts", response_model=MyPostsResponse)(self._my_posts)
        self.router.get("/favorites", response_model=FavouriteSchema.Listing)(self._list_favourites)

        # Place CRUD
        self.router.post(
            "/add",
            response_model=PlaceMutationResponse,
            status_code=status.HTTP_201_CREATED,
        )(self._create_place)
        self.router.put("/edit/{place_id}", response_model=PlaceMutationResponse)(self._update_place)
        self.router.delete("/{place_id}", response_model=MessageResponse)(self._delete_place)
        self.router.delete("/delete/{place_id}", response_model=MessageResponse)(self._delete_place)
        self.router.get("/{place_id}/details", response_model=PlaceDetailResponse)(self._get_details)

        # Ratings - both paths share one upsert policy
        self.router.post("/{place_id}/rate", response_model=RatingSubmitResponse)(self._rate_place)
        self.router.post("/rate/{place_id}", response_model=RatingSubmitResponse)(self._rate_place)
        self.router.get("/{place_id}/ratings", response_model=PlaceRatingsResponse)(self._get_ratings)

        # Comments
        self.router.post(
            "/{place_id}/comment",
            response_model=CommentPosted,
            status_code=status.HTTP_201_CREATED,
        )(self._add_comment)
        self.router.get("/{place_id}/comments", response_model=CommentThread)(self._get_comments)

        # Favourites & reports
        self.router.post("/favorite/{place_id}", response_model=MessageResponse)(self._add_favourite)
        self.router.delete("/favorite/{place_id}", response_model=MessageResponse)(self._remove_favourite)
        self.router.post("/report/{place_id}", response_model=MessageResponse)(self._report_place)

    # ---------------------------------------------------------------------- #
    # listing
    # ---------------------------------------------------------------------- #
    async def _list_ranked(self, uow: UnitOfWork = Depends(get_uow)):
        logger.info("Listing places by average rating")
        return PlaceService(uow).list_ranked()

    async def _list_all(self, uow: UnitOfWork = Depends(get_uow)):
        logger.info("Listing all places")
        return PlaceListResponse(places=PlaceService(uow).list_all())

    async def _search(
        self,
        query: Optional[str] = Query(None, description="Substring of the title"),
        category: Optional[str] = Query(None, description="Exact category, any case"),
        uow: UnitOfWork = Depends(get_uow),
    ):
        logger.info(f"Searching places [query={query}, category={category}]")
        return PlaceListResponse(places=PlaceService(uow).search(query, category))

    async def _top_rated(self, uow: UnitOfWork = Depends(get_uow)):
        logger.info("Getting top rated places")
        return TopRatedResponse(top_places=PlaceService(uow).top_rated())

    async def _my_places(
        self,
        uow: UnitOfWork = Depends(get_uow),
        current_user: User = Depends(get_current_user),
    ):
        logger.info(f"Listing places of user {current_user.id}")
        return PlaceService(uow).list_for_user(current_user)

    async def _my_posts(
        self,
        uow: UnitOfWork = Depends(get_uow),
        current_user: User = Depends(get_current_user),
    ):
        logger.info(f"Listing posts of user {current_user.id}")
        return MyPostsResponse(my_places=PlaceService(uow).list_for_user(current_user))

    async def _get_details(self, place_id: int, uow: UnitOfWork = Depends(get_uow)):
        logger.info(f"Getting details for place {place_id}")
        return PlaceService(uow).get_detail(place_id)

    # ---------------------------------------------------------------------- #
    # place CRUD
    # ---------------------------------------------------------------------- #
    async def _create_place(
        self,
        title: str = Form(""),
        description: Optional[str] = Form(None),
        category: Optional[str] = Form(None),
        location: Optional[str] = Form(None),
        image: Optional[UploadFile] = File(None),
        uow: UnitOfWork = Depends(get_uow),
        current_user: User = Depends(get_current_user),
    ):
        logger.info(f"Creating place for user {current_user.id}")
        place = PlaceService(uow).create_place(
            title, description, category, location, image, current_user
        )
        return PlaceMutationResponse(message="Place posted", place=place)

    async def _update_place(
        self,
        place_id: int,
        payload: PlaceUpdate,
        uow: UnitOfWork = Depends(get_uow),
        current_user: User = Depends(get_current_user),
    ):
        logger.info(f"Updating place {place_id}")
        place = PlaceService(uow).update_place(place_id, payload, current_user)
        return PlaceMutationResponse(message="Place updated", place=place)

    async def _delete_place(
        self,
        place_id: int,
        uow: UnitOfWork = Depends(get_uow),
        current_user: User = Depends(get_current_user),
    ):
        logger.info(f"Deleting place {place_id}")
        PlaceService(uow).delete_place(place_id, current_user)
        return MessageResponse(message="Place deleted")

    # ---------------------------------------------------------------------- #
    # ratings
    # ---------------------------------------------------------------------- #
    async def _rate_place(
        self,
        place_id: int,
        payload: RatingCreate,
        response: Response,
        uow: UnitOfWork = Depends(get_uow),
        current_user: User = Depends(get_current_user),
    ):
        logger.info(f"Rating place {place_id} by user {current_user.id}")
        rating, created = RatingService(uow).rate_place(
            place_id, payload.rating, current_user
        )
        if created:
            response.status_code = status.HTTP_201_CREATED
            return RatingSubmitResponse(message="Rating submitted", rating=rating)
        return RatingSubmitResponse(message="Rating updated", rating=rating)

    async def _get_ratings(
        self,
        place_id: int,
        limit: int = Query(50, ge=1, le=100),
        uow: UnitOfWork = Depends(get_uow),
    ):
        logger.info(f"Getting ratings for place {place_id}")
        return RatingService(uow).get_place_ratings(place_id, limit)

    # ---------------------------------------------------------------------- #
    # comments
    # ---------------------------------------------------------------------- #
    async def _add_comment(
        self,
        place_id: int,
        payload: CommentSchema.Create,
        uow: UnitOfWork = Depends(get_uow),
        current_user: User = Depends(get_current_user),
    ):
        logger.info(f"Adding comment on place {place_id}")
        comment = SocialService(uow).add_comment(place_id, payload, current_user)
        return CommentPosted(message="Comment posted", comment=comment)

    async def _get_comments(self, place_id: int, uow: UnitOfWork = Depends(get_uow)):
        logger.info(f"Getting comments for place {place_id}")
        return CommentThread(comments=SocialService(uow).thread(place_id))

    # ---------------------------------------------------------------------- #
    # favourites & reports
    # ---------------------------------------------------------------------- #
    async def _add_favourite(
        self,
        place_id: int,
        uow: UnitOfWork = Depends(get_uow),
        current_user: User = Depends(get_current_user),
    ):
        logger.info(f"Favouriting place {place_id}")
        SocialService(uow).add_favourite(place_id, current_user)
        return MessageResponse(message="Place added to favorites")

    async def _remove_favourite(
        self,
        place_id: int,
        uow: UnitOfWork = Depends(get_uow),
        current_user: User = Depends(get_current_user),
    ):
        logger.info(f"Unfavouriting place {place_id}")
        SocialService(uow).remove_favourite(place_id, current_user)
        return MessageResponse(message="Place removed from favorites")

    async def _list_favourites(
        self,
        uow: UnitOfWork = Depends(get_uow),
        current_user: User = Depends(get_current_user),
    ):
        logger.info("Listing favourites")
        return FavouriteSchema.Listing(favorites=SocialService(uow).list_user_favs(current_user))

    async def _report_place(
        self,
        place_id: int,
        payload: ReportSchema.Create,
        uow: UnitOfWork = Depends(get_uow),
        current_user: User = Depends(get_current_user),
    ):
        logger.info(f"Reporting place {place_id}")
        SocialService(uow).report_place(place_id, payload.reason, current_user)
        return MessageResponse(message="Report submitted")


place_router = PlaceRouter().router
