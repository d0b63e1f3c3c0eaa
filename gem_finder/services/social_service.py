from typing import List

from gem_finder.domain.exceptions import AlreadyReported, PlaceNotFound
from gem_finder.domain.services.place_domain_service import PlaceDomainService
from gem_finder.domain.unit_of_work import UnitOfWork
from gem_finder.models.comment_model import Comment
from gem_finder.models.user_model import User
from gem_finder.schemas.place_schema import PlaceResponse
from gem_finder.schemas.social_schema import CommentSchema
from gem_finder.services.place_service import serialize_place
from gem_finder.utils.logger import get_logger
from gem_finder.utils.media_storage import LocalMediaStore, media_store


logger = get_logger("social_service")


class SocialService:
    def __init__(self, uow: UnitOfWork, media: LocalMediaStore = media_store):
        self.uow = uow
        self.media = media

    def _ensure_place(self, place_id: int) -> None:
        if self.uow.places.get(place_id) is None:
            raise PlaceNotFound(place_id)

    # ---------------- Comments ---------------------------------------
    def add_comment(
        self, place_id: int, payload: CommentSchema.Create, user: User
    ) -> CommentSchema.Out:
        content = PlaceDomainService.require_text("content", payload.content)
        with self.uow:
            self._ensure_place(place_id)
            com = Comment(user_id=user.id, place_id=place_id, content=content)
            self.uow.comments.add(com)
            self.uow.comments.flush()
            self.uow.commit()
        logger.info(f"Comment {com.id} posted on place {place_id} by user {user.id}")
        return self._comment_out(com, user.name)

    def thread(self, place_id: int) -> List[CommentSchema.Out]:
        return [
            self._comment_out(c, c.user.name if c.user else None)
            for c in self.uow.comments.for_place(place_id)
        ]

    @staticmethod
    def _comment_out(comment: Comment, user_name: str | None) -> CommentSchema.Out:
        return CommentSchema.Out(
            id=comment.id,
            place_id=comment.place_id,
            user_id=comment.user_id,
            content=comment.content,
            created_at=comment.created_at,
            user_name=user_name,
        )

    # ---------------- Favourites -------------------------------------
    def add_favourite(self, place_id: int, user: User) -> bool:
        """Favorite a place; a repeat is a no-op. True when newly added."""
        with self.uow:
            self._ensure_place(place_id)
            added = self.uow.favorites.add_if_missing(user.id, place_id)
            self.uow.commit()
        logger.info(f"Favourite place {place_id} for user {user.id} (new={added})")
        return added

    def remove_favourite(self, place_id: int, user: User) -> bool:
        with self.uow:
            removed = self.uow.favorites.remove(user.id, place_id)
            self.uow.commit()
        logger.info(f"Unfavourite place {place_id} for user {user.id} (removed={removed})")
        return removed

    def list_user_favs(self, user: User) -> List[PlaceResponse]:
        return [serialize_place(p, self.media) for p in self.uow.favorites.places_for_user(user.id)]

    # ---------------- Reports ----------------------------------------
    def report_place(self, place_id: int, reason: str | None, user: User) -> None:
        reason = PlaceDomainService.require_text("reason", reason)
        with self.uow:
            self._ensure_place(place_id)
            if not self.uow.reports.add_once(user.id, place_id, reason):
                logger.warning(f"User {user.id} already reported place {place_id}")
                raise AlreadyReported()
            self.uow.commit()
        logger.info(f"Place {place_id} reported by user {user.id}")
