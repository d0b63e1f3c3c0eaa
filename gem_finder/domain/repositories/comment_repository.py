from typing import List

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, joinedload

from gem_finder.domain.repositories.base_sqlalchemy import SQLAlchemyRepository
from gem_finder.models.comment_model import Comment


class CommentRepository(SQLAlchemyRepository[Comment, int]):
    def __init__(self, db: Session):
        super().__init__(Comment, db)

    def for_place(self, place_id: int) -> List[Comment]:
        """Comments on a place with their authors, newest first."""
        stmt = (
            select(Comment)
            .options(joinedload(Comment.user))
            .where(Comment.place_id == place_id)
            .order_by(Comment.created_at.desc(), Comment.id.desc())
        )
        return list(self.db.scalars(stmt).all())

    def delete_for_place(self, place_id: int) -> int:
        result = self.db.execute(delete(Comment).where(Comment.place_id == place_id))
        return result.rowcount
