from sqlalchemy import delete
from sqlalchemy.orm import Session

from gem_finder.domain.repositories.base_sqlalchemy import SQLAlchemyRepository
from gem_finder.models.report_model import Report


class ReportRepository(SQLAlchemyRepository[Report, int]):
    def __init__(self, db: Session):
        super().__init__(Report, db)

    def add_once(self, user_id: int, place_id: int, reason: str) -> bool:
        """Insert a report; False when this user already reported the place."""
        stmt = (
            self._insert()
            .values(user_id=user_id, place_id=place_id, reason=reason)
            .on_conflict_do_nothing(
                index_elements=["user_id", "place_id"]
            )
        )
        return self.db.connection().execute(stmt).rowcount == 1

    def delete_for_place(self, place_id: int) -> int:
        result = self.db.execute(delete(Report).where(Report.place_id == place_id))
        return result.rowcount
