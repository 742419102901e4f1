"""Repository encapsulating the work-experience table.

The repository is small and maps one method to one SQL statement.
It returns SQLModel objects and commits writes; errors from the
database propagate as `SQLAlchemyError` for the service to translate.
"""

from typing import List, Optional
from sqlmodel import Session, col, select
from . import models


class WorkExperienceRepository:
    """CRUD operations for `WorkExperience` rows."""
    def __init__(self, session: Session):
        self.session = session

    def list_by_start_date(self) -> List[models.WorkExperience]:
        """Return every row, most recent `start_date` first."""
        stmt = select(models.WorkExperience).order_by(col(models.WorkExperience.start_date).desc())
        return list(self.session.exec(stmt).all())

    def get(self, record_id: int) -> Optional[models.WorkExperience]:
        """Get a row by primary key, or `None` if it does not exist."""
        return self.session.get(models.WorkExperience, record_id)

    def add(self, record: models.WorkExperience) -> int:
        """Insert a new row and return its generated id."""
        self.session.add(record)
        self.session.flush()
        record_id = record.id
        self.session.commit()
        return record_id

    def replace(self, record: models.WorkExperience, values: dict) -> None:
        """Overwrite the given columns of an existing row."""
        for name, value in values.items():
            setattr(record, name, value)
        self.session.add(record)
        self.session.commit()

    def delete(self, record: models.WorkExperience) -> None:
        """Remove a row permanently."""
        self.session.delete(record)
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()
