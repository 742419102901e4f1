"""Business logic for the work-experience endpoints.

`WorkExperienceService` coordinates validation, the repository and the
shaping of response payloads. Each storage step is wrapped on its own so
a failure reports which stage broke (for example a row that was created
but could not be read back). Failures are raised as `ApiError`
subclasses for the HTTP layer to render.
"""

import logging
import re
from contextlib import contextmanager
from decimal import Decimal
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from . import models, repositories
from .errors import InvalidId, RecordNotFound, StorageFailure, ValidationFailed
from .schemas import WorkExperienceIn, WorkExperienceOut
from .utils.validation import validate_work_experience

logger = logging.getLogger("workexperience.service")

_DECIMAL_ID = re.compile(r"[+-]?(Infinity|(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?)", re.ASCII)
_PREFIXED_ID = re.compile(r"0([xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)", re.ASCII)
_MAX_ID = 2 ** 63 - 1


def parse_record_id(raw: str) -> Optional[int]:
    """Parse a path id.

    Numeric ids are decimals with an optional exponent, `0x`/`0o`/`0b`
    literals, `Infinity`, and a blank id (read as zero). Raises `InvalidId`
    for anything else. Returns `None` for numbers that cannot name a row
    (fractions, zero, negative, infinite or out of the 64-bit range).
    """
    text = raw.strip()
    if not text:
        return None
    if _PREFIXED_ID.fullmatch(text):
        value = Decimal(int(text, 0))
    elif _DECIMAL_ID.fullmatch(text):
        if text.lstrip("+-") == "Infinity":
            return None
        value = Decimal(text)
    else:
        raise InvalidId()
    if not 0 < value <= _MAX_ID or value != value.to_integral_value():
        return None
    return int(value)


class WorkExperienceService:
    """List, fetch, create, replace and delete work-experience records."""
    def __init__(self, session: Session):
        self.session = session
        self.repo = repositories.WorkExperienceRepository(session)

    @contextmanager
    def _stage(self, failure_message: str):
        """Translate database errors raised inside the block into a 500."""
        try:
            yield
        except SQLAlchemyError:
            logger.exception("Database error: %s", failure_message)
            self.repo.rollback()
            raise StorageFailure(failure_message)

    def _validated(self, payload: WorkExperienceIn) -> dict:
        errors = validate_work_experience(payload.to_wire())
        if errors:
            logger.info("Validation errors: %s", errors)
            raise ValidationFailed(errors)
        return payload.to_columns()

    def _existing(self, raw_id: str, failure_message: str) -> models.WorkExperience:
        record_id = parse_record_id(raw_id)
        record = None
        if record_id is not None:
            with self._stage(failure_message):
                record = self.repo.get(record_id)
        if record is None:
            raise RecordNotFound()
        return record

    def list_all(self) -> dict:
        logger.info("Fetching all work experiences")
        with self._stage("Failed to retrieve work experiences"):
            rows = self.repo.list_by_start_date()
            data = [WorkExperienceOut.dump(r) for r in rows]
        logger.info("Found %d work experiences", len(data))
        return {"success": True, "data": data, "count": len(data)}

    def get(self, raw_id: str) -> dict:
        record = self._existing(raw_id, "Failed to retrieve work experience")
        return {"success": True, "data": WorkExperienceOut.dump(record)}

    def create(self, payload: WorkExperienceIn) -> dict:
        """Validate and insert a record, then read it back from storage."""
        logger.info("Creating work experience for %s", payload.company_name)
        values = self._validated(payload)
        with self._stage("Failed to create work experience"):
            new_id = self.repo.add(models.WorkExperience(**values))
        logger.info("Created work experience with id %s", new_id)

        message = "Work experience created but could not be retrieved"
        with self._stage(message):
            created = self.repo.get(new_id)
        if created is None:
            logger.error("Work experience %s missing right after insert", new_id)
            raise StorageFailure(message)
        return {
            "success": True,
            "message": "Work experience created successfully",
            "data": WorkExperienceOut.dump(created),
        }

    def replace(self, raw_id: str, payload: WorkExperienceIn) -> dict:
        """Overwrite every field except `id` and `created_at`.

        The id format is checked before the body, and the body before the
        existence of the row.
        """
        record_id = parse_record_id(raw_id)
        values = self._validated(payload)
        record = self._existing(raw_id, "Failed to check work experience")
        with self._stage("Failed to update work experience"):
            self.repo.replace(record, values)
        logger.info("Updated work experience %s", record_id)

        message = "Work experience updated but could not be retrieved"
        with self._stage(message):
            updated = self.repo.get(record_id)
        if updated is None:
            raise StorageFailure(message)
        return {
            "success": True,
            "message": "Work experience updated successfully",
            "data": WorkExperienceOut.dump(updated),
        }

    def delete(self, raw_id: str) -> dict:
        """Delete a record and return it as it was before the delete."""
        record = self._existing(raw_id, "Failed to check work experience")
        snapshot = WorkExperienceOut.dump(record)
        with self._stage("Failed to delete work experience"):
            self.repo.delete(record)
        logger.info("Deleted work experience %s", snapshot["id"])
        return {
            "success": True,
            "message": "Work experience deleted successfully",
            "data": snapshot,
        }
