"""SQLModel data models.

The service stores a single table, `workexperience`. Dates are kept as
`YYYY-MM-DD` text so that ordering by `start_date` descending is also
chronological.
"""

from typing import Optional
from sqlmodel import SQLModel, Field
from datetime import datetime, timezone


class WorkExperience(SQLModel, table=True):
    """One work-experience entry on a CV.

    Fields:
    - `id`: auto-incremented primary key, never reused after a delete
    - `start_date` / `end_date`: `YYYY-MM-DD` strings, `end_date` is
      `None` for an ongoing position
    - `created_at`: set once when the row is inserted
    """
    # AUTOINCREMENT keeps SQLite from handing out the id of a deleted last row again
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    company_name: str
    job_title: str
    location: str
    start_date: str = Field(index=True)
    end_date: Optional[str] = None
    description: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
