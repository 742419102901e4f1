"""Pydantic request/response schemas used by the API.

Schemas keep the camelCase wire names of the API separate from the
snake_case attributes of the table model.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def _wire(name: str, legacy: str, attribute: str):
    """Field accepting the camelCase name, the legacy lowercase name and the attribute name."""
    return Field(
        default=None,
        validation_alias=AliasChoices(name, legacy, attribute),
        serialization_alias=name,
    )


class WorkExperienceIn(BaseModel):
    """Submitted body for create and update.

    Every field is optional at this level: presence and date format are
    checked by `validate_work_experience` so that all problems are reported
    together. Values that are not strings are treated as absent.
    """
    model_config = ConfigDict(extra="ignore")

    company_name: Optional[str] = _wire("companyName", "companyname", "company_name")
    job_title: Optional[str] = _wire("jobTitle", "jobtitle", "job_title")
    location: Optional[str] = _wire("location", "location", "location")
    start_date: Optional[str] = _wire("startDate", "startdate", "start_date")
    end_date: Optional[str] = _wire("endDate", "enddate", "end_date")
    description: Optional[str] = _wire("description", "description", "description")

    @field_validator("*", mode="before")
    @classmethod
    def _only_text(cls, value: Any):
        return value if isinstance(value, str) else None

    def to_wire(self) -> dict:
        """Return the submitted values keyed by their camelCase names."""
        return self.model_dump(by_alias=True)

    def to_columns(self) -> dict:
        """Trimmed column values ready to store; blank `end_date` becomes `None`."""
        end_date = (self.end_date or "").strip()
        return {
            "company_name": self.company_name.strip(),
            "job_title": self.job_title.strip(),
            "location": self.location.strip(),
            "start_date": self.start_date.strip(),
            "end_date": end_date or None,
            "description": self.description.strip(),
        }


class WorkExperienceOut(BaseModel):
    """A stored row as returned to clients."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    company_name: str = Field(serialization_alias="companyName")
    job_title: str = Field(serialization_alias="jobTitle")
    location: str
    start_date: str = Field(serialization_alias="startDate")
    end_date: Optional[str] = Field(default=None, serialization_alias="endDate")
    description: str
    created_at: datetime = Field(serialization_alias="createdAt")

    @classmethod
    def dump(cls, row) -> dict:
        """Serialize a `models.WorkExperience` into a JSON-ready dict."""
        return cls.model_validate(row).model_dump(by_alias=True, mode="json")
