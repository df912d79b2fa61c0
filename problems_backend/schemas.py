import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ProblemBase(BaseModel):
    """Fields shared by request and response bodies, camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str | None = Field(None, description="Problem title (required by the store).")
    description: str | None = Field(None, description="Problem statement or summary (up to 2000 chars).")
    difficulty: str | None = Field(None, description="Free-form difficulty, conventionally Easy/Medium/Hard.")
    platform: str | None = Field(None, description="Source platform label, e.g. LeetCode.")
    url: str | None = Field(None, description="Link to the problem.")
    last_reviewed: datetime.date | None = Field(None, description="Date of the last review (YYYY-MM-DD).")
    next_review: datetime.date | None = Field(None, description="Planned next review date (YYYY-MM-DD).")
    review_count: int | None = Field(None, description="Number of reviews so far; 0 when omitted on create.")
    notes: str | None = Field(None, description="Free-form notes (up to 2000 chars).")


class ProblemIn(ProblemBase):
    """
    Request body for create and update.

    On create, only the fields the caller sent are written. On update, every
    mutable field is overwritten and omitted fields become null.
    """


class ProblemOut(ProblemBase):
    """Schema returned for a problem."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int = Field(..., description="Database ID of the problem.")


MUTABLE_FIELDS = tuple(ProblemBase.model_fields)
