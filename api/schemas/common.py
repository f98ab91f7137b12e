"""
Common API Schemas - Base models, paging envelope and error body

Request bodies reject unknown keys; update bodies must set at least one field.
"""

from datetime import date
from typing import Annotated, Generic, List, Optional, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, model_validator

from music_commerce.constants import MIN_RELEASE_YEAR, OBJECT_ID_PATTERN

ObjectId = Annotated[str, Field(pattern=OBJECT_ID_PATTERN, description="24 hex character id")]

T = TypeVar("T")


def _check_year(v: int) -> int:
    """Years run from MIN_RELEASE_YEAR to the current year"""
    current = date.today().year
    if v < MIN_RELEASE_YEAR or v > current:
        raise ValueError(f"Year must be between {MIN_RELEASE_YEAR} and {current}")
    return v


Year = Annotated[int, AfterValidator(_check_year)]


class CreateModel(BaseModel):
    """Body of a create request"""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


class UpdateModel(BaseModel):
    """Body of a partial update; every field optional, at least one set"""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    @model_validator(mode="after")
    def check_not_empty(self):
        if not any(getattr(self, name) is not None for name in self.model_fields_set):
            raise ValueError("At least one field must be provided")
        return self


class StoredOut(BaseModel):
    """Fields every stored record carries"""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., description="Record id")
    created_at: Optional[str] = Field(None, description="Creation time (ISO 8601, UTC)")
    updated_at: Optional[str] = Field(None, description="Last update time (ISO 8601, UTC)")


class Page(BaseModel, Generic[T]):
    """One page of a list query"""

    results: List[T] = Field(default_factory=list)
    page: int = Field(..., description="Current page (1-based)")
    limit: int = Field(..., description="Page size")
    total_pages: int = Field(..., description="Number of pages for this query")
    total_results: int = Field(..., description="Number of matching records")


class ErrorResponse(BaseModel):
    """Body of every error response"""

    code: int = Field(..., description="HTTP status code")
    message: str = Field(..., description="Human readable message")
