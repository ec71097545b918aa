from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Subject(BaseModel):
    """A subject record. Fields beyond id/name are stored as given."""

    model_config = ConfigDict(extra="allow")

    id: str = Field(min_length=1)
    name: str | None = None

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class Theme(BaseModel):
    """A theme record referencing exactly one subject through ``subjectId``."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str | None = None
    slug: str | None = None
    name: str | None = None
    subject_id: str = Field(alias="subjectId")

    @model_validator(mode="after")
    def _require_identifier(self) -> Theme:
        if not self.id and not self.slug:
            raise ValueError("theme needs an 'id' or a 'slug'")
        return self

    @property
    def doc_id(self) -> str:
        return self.id or self.slug  # type: ignore[return-value]

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True)


class SubjectSummary(BaseModel):
    id: str
    name: str | None = None


class ThemeSummary(BaseModel):
    id: str
    name: str | None = None


class BatchResult(BaseModel):
    documents: int = 0
    batches: int = 0
