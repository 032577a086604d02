"""Parameter models for tools whose arguments constrain each other."""

from __future__ import annotations

from typing import Self

from pydantic import BaseModel, Field, model_validator

from sanity_mcp.models.release import ReleaseMetadata, ReleaseType


class CreateReleaseParams(BaseModel):
    title: str = Field(min_length=1)
    release_type: ReleaseType = ReleaseType.UNDECIDED
    description: str | None = None
    intended_publish_at: str | None = None
    release_id: str | None = None

    @model_validator(mode="after")
    def _scheduled_needs_date(self) -> Self:
        if self.release_type is ReleaseType.SCHEDULED and not self.intended_publish_at:
            raise ValueError("intendedPublishAt is required when releaseType is 'scheduled'")
        return self


class EditReleaseParams(BaseModel):
    release_id: str = Field(min_length=1)
    title: str | None = None
    description: str | None = None
    release_type: ReleaseType | None = None
    intended_publish_at: str | None = None

    @model_validator(mode="after")
    def _has_changes(self) -> Self:
        if not self.metadata().model_fields_set:
            raise ValueError(
                "Provide at least one of title, description, releaseType, intendedPublishAt"
            )
        return self

    def metadata(self) -> ReleaseMetadata:
        changes = self.model_dump(exclude={"release_id"}, exclude_none=True)
        return ReleaseMetadata(**changes)
