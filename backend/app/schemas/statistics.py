"""Pydantic schemas for the recruitment statistics widgets."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.models.enums import Sex


class RawCountRow(BaseModel):
    """One aggregated (sex, registration project) bucket of candidates."""

    count: int = Field(ge=0)
    sex: Sex | None = None
    project_id: int | None = None

    model_config = ConfigDict(frozen=True)


class ProjectSettings(BaseModel):
    name: str
    recruitment_target: int | None = None

    model_config = ConfigDict(from_attributes=True, frozen=True)


class _CamelModel(BaseModel):
    """Serialized with camelCase keys for the front-end widgets."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class ProgressBarRecord(_CamelModel):
    """Progress bar for one bucket. Optional fields are omitted when unset."""

    title: str
    total_recruitment: int
    recruitment_target: int | None = None
    female_total: int | None = None
    female_percent: int | None = None
    male_total: int | None = None
    male_percent: int | None = None
    surpassed_recruitment: bool | None = None
    female_full_percent: int | None = None
    male_full_percent: int | None = None


class StudyProgression(_CamelModel):
    total_scans: int
    recruitment: dict[str, ProgressBarRecord]


class StatisticsPayload(_CamelModel):
    recruitment: dict[str, ProgressBarRecord]
    study_progression: StudyProgression

    def to_json(self) -> dict:
        """Wire form: camelCase keys, absent optional fields dropped."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
