"""Recruitment statistics: candidate counts by sex and project against targets.

The raw aggregation is a single GROUP BY over candidates. Everything after
that is plain arithmetic over the returned rows, kept in module-level
functions so it can be exercised without a database.
"""

import logging
from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.exceptions import MissingProjectConfigurationError
from app.models.candidate import Candidate
from app.models.enums import EntityType, Sex
from app.schemas.statistics import (
    ProgressBarRecord,
    RawCountRow,
    StatisticsPayload,
    StudyProgression,
)
from app.services.project import ProjectService
from app.services.system_setting import SystemSettingService

logger = logging.getLogger(__name__)

OVERALL = "overall"
OVERALL_TITLE = "Overall Recruitment"
RECRUITMENT_TARGET_SETTING = "recruitmentTarget"


# ── Sums ──────────────────────────────────────────────────────────────

def sum_sex(rows: Sequence[RawCountRow], sex: Sex) -> int:
    """Candidates of the given sex across all projects."""
    return sum(row.count for row in rows if row.sex == sex)


def sum_sex_for_project(rows: Sequence[RawCountRow], sex: Sex, project_id: int) -> int:
    """Candidates of the given sex registered to one project."""
    return sum(
        row.count for row in rows
        if row.sex == sex and row.project_id == project_id
    )


def sum_project(rows: Sequence[RawCountRow], project_id: int) -> int:
    return sum(row.count for row in rows if row.project_id == project_id)


def percent(part: int, whole: int) -> int:
    """part / whole as a whole-number percentage, halves rounded away from zero."""
    value = Decimal(part) * 100 / Decimal(whole)
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def coerce_target(value) -> int | None:
    """Normalise a configured target. Missing, zero, or negative means no target."""
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        target = int(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring non-integer recruitment target %r", value)
        return None
    return target if target > 0 else None


# ── Progress bars ─────────────────────────────────────────────────────

def build_progress_bar(
    bucket: str | int,
    title: str,
    target,
    total_recruitment: int,
    rows: Sequence[RawCountRow],
) -> ProgressBarRecord:
    """Progress bar for ``"overall"`` or a single project ID.

    Without a usable target only the title and total are reported. When
    recruitment has passed the target, the full-width percentages are
    relative to the actual total instead.
    """
    target = coerce_target(target)
    if target is None:
        return ProgressBarRecord(title=title, total_recruitment=total_recruitment)

    if bucket == OVERALL:
        female_total = sum_sex(rows, Sex.FEMALE)
        male_total = sum_sex(rows, Sex.MALE)
    else:
        project_id = int(bucket)
        female_total = sum_sex_for_project(rows, Sex.FEMALE, project_id)
        male_total = sum_sex_for_project(rows, Sex.MALE, project_id)

    fields: dict = {
        "recruitment_target": target,
        "female_total": female_total,
        "female_percent": percent(female_total, target),
        "male_total": male_total,
        "male_percent": percent(male_total, target),
    }
    if total_recruitment > target:
        fields["surpassed_recruitment"] = True
        fields["female_full_percent"] = percent(female_total, total_recruitment)
        fields["male_full_percent"] = percent(male_total, total_recruitment)

    return ProgressBarRecord(title=title, total_recruitment=total_recruitment, **fields)


# ── Service ───────────────────────────────────────────────────────────

class RecruitmentStatisticsService:
    def __init__(
        self,
        db: AsyncSession,
        settings_service: SystemSettingService | None = None,
        project_service: ProjectService | None = None,
        excluded_site_ids: Sequence[int] | None = None,
    ):
        self.db = db
        self.settings_service = settings_service or SystemSettingService(db)
        self.project_service = project_service or ProjectService(db)
        if excluded_site_ids is None:
            excluded_site_ids = settings.RECRUITMENT_EXCLUDED_SITE_IDS
        self.excluded_site_ids = list(excluded_site_ids)

    async def fetch_raw_counts(self) -> list[RawCountRow]:
        """Active human candidates grouped by sex and registration project."""
        query = (
            select(
                func.count(Candidate.id).label("count"),
                Candidate.sex,
                Candidate.registration_project_id,
            )
            .where(
                Candidate.is_active == True,  # noqa: E712
                Candidate.is_deleted == False,  # noqa: E712
                Candidate.entity_type == EntityType.HUMAN,
            )
            .group_by(Candidate.sex, Candidate.registration_project_id)
        )
        if self.excluded_site_ids:
            query = query.where(
                Candidate.registration_site_id.not_in(self.excluded_site_ids)
            )
        result = await self.db.execute(query)
        return [
            RawCountRow(count=count, sex=sex, project_id=project_id)
            for count, sex, project_id in result.all()
        ]

    async def build_payload(self) -> StatisticsPayload:
        """Overall and per-project progress bars for both dashboard widgets."""
        overall_target = await self.settings_service.get_setting(RECRUITMENT_TARGET_SETTING)
        rows = await self.fetch_raw_counts()
        total_scans = sum(row.count for row in rows)

        recruitment: dict[str, ProgressBarRecord] = {
            OVERALL: build_progress_bar(
                OVERALL, OVERALL_TITLE, overall_target, total_scans, rows
            ),
        }

        for project_id in await self.project_service.list_project_ids():
            project = await self.project_service.get_project_settings(project_id)
            if project is None:
                logger.error("Project %s is listed but has no settings record", project_id)
                raise MissingProjectConfigurationError(project_id)
            recruitment[str(project_id)] = build_progress_bar(
                project_id,
                project.name,
                project.recruitment_target,
                sum_project(rows, project_id),
                rows,
            )

        logger.debug(
            "Recruitment statistics: %d candidates across %d projects",
            total_scans,
            len(recruitment) - 1,
        )
        return StatisticsPayload(
            recruitment=recruitment,
            study_progression=StudyProgression(
                total_scans=total_scans,
                recruitment=recruitment,
            ),
        )
