"""Unit tests for the sex/project sums and progress-bar records."""
import pytest

from app.models.enums import Sex
from app.schemas.statistics import RawCountRow
from app.services.recruitment import (
    OVERALL,
    build_progress_bar,
    coerce_target,
    percent,
    sum_project,
    sum_sex,
    sum_sex_for_project,
)

ROWS = [
    RawCountRow(count=10, sex=Sex.FEMALE, project_id=1),
    RawCountRow(count=5, sex=Sex.MALE, project_id=1),
    RawCountRow(count=3, sex=Sex.FEMALE, project_id=2),
]


def test_sum_sex_across_projects():
    assert sum_sex(ROWS, Sex.FEMALE) == 13
    assert sum_sex(ROWS, Sex.MALE) == 5
    assert sum_sex(ROWS, Sex.OTHER) == 0


def test_sum_sex_for_project():
    assert sum_sex_for_project(ROWS, Sex.FEMALE, 1) == 10
    assert sum_sex_for_project(ROWS, Sex.FEMALE, 2) == 3
    assert sum_sex_for_project(ROWS, Sex.MALE, 2) == 0


def test_sum_project():
    assert sum_project(ROWS, 1) == 15
    assert sum_project(ROWS, 2) == 3
    assert sum_project(ROWS, 99) == 0


def test_empty_rows_sum_to_zero():
    assert sum_sex([], Sex.FEMALE) == 0
    assert sum_sex_for_project([], Sex.MALE, 1) == 0


def test_percent_rounds_half_away_from_zero():
    assert percent(1, 8) == 13  # 12.5
    assert percent(5, 8) == 63  # 62.5
    assert percent(10, 15) == 67
    assert percent(5, 15) == 33
    assert percent(0, 10) == 0


@pytest.mark.parametrize("value", [None, "", 0, "0", -5, "-5", "abc", True])
def test_coerce_target_without_usable_value(value):
    assert coerce_target(value) is None


@pytest.mark.parametrize("value,expected", [(20, 20), ("20", 20), (1, 1)])
def test_coerce_target_positive(value, expected):
    assert coerce_target(value) == expected


def test_no_target_reports_title_and_total_only():
    record = build_progress_bar(2, "Rye", None, 3, ROWS)
    assert record.model_dump(by_alias=True, exclude_none=True) == {
        "title": "Rye",
        "totalRecruitment": 3,
    }


def test_negative_target_treated_as_no_target():
    record = build_progress_bar(OVERALL, "Overall Recruitment", -10, 18, ROWS)
    assert record.recruitment_target is None
    assert record.female_total is None


def test_overall_below_target():
    record = build_progress_bar(OVERALL, "Overall Recruitment", 20, 18, ROWS)
    assert record.recruitment_target == 20
    assert record.female_total == 13
    assert record.female_percent == 65
    assert record.male_total == 5
    assert record.male_percent == 25
    assert record.surpassed_recruitment is None
    assert record.female_full_percent is None


def test_project_above_target_uses_full_percentages():
    record = build_progress_bar(1, "Pumpernickel", 10, 15, ROWS)
    assert record.female_total == 10
    assert record.female_percent == 100
    assert record.male_total == 5
    assert record.male_percent == 50
    assert record.surpassed_recruitment is True
    assert record.female_full_percent == 67
    assert record.male_full_percent == 33


def test_project_bucket_is_coerced_to_int():
    record = build_progress_bar("1", "Pumpernickel", 10, 15, ROWS)
    assert record.female_total == 10


def test_target_met_exactly_is_not_surpassed():
    record = build_progress_bar(1, "Pumpernickel", 15, 15, ROWS)
    assert record.surpassed_recruitment is None
    assert record.female_percent == 67


def test_empty_rows_with_target_gives_zero_percent():
    record = build_progress_bar(OVERALL, "Overall Recruitment", 10, 0, [])
    assert record.female_total == 0
    assert record.female_percent == 0
    assert record.male_total == 0
    assert record.male_percent == 0
    assert record.surpassed_recruitment is None
