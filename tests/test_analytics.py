from __future__ import annotations

from datetime import date, datetime

import pytest

from data.analytics import (
    BASELINE_METRICS,
    BaselineMetricsProvider,
    EvaluationMetrics,
    FilterState,
    filter_records,
    matches,
)
from data.export import CSV_FILENAME, metrics_to_csv
from data.models import Form


@pytest.fixture
def provider() -> BaselineMetricsProvider:
    return BaselineMetricsProvider()


def test_unfiltered_returns_baseline(provider):
    assert provider.metrics(FilterState()) == BASELINE_METRICS


def test_multipliers_apply_in_turn(provider):
    m = provider.metrics(FilterState(section="section-a", course="cs101"))
    assert m.total_responses == 210


def test_single_filter(provider):
    m = provider.metrics(FilterState(section="section-b"))
    assert m.total_responses == 270  # 245 * 1.1 = 269.5
    assert m.average_rating == 4.6


def test_rating_and_rate_are_clamped(provider):
    m = provider.metrics(FilterState(section="section-c", faculty="prof-smith"))
    assert m.average_rating == 5.0
    assert m.response_rate == 100


def test_clamp_applies_after_the_last_multiplier(provider):
    # after math101 the rating is 5.5 and the rate 103; prof-johnson scales those, not the maxima
    m = provider.metrics(FilterState(section="section-c", course="math101", faculty="prof-johnson"))
    assert m.average_rating == 5.0
    assert m.response_rate == 93


def test_unknown_option_is_ignored(provider):
    assert provider.metrics(FilterState(course="bio999")) == BASELINE_METRICS


def test_visualizations_have_expected_shape(provider):
    viz = provider.visualizations(FilterState())
    assert list(viz.rating_distribution["rating"]) == [1, 2, 3, 4, 5]
    assert len(viz.trend) == 6
    assert viz.feedback_categories["percentage"].sum() == 100


def test_csv_export():
    assert CSV_FILENAME == "evaluation_data.csv"
    assert metrics_to_csv(BASELINE_METRICS) == (
        '"Total Responses","Average Rating","Response Rate","Positive Comments","Negative Comments","Neutral Comments"\n'
        "245,4.2,78%,156,32,57"
    )


def test_csv_prints_whole_ratings_without_decimals():
    m = EvaluationMetrics(210, 4.0, 75, 140, 25, 45)
    assert metrics_to_csv(m).splitlines()[1] == "210,4,75%,140,25,45"


def _form(**overrides) -> Form:
    values = dict(
        id="1",
        title="End of Semester Evaluation",
        questionnaire="Standard Faculty Evaluation",
        section="CS101-A",
        status="active",
        responses=24,
        created_at=datetime(2023, 9, 1),
        expires_at=datetime(2023, 12, 15),
    )
    values.update(overrides)
    return Form(**values)


def test_selectors_match_exactly():
    form = _form()
    assert matches(form, {"section": "CS101-A"})
    assert not matches(form, {"section": "cs101-a"})
    assert matches(form, {"section": "all-sections", "status": "all"})


def test_search_is_case_insensitive_substring():
    form = _form()
    assert matches(form, search_term="SEMESTER", search_fields=("title",))
    assert matches(form, search_term="  faculty ", search_fields=("title", "questionnaire"))
    assert not matches(form, search_term="midterm", search_fields=("title",))


def test_date_range_is_inclusive():
    form = _form()
    kwargs = dict(date_field="created_at")
    assert matches(form, date_from=date(2023, 9, 1), date_to=date(2023, 9, 1), **kwargs)
    assert not matches(form, date_from=date(2023, 9, 2), **kwargs)
    assert not matches(form, date_to=date(2023, 8, 31), **kwargs)


def test_filter_records():
    forms = [_form(id="1"), _form(id="2", status="inactive")]
    assert [f.id for f in filter_records(forms, selectors={"status": "inactive"})] == ["2"]
