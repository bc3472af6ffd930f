"""
Client-side filtering and analytics aggregation.

The analytics screen only talks to a MetricsProvider. BaselineMetricsProvider
is a presentation-layer simulation (fixed baseline scaled by per-filter
multipliers); a provider backed by real response data can replace it without
touching the view.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Optional

import pandas as pd


SECTIONS = [("section-a", "Section A"), ("section-b", "Section B"), ("section-c", "Section C")]
COURSES = [
    ("cs101", "CS 101: Introduction to Programming"),
    ("cs201", "CS 201: Data Structures"),
    ("math101", "MATH 101: Calculus I"),
]
FACULTIES = [("prof-smith", "Prof. Smith"), ("prof-johnson", "Prof. Johnson"), ("prof-williams", "Prof. Williams")]

ALL_SECTIONS = "all-sections"
ALL_COURSES = "all-courses"
ALL_FACULTY = "all-faculty"


def is_unfiltered(value: Optional[str]) -> bool:
    return value is None or value == "" or value == "all" or value.startswith("all-")


@dataclass(frozen=True)
class FilterState:
    section: str = ALL_SECTIONS
    course: str = ALL_COURSES
    faculty: str = ALL_FACULTY
    search_term: str = ""
    date_from: Optional[date] = None
    date_to: Optional[date] = None

    @property
    def selectors(self) -> dict[str, str]:
        return {"section": self.section, "course": self.course, "faculty": self.faculty}

    def reset(self) -> "FilterState":
        return FilterState()


def matches(
    record: Any,
    selectors: Optional[dict[str, str]] = None,
    search_term: str = "",
    search_fields: Iterable[str] = ("title", "description"),
    date_field: Optional[str] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
) -> bool:
    """
    A record passes iff every active selector matches exactly (case-sensitive)
    and the search term is a case-insensitive substring of one search field.
    """
    for column, wanted in (selectors or {}).items():
        if is_unfiltered(wanted):
            continue
        if getattr(record, column, None) != wanted:
            return False

    term = (search_term or "").strip().lower()
    if term and not any(term in str(getattr(record, f, "") or "").lower() for f in search_fields):
        return False

    if date_field and (date_from or date_to):
        value = getattr(record, date_field, None)
        day = value.date() if isinstance(value, datetime) else value
        if day is None:
            return False
        if date_from and day < date_from:
            return False
        if date_to and day > date_to:
            return False
    return True


def filter_records(records: Iterable[Any], **kwargs) -> list:
    return [r for r in records if matches(r, **kwargs)]


# --- metrics ----------------------------------------------------------------


def _round_half_up(value: float, places: int = 0) -> Decimal:
    quantum = Decimal(1).scaleb(-places)
    return Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class EvaluationMetrics:
    total_responses: int
    average_rating: float
    response_rate: int
    positive_comments: int
    negative_comments: int
    neutral_comments: int

    def scaled(self, multiplier: float) -> "EvaluationMetrics":
        return EvaluationMetrics(
            total_responses=int(_round_half_up(self.total_responses * multiplier)),
            average_rating=float(_round_half_up(self.average_rating * multiplier, 1)),
            response_rate=int(_round_half_up(self.response_rate * multiplier)),
            positive_comments=int(_round_half_up(self.positive_comments * multiplier)),
            negative_comments=int(_round_half_up(self.negative_comments * multiplier)),
            neutral_comments=int(_round_half_up(self.neutral_comments * multiplier)),
        )

    def clamped(self) -> "EvaluationMetrics":
        return replace(self, average_rating=min(5.0, self.average_rating), response_rate=min(100, self.response_rate))


BASELINE_METRICS = EvaluationMetrics(
    total_responses=245,
    average_rating=4.2,
    response_rate=78,
    positive_comments=156,
    negative_comments=32,
    neutral_comments=57,
)

MULTIPLIERS: dict[str, dict[str, float]] = {
    "section": {"section-a": 0.9, "section-b": 1.1, "section-c": 1.2},
    "course": {"cs101": 0.95, "cs201": 1.05, "math101": 1.1},
    "faculty": {"prof-smith": 1.15, "prof-johnson": 0.9, "prof-williams": 1.0},
}


@dataclass(frozen=True)
class VisualizationData:
    rating_distribution: pd.DataFrame
    faculty_comparison: pd.DataFrame
    trend: pd.DataFrame
    feedback_categories: pd.DataFrame


class MetricsProvider(ABC):
    @abstractmethod
    def metrics(self, filters: FilterState) -> EvaluationMetrics:
        ...

    @abstractmethod
    def visualizations(self, filters: FilterState) -> VisualizationData:
        ...


@dataclass
class BaselineMetricsProvider(MetricsProvider):
    baseline: EvaluationMetrics = BASELINE_METRICS
    multipliers: dict = field(default_factory=lambda: MULTIPLIERS)

    def metrics(self, filters: FilterState) -> EvaluationMetrics:
        result = replace(self.baseline)
        for dimension in ("section", "course", "faculty"):
            value = filters.selectors[dimension]
            multiplier = self.multipliers.get(dimension, {}).get(value)
            if multiplier is not None:
                result = result.scaled(multiplier)
        # intermediate steps stay unclamped
        return result.clamped()

    def visualizations(self, filters: FilterState) -> VisualizationData:
        return VisualizationData(
            rating_distribution=pd.DataFrame(
                {"rating": [1, 2, 3, 4, 5], "count": [5, 12, 25, 38, 20]}
            ),
            faculty_comparison=pd.DataFrame(
                {
                    "name": ["Dr. Smith", "Prof. Johnson", "Dr. Williams", "Prof. Brown", "Dr. Davis"],
                    "average_rating": [4.2, 3.8, 4.5, 3.9, 4.1],
                }
            ),
            trend=pd.DataFrame(
                {
                    "month": ["Jan", "Feb", "Mar", "Apr", "May", "Jun"],
                    "average_rating": [3.8, 3.9, 4.0, 4.2, 4.3, 4.1],
                }
            ),
            feedback_categories=pd.DataFrame(
                {"category": ["Positive", "Balanced", "Critical"], "percentage": [65, 25, 10]}
            ),
        )
