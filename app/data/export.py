from __future__ import annotations

from urllib.parse import urlencode

from data.analytics import EvaluationMetrics
from data.models import Form


CSV_FILENAME = "evaluation_data.csv"
CSV_HEADERS = [
    "Total Responses",
    "Average Rating",
    "Response Rate",
    "Positive Comments",
    "Negative Comments",
    "Neutral Comments",
]

SHARE_PATH = "/forms/response/{id}"


def metrics_to_csv(m: EvaluationMetrics) -> str:
    """Two lines: quoted header row, then the values (response rate as a percentage)."""
    header = ",".join(f'"{h}"' for h in CSV_HEADERS)
    values = ",".join(
        str(v)
        for v in (
            m.total_responses,
            f"{m.average_rating:g}",
            f"{m.response_rate}%",
            m.positive_comments,
            m.negative_comments,
            m.neutral_comments,
        )
    )
    return f"{header}\n{values}"


def build_share_link(base_url: str, form: Form) -> str:
    return f"{base_url.rstrip('/')}{SHARE_PATH.format(id=form.id)}?{urlencode({'section': form.section})}"
