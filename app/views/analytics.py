from __future__ import annotations

import streamlit as st

from components.metrics import bar_chart, line_chart, overview_kpis, pie_chart, render_kpi_row
from components.narrative import render_callout, render_page_intro
from config import AppConfig
from data.analytics import (
    ALL_COURSES,
    ALL_FACULTY,
    ALL_SECTIONS,
    COURSES,
    FACULTIES,
    SECTIONS,
    BaselineMetricsProvider,
    FilterState,
    MetricsProvider,
)
from data.export import CSV_FILENAME, metrics_to_csv
from data.store import EntityStore


REPORTS = [
    ("Faculty Performance Report", "Comprehensive evaluation results by faculty"),
    ("Course Comparison Report", "Compare evaluation results across courses"),
    ("Trend Analysis Report", "Evaluation trends over multiple periods"),
]


def get_metrics_provider() -> MetricsProvider:
    if "metrics_provider" not in st.session_state:
        st.session_state["metrics_provider"] = BaselineMetricsProvider()
    return st.session_state["metrics_provider"]


def _options(all_value: str, all_label: str, pairs: list[tuple[str, str]]) -> tuple[list[str], dict[str, str]]:
    labels = {all_value: all_label, **dict(pairs)}
    return list(labels), labels


def _render_filters() -> FilterState:
    with st.container(border=True):
        st.markdown("**Filters**")
        c1, c2, c3 = st.columns(3)
        values, labels = _options(ALL_SECTIONS, "All Sections", SECTIONS)
        section = c1.selectbox("Section", values, format_func=labels.get, key="flt_section")
        values, labels = _options(ALL_COURSES, "All Courses", COURSES)
        course = c2.selectbox("Course", values, format_func=labels.get, key="flt_course")
        values, labels = _options(ALL_FACULTY, "All Faculty", FACULTIES)
        faculty = c3.selectbox("Faculty", values, format_func=labels.get, key="flt_faculty")

        c4, c5, c6 = st.columns([2, 2, 1])
        search = c4.text_input("Search", placeholder="Search comments, courses...", key="flt_search")
        date_range = c5.date_input("Date range", value=(), key="flt_dates")
        if c6.button("Reset", key="flt_reset", use_container_width=True):
            for k in ("flt_section", "flt_course", "flt_faculty", "flt_search", "flt_dates"):
                st.session_state.pop(k, None)
            st.rerun()

    date_from = date_range[0] if len(date_range) > 0 else None
    date_to = date_range[1] if len(date_range) > 1 else None
    return FilterState(section, course, faculty, search, date_from, date_to)


def render(cfg: AppConfig, store: EntityStore) -> None:
    provider = get_metrics_provider()

    c1, c2 = st.columns([4, 1])
    c1.title("Analytics Dashboard")

    render_page_intro(
        "Evaluation results",
        "Narrow results by section, course and faculty. Figures are simulated from a fixed baseline until live aggregation is connected.",
    )

    filters = _render_filters()
    metrics = provider.metrics(filters)
    csv = metrics_to_csv(metrics)

    c2.download_button(
        "📥 Export to Excel",
        data=csv,
        file_name=CSV_FILENAME,
        mime="text/csv",
        use_container_width=True,
    )

    st.subheader("Results overview")
    render_kpi_row(overview_kpis(metrics, baseline=provider.metrics(FilterState())))

    st.divider()
    viz = provider.visualizations(filters)
    c1, c2 = st.columns(2)
    with c1:
        bar_chart(viz.rating_distribution, x="rating", y="count", title="Rating distribution")
    with c2:
        bar_chart(viz.faculty_comparison, x="name", y="average_rating", title="Faculty comparison", y_range=(0, 5))
    c3, c4 = st.columns(2)
    with c3:
        line_chart(viz.trend, x="month", y="average_rating", title="Average rating trend", y_range=(0, 5))
    with c4:
        pie_chart(viz.feedback_categories, names="category", values="percentage", title="Feedback categories")

    render_callout(
        "How to read this",
        "Ratings are on a 1 to 5 scale. The response rate is capped at 100% and the average rating at 5.",
    )

    st.subheader("Download reports")
    cols = st.columns(len(REPORTS))
    for col, (title, body) in zip(cols, REPORTS):
        with col, st.container(border=True):
            st.markdown(f"**{title}**")
            st.caption(body)
            st.download_button(
                "Download",
                data=csv,
                file_name=CSV_FILENAME,
                mime="text/csv",
                key=f"report_{title}",
                use_container_width=True,
            )
