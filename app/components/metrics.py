from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from config import THEME
from data.analytics import EvaluationMetrics


@dataclass(frozen=True)
class Kpi:
    label: str
    value: str
    delta: Optional[str] = None
    help: Optional[str] = None


def render_kpi_row(kpis: list[Kpi]) -> None:
    cols = st.columns(len(kpis))
    for c, k in zip(cols, kpis):
        with c:
            delta_html = ""
            if k.delta:
                cls = "positive" if str(k.delta).strip().startswith(("+", "▲")) else "negative" if str(k.delta).strip().startswith(("-", "▼")) else ""
                delta_html = f'<div class="metric-delta {cls}">{k.delta}</div>'

            st.markdown(
                f"""
<div class="metric-card" title="{k.help or ''}">
  <div class="metric-label">{k.label}</div>
  <div class="metric-value">{k.value}</div>
  {delta_html}
</div>
                """,
                unsafe_allow_html=True,
            )


def overview_kpis(m: EvaluationMetrics, baseline: Optional[EvaluationMetrics] = None) -> list[Kpi]:
    def delta(cur, base) -> Optional[str]:
        if baseline is None or cur == base:
            return None
        return f"{'+' if cur > base else '-'}{abs(cur - base):g} vs all"

    b = baseline
    total_comments = m.positive_comments + m.negative_comments + m.neutral_comments
    positive_share = m.positive_comments / total_comments if total_comments else 0.0
    return [
        Kpi("Total responses", f"{m.total_responses:,}", delta(m.total_responses, b.total_responses) if b else None),
        Kpi("Average rating", f"{m.average_rating:.1f} / 5", delta(m.average_rating, b.average_rating) if b else None),
        Kpi("Response rate", f"{m.response_rate}%", delta(m.response_rate, b.response_rate) if b else None),
        Kpi("Positive comments", f"{m.positive_comments:,}", help=f"{positive_share:.0%} of all comments"),
        Kpi("Negative comments", f"{m.negative_comments:,}"),
        Kpi("Neutral comments", f"{m.neutral_comments:,}"),
    ]


def create_plotly_theme() -> dict:
    return {
        "font_color": THEME["text_primary"],
        "paper_bgcolor": THEME["bg_card"],
        "plot_bgcolor": THEME["bg_card"],
        "colorway": [
            THEME["accent_primary"],
            THEME["navy_900"],
            THEME["accent_secondary"],
            THEME["navy_800"],
            "#6B7280",
            "#9CA3AF",
        ],
        "gridcolor": THEME["grid"],
        "axis_linecolor": THEME["border_color"],
        "title_font": {"color": THEME["navy_900"], "size": 16},
    }


def apply_plotly_theme(fig: go.Figure, x_title: str, y_title: str) -> go.Figure:
    theme = create_plotly_theme()
    fig.update_layout(
        margin=dict(l=10, r=10, t=44, b=10),
        font=dict(color=theme["font_color"]),
        paper_bgcolor=theme["paper_bgcolor"],
        plot_bgcolor=theme["plot_bgcolor"],
        colorway=theme["colorway"],
        title_font=theme["title_font"],
        showlegend=False,
    )
    fig.update_xaxes(title_text=x_title, gridcolor=theme["gridcolor"], zeroline=False, linecolor=theme["axis_linecolor"])
    fig.update_yaxes(title_text=y_title, gridcolor=theme["gridcolor"], zeroline=False, linecolor=theme["axis_linecolor"])
    return fig


def bar_chart(df: pd.DataFrame, x: str, y: str, title: str = "", y_range: Optional[tuple] = None) -> None:
    fig = px.bar(df, x=x, y=y, title=title)
    fig = apply_plotly_theme(fig, x_title=x.replace("_", " "), y_title=y.replace("_", " "))
    if y_range:
        fig.update_yaxes(range=list(y_range))
    st.plotly_chart(fig, use_container_width=True)


def line_chart(df: pd.DataFrame, x: str, y: str, title: str = "", y_range: Optional[tuple] = None) -> None:
    fig = px.line(df, x=x, y=y, title=title, markers=True)
    fig = apply_plotly_theme(fig, x_title=x.replace("_", " "), y_title=y.replace("_", " "))
    fig.update_traces(line=dict(width=2))
    if y_range:
        fig.update_yaxes(range=list(y_range))
    st.plotly_chart(fig, use_container_width=True)


def pie_chart(df: pd.DataFrame, names: str, values: str, title: str = "") -> None:
    fig = px.pie(df, names=names, values=values, title=title, hole=0.45)
    fig = apply_plotly_theme(fig, x_title="", y_title="")
    fig.update_layout(showlegend=True)
    st.plotly_chart(fig, use_container_width=True)
