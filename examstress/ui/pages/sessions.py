from typing import Sequence

import dash_bootstrap_components as dbc
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
from dash import Input, Output, callback, dcc, html

from examstress import config
from examstress.app_state import registry
from examstress.engine.sessions import ExamSession


def sessions_frame(sessions: Sequence[ExamSession]) -> pd.DataFrame:
    """One row per session: identity, grade and per-feature averages."""
    rows = []
    for s in sessions:
        row = {
            "student": s.student,
            "exam": config.EXAM_LABELS.get(s.exam, s.exam),
            "grade": s.grade,
            "minutes": s.duration,
        }
        for feature in config.FEATURES:
            row[feature] = s.avg[feature]
        rows.append(row)
    return pd.DataFrame(rows, columns=["student", "exam", "grade", "minutes"] + list(config.FEATURES))


def _grade_scatter(df: pd.DataFrame, feature: str) -> go.Figure:
    data = df.dropna(subset=[feature]) if not df.empty else df
    if data.empty:
        fig = go.Figure()
        fig.add_annotation(text="No data yet", xref="paper", yref="paper", x=0.5, y=0.5, showarrow=False)
        fig.update_layout(template="plotly_dark", title=f"{feature} average vs grade", height=360)
        return fig
    fig = px.scatter(
        data,
        x=feature,
        y="grade",
        color="exam",
        hover_data=["student"],
        title=f"{feature} average vs grade",
        labels={feature: f"{feature} ({config.FEATURE_UNITS[feature]})", "grade": "Grade"},
    )
    fig.update_layout(
        template="plotly_dark",
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        margin=dict(l=10, r=10, t=40, b=10),
        height=360,
    )
    return fig


def _table(df: pd.DataFrame):
    if df.empty:
        return dbc.Alert("No sessions loaded.", color="secondary")
    shown = df.copy()
    for feature in config.FEATURES:
        shown[feature] = shown[feature].map(lambda v: "—" if pd.isna(v) else f"{v:.1f}")
    return dbc.Table.from_dataframe(shown, striped=True, bordered=False, hover=True, size="sm")


def layout() -> dbc.Container:
    df = sessions_frame(registry.session_store.get_sessions())
    return dbc.Container(
        [
            dbc.Card(
                [
                    dbc.CardHeader("Grade vs feature average"),
                    dbc.CardBody(
                        [
                            dcc.Dropdown(
                                id="sessions-feature",
                                options=[{"label": f, "value": f} for f in config.FEATURES],
                                value="HR",
                                clearable=False,
                            ),
                            dcc.Graph(id="sessions-scatter", config={"displayModeBar": False}),
                        ]
                    ),
                ],
                className="page-card",
            ),
            dbc.Card(
                [dbc.CardHeader("All exam sessions"), dbc.CardBody(_table(df), style={"overflowX": "auto"})],
                className="page-card",
            ),
        ],
        fluid=True,
        className="page-container",
    )


@callback(Output("sessions-scatter", "figure"), Input("sessions-feature", "value"))
def update_scatter(feature):
    df = sessions_frame(registry.session_store.get_sessions())
    return _grade_scatter(df, feature or "HR")
