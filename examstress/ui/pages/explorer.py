from typing import Dict, Optional, Sequence

import dash_bootstrap_components as dbc
import plotly.graph_objects as go
from dash import Input, Output, callback, ctx, dcc, html

from examstress import config
from examstress.app_state import registry
from examstress.engine.matcher import MatchResult, active_features_for, resolve
from examstress.engine.sessions import ExamSession

SLIDER_IDS: Dict[str, str] = {f: f"explorer-{f.lower()}-slider" for f in config.FEATURES}
FEATURE_BY_SLIDER: Dict[str, str] = {v: k for k, v in SLIDER_IDS.items()}

SLIDER_LABELS = {
    "HR": "Average heart rate",
    "EDA": "Average EDA",
    "BVP": "Average BVP",
    "TEMP": "Average skin temperature",
    config.STRESS: "Average stress",
}


def _control_feature(triggered_id) -> Optional[str]:
    if isinstance(triggered_id, str):
        return FEATURE_BY_SLIDER.get(triggered_id)
    return None


def _blank_fig(title: str, message: str = "No data yet") -> go.Figure:
    fig = go.Figure()
    fig.update_layout(
        template="plotly_dark",
        title=title,
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        margin=dict(l=10, r=10, t=40, b=10),
        height=420,
    )
    fig.add_annotation(text=message, xref="paper", yref="paper", x=0.5, y=0.5, showarrow=False)
    return fig


def _make_series_fig(session: ExamSession) -> go.Figure:
    title = f"Signals during exam · {session.label}"
    fig = go.Figure()
    for feature in config.FEATURES:
        series = session.time_series[feature]
        if not len(series):
            continue
        fig.add_trace(
            go.Scatter(
                x=series.minutes(),
                y=series.values(),
                mode="lines",
                name=f"{feature} ({config.FEATURE_UNITS[feature]})",
                line=dict(color=config.FEATURE_COLORS[feature], width=2),
                connectgaps=False,
            )
        )
    if not fig.data:
        return _blank_fig(title, "No readings recorded for this session")
    fig.update_layout(
        template="plotly_dark",
        title=title,
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        margin=dict(l=10, r=10, t=40, b=10),
        height=420,
        xaxis=dict(title="Minute", range=[0, session.duration]),
        yaxis=dict(title="Scaled value", rangemode="tozero"),
        legend=dict(orientation="h", yanchor="bottom", y=-0.3),
    )
    return fig


def _fmt(value: Optional[float]) -> str:
    return "—" if value is None else f"{value:.1f}"


def _summary(result: Optional[MatchResult], active: Sequence[str]):
    dims = ", ".join(f for f in config.FEATURES if f in set(active))
    if result is None:
        return dbc.Alert(f"No session has recorded data for {dims}.", color="warning", className="mb-0")
    session = result.session
    dims = ", ".join(result.target)
    return html.Div(
        [
            html.Div(
                [
                    html.Span("Closest session: ", className="status-label"),
                    html.Span(session.label, className="fw-bold"),
                ]
            ),
            html.Div(
                [
                    html.Span("Grade: ", className="status-label"),
                    html.Span(str(session.grade), id="explorer-grade", className="fw-bold text-warning"),
                ]
            ),
            html.Div(f"Matched on {dims} · distance {result.distance:.2f}", className="text-muted small"),
        ]
    )


def _averages_table(result: Optional[MatchResult]):
    if result is None:
        return html.Div()
    session = result.session
    header = html.Thead(html.Tr([html.Th("")] + [html.Th(f) for f in config.FEATURES]))
    body = html.Tbody(
        [
            html.Tr([html.Td("Target")] + [html.Td(_fmt(result.target.get(f))) for f in config.FEATURES]),
            html.Tr([html.Td("Session avg")] + [html.Td(_fmt(session.avg[f])) for f in config.FEATURES]),
        ]
    )
    return dbc.Table([header, body], bordered=False, size="sm", className="mb-0")


def render_match(sessions: Sequence[ExamSession], control: Optional[str], values: Dict[str, Optional[float]]):
    """Resolve the query implied by the last-moved control and build page outputs."""
    active = active_features_for(control)
    result = resolve(sessions, active, values)
    if result is None:
        fig = _blank_fig("Signals during exam", "No matching session")
    else:
        fig = _make_series_fig(result.session)
    return _summary(result, active), fig, _averages_table(result)


def _slider(feature: str, rng) -> dbc.Col:
    if rng is None:
        return dbc.Col(
            [
                dbc.Label(f"{SLIDER_LABELS[feature]} (no recorded data)", className="text-muted"),
                dcc.Slider(id=SLIDER_IDS[feature], min=0, max=1, step=1, value=None, marks=None, disabled=True),
            ],
            md=6,
            sm=12,
            className="mb-3",
        )
    return dbc.Col(
        [
            dbc.Label(f"{SLIDER_LABELS[feature]} ({config.FEATURE_UNITS[feature]})"),
            dcc.Slider(
                id=SLIDER_IDS[feature],
                min=rng.min,
                max=rng.max,
                step=1,
                value=rng.initial,
                marks={rng.min: str(rng.min), rng.max: str(rng.max)},
                tooltip={"placement": "bottom", "always_visible": True},
            ),
        ],
        md=6,
        sm=12,
        className="mb-3",
    )


def layout() -> dbc.Container:
    ranges = registry.session_store.get_ranges()
    physiological = [_slider(f, ranges.get(f)) for f in config.NON_STRESS_FEATURES]
    return dbc.Container(
        [
            dbc.Card(
                [
                    dbc.CardHeader("Target profile"),
                    dbc.CardBody(
                        [
                            dbc.Row(physiological, className="g-3"),
                            html.Hr(),
                            html.Div(
                                "Moving the stress slider matches on stress alone; "
                                "the other sliders match on all four signals together.",
                                className="text-muted small mb-2",
                            ),
                            dbc.Row([_slider(config.STRESS, ranges.get(config.STRESS))], className="g-3"),
                        ]
                    ),
                ],
                className="page-card",
            ),
            dbc.Card(
                dbc.CardBody(
                    [
                        html.Div(id="explorer-summary", className="mb-2"),
                        html.Div(id="explorer-averages", className="mb-3"),
                        dcc.Graph(id="explorer-chart", config={"displayModeBar": False}),
                    ]
                ),
                className="page-card",
            ),
        ],
        fluid=True,
        className="page-container",
    )


@callback(
    Output("explorer-summary", "children"),
    Output("explorer-chart", "figure"),
    Output("explorer-averages", "children"),
    *[Input(SLIDER_IDS[f], "value") for f in config.FEATURES],
)
def update_explorer(*slider_values):
    control = _control_feature(ctx.triggered_id)
    values = dict(zip(config.FEATURES, slider_values))
    return render_match(registry.session_store.get_sessions(), control, values)
