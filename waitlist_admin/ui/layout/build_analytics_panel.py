from __future__ import annotations

from typing import Sequence

import dash_bootstrap_components as dbc
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
from dash import dcc, html

from waitlist_admin.core.analytics import AnalyticsPoint, WaitlistAnalytics
from waitlist_admin.ui.ids import IDs

DAY_RANGE_OPTIONS = [
    {"label": "Last 7 days", "value": 7},
    {"label": "Last 30 days", "value": 30},
    {"label": "Last 90 days", "value": 90},
]
DEFAULT_DAY_RANGE = 30


def _stat_card(title: str, value: str) -> dbc.Col:
    return dbc.Col(
        dbc.Card(
            dbc.CardBody(
                [
                    html.Div(title, className="text-muted small"),
                    html.H3(value, className="mb-0"),
                ]
            ),
            className="shadow-sm h-100",
        ),
        md=3,
        className="mb-2",
    )


def render_analytics_cards(stats: WaitlistAnalytics) -> dbc.Row:
    return dbc.Row(
        [
            _stat_card("Total applicants", str(stats.total)),
            _stat_card("Unemployed", str(stats.unemployed)),
            _stat_card("Average age", str(stats.avg_age)),
            _stat_card("Computer access", f"{stats.computer_access_percentage}%"),
        ],
        className="gx-2",
    )


def build_applications_figure(points: Sequence[AnalyticsPoint]) -> go.Figure:
    """Daily application counts as a bar chart; a labelled empty figure when there are none."""
    if not points:
        fig = go.Figure()
        fig.update_layout(
            template="plotly_white",
            xaxis={"visible": False},
            yaxis={"visible": False},
            annotations=[
                {
                    "text": "No applications in this period",
                    "showarrow": False,
                    "font": {"size": 14},
                }
            ],
            margin={"l": 20, "r": 20, "t": 20, "b": 20},
            height=260,
        )
        return fig

    df = pd.DataFrame([{"date": p.date, "applications": p.value} for p in points])
    fig = px.bar(df, x="date", y="applications", template="plotly_white")
    fig.update_layout(
        margin={"l": 20, "r": 20, "t": 20, "b": 20},
        height=260,
        xaxis_title=None,
        yaxis_title="Applications",
    )
    return fig


def build_analytics_panel() -> dbc.Card:
    return dbc.Card(
        dbc.CardBody(
            [
                html.Div(id=IDs.Control.ANALYTICS_CARDS),
                dbc.Row(
                    [
                        dbc.Col(html.H5("Applications over time", className="mb-0"), md=8),
                        dbc.Col(
                            dcc.Dropdown(
                                id=IDs.Control.ANALYTICS_DAYS,
                                options=DAY_RANGE_OPTIONS,
                                value=DEFAULT_DAY_RANGE,
                                clearable=False,
                            ),
                            md=4,
                        ),
                    ],
                    className="align-items-center mt-3 mb-2",
                ),
                dcc.Graph(
                    id=IDs.Control.ANALYTICS_CHART,
                    figure=build_applications_figure([]),
                    config={"displayModeBar": False},
                ),
            ]
        ),
        className="shadow-sm mt-3",
    )
