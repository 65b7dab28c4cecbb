from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import html

from waitlist_admin.config.model import GlobalConfig
from waitlist_admin.ui.ids import IDs


def build_navbar(global_config: GlobalConfig) -> dbc.Navbar:
    title = global_config.ui_title
    subtitle = global_config.subtitle

    return dbc.Navbar(
        dbc.Container(
            fluid=True,
            children=[
                html.Div(
                    [
                        html.H2(title, className="mb-0"),
                        html.Small(subtitle, className="text-muted"),
                    ],
                    className="d-flex flex-column justify-content-center",
                ),
                html.Div(
                    dbc.Button(
                        "Custom Report",
                        id=IDs.Control.REPORT_OPEN_BTN,
                        color="primary",
                        outline=True,
                    ),
                    className="ms-auto",
                ),
            ],
        ),
        dark=False,
        className="shadow-sm wla-navbar",
    )
