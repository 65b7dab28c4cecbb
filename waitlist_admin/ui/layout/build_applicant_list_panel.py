from __future__ import annotations

from typing import Optional, Sequence

import dash_bootstrap_components as dbc
from dash import html

from waitlist_admin.core.applicant import Applicant
from waitlist_admin.core.stages import stage_label
from waitlist_admin.ui.ids import IDs, pattern_id


def render_applicant_rows(
    page_items: Sequence[Applicant],
    selected_id: Optional[str],
    error: Optional[str] = None,
):
    if error:
        return dbc.Alert(
            [html.Div("Failed to load data", className="fw-semibold"), html.Small(error)],
            color="danger",
            className="mb-0",
        )
    if not page_items:
        return html.Div("No applicants found.", className="text-muted p-3")

    return dbc.ListGroup(
        [
            dbc.ListGroupItem(
                [
                    html.Div(a.full_name or "(no name)", className="fw-semibold"),
                    html.Div(
                        [
                            html.Span(a.email, className="me-2"),
                            dbc.Badge(stage_label(a.stage) or "No stage", color="light", text_color="dark"),
                        ],
                        className="small text-muted",
                    ),
                ],
                id=pattern_id(IDs.Pattern.APPLICANT_ROW, a.id),
                n_clicks=0,
                action=True,
                active=a.id == selected_id,
            )
            for a in page_items
        ],
        flush=True,
    )


def build_applicant_list_panel() -> dbc.Card:
    return dbc.Card(
        [
            dbc.CardHeader("Applicants"),
            dbc.CardBody(html.Div(id=IDs.Control.APPLICANT_LIST), className="p-0"),
            dbc.CardFooter(
                dbc.Pagination(
                    id=IDs.Control.PAGINATION,
                    max_value=1,
                    active_page=1,
                    fully_expanded=False,
                    first_last=True,
                    previous_next=True,
                    size="sm",
                    className="mb-0",
                )
            ),
        ],
        className="shadow-sm h-100",
    )
