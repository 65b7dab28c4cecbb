from __future__ import annotations

from typing import Optional

import dash_bootstrap_components as dbc
from dash import html

from waitlist_admin.core.applicant import Applicant, as_text
from waitlist_admin.core.stages import stage_label
from waitlist_admin.ui.ids import IDs, pattern_id

DETAIL_FIELDS = [
    ("Email", "email"),
    ("Phone", "phoneNumber"),
    ("Age", "age"),
    ("Employment", "currentEmploymentStatus"),
    ("Education", "educationLevel"),
    ("Region", "region"),
    ("Batch", "batch"),
    ("Applied", "createdAt"),
]


def _display(value) -> str:
    if isinstance(value, bool):
        return "Yes" if value else "No"
    return as_text(value) or "-"


def render_detail(applicant: Optional[Applicant]):
    if applicant is None:
        return html.Div("Select an applicant to see their details.", className="text-muted p-3")

    rows = [
        html.Tr([html.Th(label, className="text-muted fw-normal"), html.Td(_display(applicant.get(key)))])
        for label, key in DETAIL_FIELDS
    ]
    rows.append(
        html.Tr(
            [
                html.Th("Computer access", className="text-muted fw-normal"),
                html.Td(_display(applicant.has_computer_access)),
            ]
        )
    )

    return html.Div(
        [
            html.H4(applicant.full_name or "(no name)", className="mb-1"),
            dbc.Badge(stage_label(applicant.stage) or "No stage", color="info", className="mb-3"),
            dbc.Table(html.Tbody(rows), size="sm", borderless=True),
            html.Div(
                [
                    dbc.Button(
                        "Register as trainee",
                        id=pattern_id(IDs.Pattern.DETAIL_REGISTER, applicant.id),
                        color="success",
                        className="me-2",
                    ),
                    dbc.Button(
                        "Delete",
                        id=pattern_id(IDs.Pattern.DETAIL_DELETE, applicant.id),
                        color="danger",
                        outline=True,
                    ),
                ],
                className="d-flex",
            ),
        ],
        className="p-3",
    )


def build_delete_modal() -> dbc.Modal:
    return dbc.Modal(
        [
            dbc.ModalHeader(dbc.ModalTitle("Delete applicant")),
            dbc.ModalBody("This permanently removes the applicant from the waitlist. Continue?"),
            dbc.ModalFooter(
                [
                    dbc.Button(
                        "Cancel",
                        id=IDs.Control.DELETE_CANCEL_BTN,
                        color="secondary",
                        outline=True,
                    ),
                    dbc.Button("Delete", id=IDs.Control.DELETE_CONFIRM_BTN, color="danger"),
                ]
            ),
        ],
        id=IDs.Control.DELETE_MODAL,
        is_open=False,
    )


def build_detail_panel() -> dbc.Card:
    return dbc.Card(
        [
            dbc.CardHeader("Applicant details"),
            dbc.CardBody(html.Div(id=IDs.Control.DETAIL_PANEL), className="p-0"),
        ],
        className="shadow-sm h-100",
    )
