from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from waitlist_admin.core.stages import STAGE_OPTIONS
from waitlist_admin.services.bulk_action import bulk_action_label
from waitlist_admin.ui.helpers import stage_dropdown_options
from waitlist_admin.ui.ids import IDs, pattern_id


def build_bulk_menu(count: int = 0) -> dbc.DropdownMenu:
    return dbc.DropdownMenu(
        [
            dbc.DropdownMenuItem(
                opt.label,
                id=pattern_id(IDs.Pattern.BULK_STAGE, opt.value),
                n_clicks=0,
            )
            for opt in STAGE_OPTIONS
        ],
        id=IDs.Control.BULK_MENU,
        label=bulk_action_label(count),
        color="primary",
        disabled=count == 0,
    )


def build_bulk_modal() -> dbc.Modal:
    return dbc.Modal(
        [
            dbc.ModalHeader(dbc.ModalTitle("Confirm bulk update")),
            dbc.ModalBody(id=IDs.Control.BULK_MODAL_BODY),
            dbc.ModalFooter(
                [
                    dbc.Button(
                        "Cancel",
                        id=IDs.Control.BULK_CANCEL_BTN,
                        color="secondary",
                        outline=True,
                    ),
                    dbc.Button("Confirm", id=IDs.Control.BULK_CONFIRM_BTN, color="primary"),
                ]
            ),
        ],
        id=IDs.Control.BULK_MODAL,
        is_open=False,
        backdrop="static",
    )


def build_toolbar() -> dbc.Card:
    return dbc.Card(
        dbc.CardBody(
            [
                dbc.Row(
                    [
                        dbc.Col(
                            dcc.Input(
                                id=IDs.Control.SEARCH_INPUT,
                                type="search",
                                placeholder="Search by name or email",
                                debounce=True,
                                className="form-control",
                            ),
                            md=4,
                        ),
                        dbc.Col(
                            dcc.Dropdown(
                                id=IDs.Control.BATCH_SELECT,
                                options=[],
                                value="",
                                placeholder="Batch",
                                clearable=False,
                            ),
                            md=2,
                        ),
                        dbc.Col(
                            dcc.Dropdown(
                                id=IDs.Control.STAGE_SELECT,
                                options=stage_dropdown_options(),
                                value="",
                                placeholder="Stage",
                                clearable=False,
                            ),
                            md=2,
                        ),
                        dbc.Col(
                            dbc.Button(
                                "Advanced filters",
                                id=IDs.Control.FILTER_OPEN_BTN,
                                color="secondary",
                                outline=True,
                                className="w-100",
                            ),
                            md=2,
                        ),
                        dbc.Col(build_bulk_menu(), md=2),
                    ],
                    className="g-2 align-items-center",
                ),
                dbc.Row(
                    [
                        dbc.Col(
                            html.Div(id=IDs.Control.RESULT_COUNT, className="text-muted small"),
                            md=6,
                        ),
                        dbc.Col(
                            html.Div(
                                id=IDs.Control.FILTER_SUMMARY,
                                className="text-muted small text-end",
                            ),
                            md=6,
                        ),
                    ],
                    className="mt-2",
                ),
            ]
        ),
        className="shadow-sm mt-3",
    )
