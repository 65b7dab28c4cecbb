from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from waitlist_admin.core.filter_tree import FilterCondition, FilterGroup, FilterLogic
from waitlist_admin.ui.helpers import field_options, operator_options
from waitlist_admin.ui.ids import IDs, pattern_id


def _enum_value(value) -> str:
    return getattr(value, "value", value)


def render_condition(cond: FilterCondition) -> dbc.Row:
    P = IDs.Pattern
    return dbc.Row(
        [
            dbc.Col(
                dcc.Dropdown(
                    id=pattern_id(P.FB_FIELD, cond.id),
                    options=field_options(),
                    value=_enum_value(cond.field),
                    clearable=False,
                ),
                md=4,
            ),
            dbc.Col(
                dcc.Dropdown(
                    id=pattern_id(P.FB_OPERATOR, cond.id),
                    options=operator_options(),
                    value=_enum_value(cond.operator),
                    clearable=False,
                ),
                md=3,
            ),
            dbc.Col(
                dcc.Input(
                    id=pattern_id(P.FB_VALUE, cond.id),
                    type="text",
                    value=cond.value,
                    placeholder="Value",
                    debounce=True,
                    className="form-control",
                ),
                md=4,
            ),
            dbc.Col(
                dbc.Button(
                    "×",
                    id=pattern_id(P.FB_REMOVE_RULE, cond.id),
                    color="link",
                    className="text-danger p-0",
                ),
                md=1,
                className="d-flex align-items-center",
            ),
        ],
        className="g-2 mb-2 wla-fb-rule",
    )


def render_group(group: FilterGroup, *, is_root: bool = False, depth: int = 0) -> html.Div:
    """
    Render one group (and, recursively, its children).

    Every control carries a pattern-matching id keyed by the group or
    condition id, so a single callback handles edits at any depth.
    """
    P = IDs.Pattern

    header = html.Div(
        [
            dbc.RadioItems(
                id=pattern_id(P.FB_LOGIC, group.id),
                options=[
                    {"label": "AND", "value": FilterLogic.AND.value},
                    {"label": "OR", "value": FilterLogic.OR.value},
                ],
                value=_enum_value(group.logic),
                inline=True,
                className="btn-group",
                inputClassName="btn-check",
                labelClassName="btn btn-outline-secondary btn-sm",
                labelCheckedClassName="active",
            ),
            html.Div(
                [
                    dbc.Button(
                        "+ Rule",
                        id=pattern_id(P.FB_ADD_RULE, group.id),
                        color="secondary",
                        outline=True,
                        size="sm",
                        className="me-2",
                    ),
                    dbc.Button(
                        "+ Group",
                        id=pattern_id(P.FB_ADD_GROUP, group.id),
                        color="secondary",
                        outline=True,
                        size="sm",
                    ),
                    *(
                        []
                        if is_root
                        else [
                            dbc.Button(
                                "Remove group",
                                id=pattern_id(P.FB_REMOVE_GROUP, group.id),
                                color="danger",
                                outline=True,
                                size="sm",
                                className="ms-2",
                            )
                        ]
                    ),
                ],
                className="ms-auto",
            ),
        ],
        className="d-flex align-items-center mb-2",
    )

    body = [render_condition(c) for c in group.conditions]
    body += [render_group(g, depth=depth + 1) for g in group.groups]
    if not body:
        body = [html.Div("No rules yet; every applicant matches.", className="text-muted small")]

    return html.Div(
        [header, *body],
        className="wla-fb-group border rounded p-2 mb-2",
        style={"marginLeft": f"{min(depth, 1) * 16}px"},
    )


def build_filter_modal(root: FilterGroup) -> dbc.Modal:
    return dbc.Modal(
        [
            dbc.ModalHeader(dbc.ModalTitle("Advanced filters")),
            dbc.ModalBody(
                html.Div(render_group(root, is_root=True), id=IDs.Control.FILTER_BUILDER)
            ),
            dbc.ModalFooter(
                dbc.Button(
                    "Clear all",
                    id=IDs.Control.FILTER_RESET_BTN,
                    color="secondary",
                    outline=True,
                )
            ),
        ],
        id=IDs.Control.FILTER_MODAL,
        is_open=False,
        size="xl",
        scrollable=True,
    )
