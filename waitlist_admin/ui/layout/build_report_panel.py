from __future__ import annotations

from typing import Dict, List, Sequence

import dash_bootstrap_components as dbc
from dash import dcc, html

from waitlist_admin.services.export_service import FIELD_LABELS, export_headers, grouped_fields
from waitlist_admin.ui.ids import IDs, pattern_id


def build_field_checklists(selected: Sequence[str]) -> List[html.Div]:
    """One checklist per field category; values are the backend field keys."""
    chosen = set(selected)
    blocks = []
    for category, fields in grouped_fields().items():
        blocks.append(
            html.Div(
                [
                    html.Div(category, className="fw-semibold small mb-1"),
                    dbc.Checklist(
                        id=pattern_id(IDs.Pattern.REPORT_FIELDS, category),
                        options=[{"label": f.label, "value": f.key} for f in fields],
                        value=[f.key for f in fields if f.key in chosen],
                        inline=True,
                    ),
                ],
                className="mb-2",
            )
        )
    return blocks


def build_preview_table(rows: Sequence[Dict[str, str]], fields: Sequence[str]):
    headers = export_headers(fields)
    if not rows:
        return html.Div("No applicants to preview.", className="text-muted small")
    return dbc.Table(
        [
            html.Thead(html.Tr([html.Th(FIELD_LABELS.get(h, h)) for h in headers])),
            html.Tbody([html.Tr([html.Td(row.get(h, "")) for h in headers]) for row in rows]),
        ],
        size="sm",
        striped=True,
        bordered=True,
        responsive=True,
        className="mb-0",
    )


def build_report_modal(default_fields: Sequence[str]) -> dbc.Modal:
    return dbc.Modal(
        [
            dbc.ModalHeader(dbc.ModalTitle("Custom report")),
            dbc.ModalBody(
                [
                    html.Label("Fields to export", className="form-label"),
                    html.Div(build_field_checklists(default_fields)),
                    html.Hr(),
                    html.Label("Preview (first 5 rows)", className="form-label"),
                    html.Div(id=IDs.Control.REPORT_PREVIEW, style={"overflowX": "auto"}),
                ]
            ),
            dbc.ModalFooter(
                [
                    dbc.Button("Download CSV", id=IDs.Control.REPORT_DOWNLOAD_BTN, color="primary"),
                    dcc.Download(id=IDs.Control.REPORT_DOWNLOAD),
                ]
            ),
        ],
        id=IDs.Control.REPORT_MODAL,
        is_open=False,
        size="xl",
        scrollable=True,
    )
