from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import dash
from dash import ALL, Input, Output, State, dcc

from waitlist_admin.services.export_service import export_applicants_csv, export_filename, preview_rows
from waitlist_admin.ui.callbacks.callbacks_utils import current_view
from waitlist_admin.ui.helpers import selected_export_fields
from waitlist_admin.ui.ids import IDs
from waitlist_admin.ui.layout.build_report_panel import build_preview_table

if TYPE_CHECKING:
    from waitlist_admin.ui.context import AppContext

logger = logging.getLogger(__name__)

_FIELD_CHECKLISTS = {"type": IDs.Pattern.REPORT_FIELDS, "index": ALL}


def register_reports_callbacks(app: dash.Dash, ctx: AppContext) -> None:
    # ---------------------------------------------------------
    # Open / close the custom report modal
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.REPORT_MODAL, "is_open"),
        Input(IDs.Control.REPORT_OPEN_BTN, "n_clicks"),
        State(IDs.Control.REPORT_MODAL, "is_open"),
        prevent_initial_call=True,
    )
    def toggle_report_modal(n_clicks, is_open):
        if not n_clicks:
            raise dash.exceptions.PreventUpdate
        return not is_open

    # ---------------------------------------------------------
    # Preview of the first rows with the chosen fields
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.REPORT_PREVIEW, "children"),
        Input(_FIELD_CHECKLISTS, "value"),
        Input(IDs.Control.REPORT_MODAL, "is_open"),
        State(IDs.Store.LIST_STATE, "data"),
        State(IDs.Store.FILTER_TREE, "data"),
    )
    def update_report_preview(field_values, is_open, state_data, tree_data):
        if not is_open:
            raise dash.exceptions.PreventUpdate
        fields = selected_export_fields(field_values)
        view, _error = current_view(ctx, tree_data, state_data)
        return build_preview_table(preview_rows(view.filtered, fields), fields)

    # ---------------------------------------------------------
    # CSV download of the filtered applicants
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.REPORT_DOWNLOAD, "data"),
        Input(IDs.Control.REPORT_DOWNLOAD_BTN, "n_clicks"),
        State(_FIELD_CHECKLISTS, "value"),
        State(IDs.Store.LIST_STATE, "data"),
        State(IDs.Store.FILTER_TREE, "data"),
        prevent_initial_call=True,
    )
    def download_report(n_clicks, field_values, state_data, tree_data):
        if not n_clicks:
            raise dash.exceptions.PreventUpdate

        view, error = current_view(ctx, tree_data, state_data)
        if error:
            raise dash.exceptions.PreventUpdate

        fields = selected_export_fields(field_values)
        csv_text = export_applicants_csv(view.filtered, fields)
        return dcc.send_string(csv_text, export_filename())
