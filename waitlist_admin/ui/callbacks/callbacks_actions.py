from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import dash
from dash import ALL, Input, Output, State, html, no_update

from waitlist_admin.core.exceptions import UnknownStageError
from waitlist_admin.services.bulk_action import BulkAction
from waitlist_admin.ui.callbacks.callbacks_utils import current_view, triggered_value
from waitlist_admin.ui.helpers import mutation_notice
from waitlist_admin.ui.ids import IDs

if TYPE_CHECKING:
    from waitlist_admin.ui.context import AppContext

logger = logging.getLogger(__name__)


def _notice_outputs():
    return (
        Output(IDs.Control.NOTICE, "children", allow_duplicate=True),
        Output(IDs.Control.NOTICE, "color", allow_duplicate=True),
        Output(IDs.Control.NOTICE, "is_open", allow_duplicate=True),
    )


def register_action_callbacks(app: dash.Dash, ctx: AppContext) -> None:
    # ---------------------------------------------------------
    # Bulk stage: pick a stage -> pending confirmation
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.BULK_ACTION, "data", allow_duplicate=True),
        Input({"type": IDs.Pattern.BULK_STAGE, "index": ALL}, "n_clicks"),
        State(IDs.Store.BULK_ACTION, "data"),
        prevent_initial_call=True,
    )
    def request_bulk_stage(_n_clicks, action_data):
        triggered = dash.ctx.triggered_id
        if not isinstance(triggered, dict) or not triggered_value():
            raise dash.exceptions.PreventUpdate

        action = BulkAction.from_dict(action_data)
        try:
            action.request(str(triggered.get("index")))
        except UnknownStageError:
            logger.exception("Bulk action asked for an unknown stage")
            raise dash.exceptions.PreventUpdate
        return action.to_dict()

    # ---------------------------------------------------------
    # Bulk stage: confirmation dialog
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.BULK_MODAL, "is_open"),
        Output(IDs.Control.BULK_MODAL_BODY, "children"),
        Output(IDs.Control.BULK_CONFIRM_BTN, "disabled"),
        Input(IDs.Store.BULK_ACTION, "data"),
        State(IDs.Store.LIST_STATE, "data"),
        State(IDs.Store.FILTER_TREE, "data"),
    )
    def render_bulk_modal(action_data, state_data, tree_data):
        action = BulkAction.from_dict(action_data)
        if not action.is_open:
            return False, no_update, no_update

        view, _error = current_view(ctx, tree_data, state_data)
        ids = view.filtered_ids
        body = [html.P(action.confirmation_message(len(ids)))]
        if action.last_result is not None and not action.last_result.success:
            body.append(
                html.Div(
                    action.last_result.message or "The update failed; you can retry.",
                    className="text-danger small",
                )
            )
        return True, body, not action.can_use(ids)

    # ---------------------------------------------------------
    # Bulk stage: confirm / cancel
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.BULK_ACTION, "data", allow_duplicate=True),
        Output(IDs.Store.DATA_VERSION, "data", allow_duplicate=True),
        *_notice_outputs(),
        Input(IDs.Control.BULK_CONFIRM_BTN, "n_clicks"),
        Input(IDs.Control.BULK_CANCEL_BTN, "n_clicks"),
        State(IDs.Store.BULK_ACTION, "data"),
        State(IDs.Store.LIST_STATE, "data"),
        State(IDs.Store.FILTER_TREE, "data"),
        prevent_initial_call=True,
        running=[(Output(IDs.Control.BULK_CONFIRM_BTN, "disabled"), True, False)],
    )
    def finish_bulk_action(_confirm, _cancel, action_data, state_data, tree_data):
        triggered = dash.ctx.triggered_id
        action = BulkAction.from_dict(action_data)

        if triggered == IDs.Control.BULK_CANCEL_BTN:
            return action.cancel().to_dict(), no_update, no_update, no_update, no_update

        if triggered != IDs.Control.BULK_CONFIRM_BTN:
            raise dash.exceptions.PreventUpdate

        view, _error = current_view(ctx, tree_data, state_data)
        result = action.confirm(ctx.service, view.filtered_ids)
        if result is None:
            raise dash.exceptions.PreventUpdate

        message, color, is_open = mutation_notice(result)
        version = ctx.service.version if result.success else no_update
        return action.to_dict(), version, message, color, is_open

    # ---------------------------------------------------------
    # Delete: ask for confirmation
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.PENDING_DELETE, "data", allow_duplicate=True),
        Output(IDs.Control.DELETE_MODAL, "is_open", allow_duplicate=True),
        Input({"type": IDs.Pattern.DETAIL_DELETE, "index": ALL}, "n_clicks"),
        prevent_initial_call=True,
    )
    def request_delete(_n_clicks):
        triggered = dash.ctx.triggered_id
        if not isinstance(triggered, dict) or not triggered_value():
            raise dash.exceptions.PreventUpdate
        return str(triggered.get("index")), True

    # ---------------------------------------------------------
    # Delete: confirm / cancel
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.PENDING_DELETE, "data", allow_duplicate=True),
        Output(IDs.Control.DELETE_MODAL, "is_open", allow_duplicate=True),
        Output(IDs.Store.DATA_VERSION, "data", allow_duplicate=True),
        *_notice_outputs(),
        Input(IDs.Control.DELETE_CONFIRM_BTN, "n_clicks"),
        Input(IDs.Control.DELETE_CANCEL_BTN, "n_clicks"),
        State(IDs.Store.PENDING_DELETE, "data"),
        prevent_initial_call=True,
        running=[(Output(IDs.Control.DELETE_CONFIRM_BTN, "disabled"), True, False)],
    )
    def finish_delete(_confirm, _cancel, applicant_id):
        triggered = dash.ctx.triggered_id
        if triggered == IDs.Control.DELETE_CANCEL_BTN:
            return None, False, no_update, no_update, no_update, no_update

        if triggered != IDs.Control.DELETE_CONFIRM_BTN or not applicant_id:
            raise dash.exceptions.PreventUpdate

        result = ctx.service.delete_applicant(applicant_id)
        message, color, is_open = mutation_notice(result, "Failed to delete applicant")
        if not result.success:
            # keep the dialog so the user can retry or cancel
            return no_update, True, no_update, message, color, is_open
        return None, False, ctx.service.version, message, color, is_open

    # ---------------------------------------------------------
    # Register as trainee
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.DATA_VERSION, "data", allow_duplicate=True),
        *_notice_outputs(),
        Input({"type": IDs.Pattern.DETAIL_REGISTER, "index": ALL}, "n_clicks"),
        prevent_initial_call=True,
    )
    def register_trainee(_n_clicks):
        triggered = dash.ctx.triggered_id
        if not isinstance(triggered, dict) or not triggered_value():
            raise dash.exceptions.PreventUpdate

        result = ctx.service.register_trainee(str(triggered.get("index")))
        message, color, is_open = mutation_notice(result, "Failed to register trainee")
        version = ctx.service.version if result.success else no_update
        return version, message, color, is_open
