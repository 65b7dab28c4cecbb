from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import dash
from dash import ALL, Input, Output, State

from waitlist_admin.core.filter_tree import new_group
from waitlist_admin.ui.callbacks.callbacks_utils import triggered_value
from waitlist_admin.ui.helpers import apply_builder_event, describe_tree, safe_filter_tree, tree_or_new
from waitlist_admin.ui.ids import IDs
from waitlist_admin.ui.layout.build_filter_builder import render_group

if TYPE_CHECKING:
    from waitlist_admin.ui.context import AppContext

logger = logging.getLogger(__name__)


def _all(kind: str) -> dict:
    return {"type": kind, "index": ALL}


def register_filter_callbacks(app: dash.Dash, ctx: AppContext) -> None:
    P = IDs.Pattern

    # ---------------------------------------------------------
    # Open / close the advanced filter modal
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.FILTER_MODAL, "is_open"),
        Input(IDs.Control.FILTER_OPEN_BTN, "n_clicks"),
        State(IDs.Control.FILTER_MODAL, "is_open"),
        prevent_initial_call=True,
    )
    def toggle_filter_modal(n_clicks, is_open):
        if not n_clicks:
            raise dash.exceptions.PreventUpdate
        return not is_open

    # ---------------------------------------------------------
    # Filter builder edits (any depth, via pattern-matching ids)
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.FILTER_TREE, "data"),
        Output(IDs.Control.FILTER_BUILDER, "children"),
        Input(_all(P.FB_ADD_RULE), "n_clicks"),
        Input(_all(P.FB_ADD_GROUP), "n_clicks"),
        Input(_all(P.FB_REMOVE_GROUP), "n_clicks"),
        Input(_all(P.FB_REMOVE_RULE), "n_clicks"),
        Input(_all(P.FB_LOGIC), "value"),
        Input(_all(P.FB_FIELD), "value"),
        Input(_all(P.FB_OPERATOR), "value"),
        Input(_all(P.FB_VALUE), "value"),
        Input(IDs.Control.FILTER_RESET_BTN, "n_clicks"),
        State(IDs.Store.FILTER_TREE, "data"),
        prevent_initial_call=True,
    )
    def edit_filter_tree(*args):
        tree_data = args[-1]
        triggered = dash.ctx.triggered_id
        if triggered is None:
            raise dash.exceptions.PreventUpdate

        if triggered == IDs.Control.FILTER_RESET_BTN:
            root = new_group()
            logger.info("Advanced filters cleared")
            return root.to_dict(), render_group(root, is_root=True)

        if not isinstance(triggered, dict):
            raise dash.exceptions.PreventUpdate

        root = tree_or_new(tree_data)
        new_root = apply_builder_event(root, triggered, triggered_value())
        if new_root is root:
            raise dash.exceptions.PreventUpdate

        logger.debug("Filter tree edited via %s", triggered.get("type"))
        return new_root.to_dict(), render_group(new_root, is_root=True)

    # ---------------------------------------------------------
    # Summary line under the toolbar
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.FILTER_SUMMARY, "children"),
        Input(IDs.Store.FILTER_TREE, "data"),
    )
    def update_filter_summary(tree_data):
        return describe_tree(safe_filter_tree(tree_data))
