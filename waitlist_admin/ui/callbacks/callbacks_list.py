from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import dash
from dash import ALL, Input, Output, State, no_update

from waitlist_admin.core.analytics import summarize_applicants, transform_analytics_data
from waitlist_admin.services.bulk_action import bulk_action_label
from waitlist_admin.ui.callbacks.callbacks_utils import current_view, triggered_value
from waitlist_admin.ui.helpers import apply_list_event, batch_dropdown_options, result_count_text, safe_list_state
from waitlist_admin.ui.ids import IDs
from waitlist_admin.ui.layout.build_analytics_panel import build_applications_figure, render_analytics_cards
from waitlist_admin.ui.layout.build_applicant_list_panel import render_applicant_rows
from waitlist_admin.ui.layout.build_detail_panel import render_detail

if TYPE_CHECKING:
    from waitlist_admin.ui.context import AppContext

logger = logging.getLogger(__name__)


def register_list_callbacks(app: dash.Dash, ctx: AppContext) -> None:
    # ---------------------------------------------------------
    # Batch dropdown options follow the loaded snapshot
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.BATCH_SELECT, "options"),
        Input(IDs.Store.DATA_VERSION, "data"),
    )
    def update_batch_options(_version):
        applicants, _error = ctx.load_applicants()
        return batch_dropdown_options(applicants)

    # ---------------------------------------------------------
    # Toolbar / pagination / row clicks -> list-state
    # The pagination control is written here too, so its
    # active_page loop stays inside one callback.
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.LIST_STATE, "data"),
        Output(IDs.Control.PAGINATION, "max_value"),
        Output(IDs.Control.PAGINATION, "active_page"),
        Input(IDs.Control.SEARCH_INPUT, "value"),
        Input(IDs.Control.BATCH_SELECT, "value"),
        Input(IDs.Control.STAGE_SELECT, "value"),
        Input(IDs.Control.PAGINATION, "active_page"),
        Input({"type": IDs.Pattern.APPLICANT_ROW, "index": ALL}, "n_clicks"),
        Input(IDs.Store.FILTER_TREE, "data"),
        Input(IDs.Store.DATA_VERSION, "data"),
        State(IDs.Store.LIST_STATE, "data"),
    )
    def update_list_state(_search, _batch, _stage, _page, _rows, tree_data, _version, state_data):
        state = safe_list_state(state_data)
        triggered = dash.ctx.triggered_id
        new_state = state if triggered is None else apply_list_event(state, triggered, triggered_value())

        # Resolve page clamp + selection against the current data
        view, _error = current_view(ctx, tree_data, new_state.to_dict())
        resolved = view.state.to_dict()
        return (
            no_update if resolved == state.to_dict() else resolved,
            view.pagination.total_pages,
            view.pagination.safe_page,
        )

    # ---------------------------------------------------------
    # Render list, detail and bulk button
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.RESULT_COUNT, "children"),
        Output(IDs.Control.APPLICANT_LIST, "children"),
        Output(IDs.Control.DETAIL_PANEL, "children"),
        Output(IDs.Control.BULK_MENU, "label"),
        Output(IDs.Control.BULK_MENU, "disabled"),
        Input(IDs.Store.LIST_STATE, "data"),
        Input(IDs.Store.FILTER_TREE, "data"),
        Input(IDs.Store.DATA_VERSION, "data"),
    )
    def render_list(state_data, tree_data, _version):
        view, error = current_view(ctx, tree_data, state_data)
        selected_id = view.selected.id if view.selected is not None else None
        count = len(view.filtered)

        return (
            "" if error else result_count_text(view),
            render_applicant_rows(view.page_items, selected_id, error),
            render_detail(view.selected),
            bulk_action_label(count),
            count == 0,
        )

    # ---------------------------------------------------------
    # Analytics over the filtered set
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.ANALYTICS_CARDS, "children"),
        Output(IDs.Control.ANALYTICS_CHART, "figure"),
        Input(IDs.Store.LIST_STATE, "data"),
        Input(IDs.Store.FILTER_TREE, "data"),
        Input(IDs.Store.DATA_VERSION, "data"),
        Input(IDs.Control.ANALYTICS_DAYS, "value"),
    )
    def render_analytics(state_data, tree_data, _version, days):
        view, _error = current_view(ctx, tree_data, state_data)
        stats = summarize_applicants(view.filtered)
        points = transform_analytics_data([a.to_dict() for a in view.filtered], days or 0)
        return render_analytics_cards(stats), build_applications_figure(points)
