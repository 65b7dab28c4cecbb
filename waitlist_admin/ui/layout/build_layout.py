from __future__ import annotations

from typing import TYPE_CHECKING

import dash_bootstrap_components as dbc
from dash import dcc

from waitlist_admin.core.filter_tree import new_group
from waitlist_admin.core.list_state import ListState
from waitlist_admin.services.bulk_action import BulkAction
from waitlist_admin.ui.ids import IDs
from waitlist_admin.ui.layout.build_analytics_panel import build_analytics_panel
from waitlist_admin.ui.layout.build_applicant_list_panel import build_applicant_list_panel
from waitlist_admin.ui.layout.build_detail_panel import build_delete_modal, build_detail_panel
from waitlist_admin.ui.layout.build_filter_builder import build_filter_modal
from waitlist_admin.ui.layout.build_navbar import build_navbar
from waitlist_admin.ui.layout.build_report_panel import build_report_modal
from waitlist_admin.ui.layout.build_toolbar import build_bulk_modal, build_toolbar

if TYPE_CHECKING:
    from waitlist_admin.ui.context import AppContext


def build_layout(ctx: AppContext):
    root = new_group()

    return dbc.Container(
        fluid=True,
        className="wla-root",
        children=[
            build_navbar(ctx.global_config),

            # App-level stores
            dcc.Store(id=IDs.Store.FILTER_TREE, data=root.to_dict()),
            dcc.Store(id=IDs.Store.LIST_STATE, data=ListState().to_dict()),
            dcc.Store(id=IDs.Store.BULK_ACTION, data=BulkAction().to_dict()),
            dcc.Store(id=IDs.Store.DATA_VERSION, data=ctx.service.version),
            dcc.Store(id=IDs.Store.PENDING_DELETE, data=None),

            dbc.Alert(
                id=IDs.Control.NOTICE,
                is_open=False,
                dismissable=True,
                duration=6000,
                className="mt-3 mb-0",
            ),

            build_analytics_panel(),
            build_toolbar(),
            dbc.Row(
                [
                    dbc.Col(build_applicant_list_panel(), md=5, className="mt-3"),
                    dbc.Col(build_detail_panel(), md=7, className="mt-3"),
                ],
                className="gx-3 mb-4",
            ),

            build_filter_modal(root),
            build_bulk_modal(),
            build_delete_modal(),
            build_report_modal(ctx.global_config.export_fields),
        ],
    )
