from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional, Tuple

import dash

from waitlist_admin.core.list_state import WaitlistView
from waitlist_admin.ui.helpers import build_view, safe_filter_tree, safe_list_state

if TYPE_CHECKING:
    from waitlist_admin.ui.context import AppContext

logger = logging.getLogger(__name__)


def current_view(ctx: AppContext, tree_data: object, state_data: object) -> Tuple[WaitlistView, Optional[str]]:
    """Rebuild the visible view from the stores; the error text is set when the backend failed."""
    applicants, error = ctx.load_applicants()
    if error:
        logger.warning("Applicant fetch failed: %s", error)
    view = build_view(
        applicants,
        safe_filter_tree(tree_data),
        safe_list_state(state_data),
        page_size=ctx.global_config.page_size,
        auto_select_first=ctx.global_config.auto_select_first,
    )
    return view, error


def triggered_value() -> Any:
    """Property value of the component that fired the running callback."""
    triggered = dash.ctx.triggered
    if not triggered:
        return None
    return triggered[0].get("value")
