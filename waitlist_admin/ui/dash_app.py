from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping, Optional

import dash_bootstrap_components as dbc
from dash import Dash

from waitlist_admin.config.loader import load_global_config
from waitlist_admin.config.model import BACKEND_HTTP, GlobalConfig
from waitlist_admin.services.backend import HttpWaitlistBackend, InMemoryWaitlistBackend, WaitlistBackend
from waitlist_admin.services.waitlist_service import WaitlistService
from waitlist_admin.ui.callbacks.callbacks_actions import register_action_callbacks
from waitlist_admin.ui.callbacks.callbacks_filters import register_filter_callbacks
from waitlist_admin.ui.callbacks.callbacks_list import register_list_callbacks
from waitlist_admin.ui.callbacks.callbacks_reports import register_reports_callbacks
from waitlist_admin.ui.context import AppContext
from waitlist_admin.ui.layout.build_layout import build_layout

logger = logging.getLogger(__name__)


def build_backend(global_config: GlobalConfig) -> WaitlistBackend:
    if global_config.backend == BACKEND_HTTP:
        logger.info("Using HTTP backend at %s", global_config.api_base_url)
        return HttpWaitlistBackend(
            global_config.api_base_url or "",
            timeout=global_config.api_timeout_s,
        )

    if global_config.data_file is None:
        logger.warning("No data_file configured; starting with an empty waitlist")
        return InMemoryWaitlistBackend([])

    logger.info("Using in-memory backend loaded from %s", global_config.data_file)
    return InMemoryWaitlistBackend.from_json_file(global_config.data_file)


def create_dash_app(
    config_root: Path | str = Path("config"),
    env: Optional[Mapping[str, str]] = None,
    backend: Optional[WaitlistBackend] = None,
) -> Dash:
    config_root = Path(config_root)

    # 1) Load Config
    global_config = load_global_config(config_root, env=env)

    # 2) Initialize Service Layer
    service = WaitlistService(
        backend or build_backend(global_config),
        fetch_limit=global_config.fetch_limit,
    )

    # 3) App Context
    ctx = AppContext(
        config_root=config_root,
        global_config=global_config,
        service=service,
    )

    assets_path = Path(__file__).parent / "assets"

    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.FLATLY],
        assets_folder=str(assets_path),
        suppress_callback_exceptions=True,
    )
    app.title = global_config.ui_title

    app.layout = build_layout(ctx)

    # Register callbacks
    register_filter_callbacks(app, ctx)
    register_list_callbacks(app, ctx)
    register_action_callbacks(app, ctx)
    register_reports_callbacks(app, ctx)

    return app
