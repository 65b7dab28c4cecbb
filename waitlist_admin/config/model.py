from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from waitlist_admin.services.backend import DEFAULT_FETCH_LIMIT
from waitlist_admin.services.export_service import DEFAULT_SELECTED_FIELDS

BACKEND_MEMORY = "memory"
BACKEND_HTTP = "http"
BACKENDS = (BACKEND_MEMORY, BACKEND_HTTP)


@dataclass
class GlobalConfig:
    """
    App-wide settings for the waitlist dashboard.

    - ui_title: browser/navbar title
    - subtitle: line shown under the navbar title
    - page_size: rows per page in the applicant list
    - auto_select_first: select the first visible applicant when nothing valid is selected
    - backend: "memory" (records from data_file) or "http" (REST API at api_base_url)
    - fetch_limit: max applicants fetched per view session
    - export_fields: fields pre-selected in the custom report
    """
    ui_title: str = "Waitlist Dashboard"
    subtitle: str = "Review, filter and move applicants through the pipeline"
    page_size: int = 7
    auto_select_first: bool = True
    backend: str = BACKEND_MEMORY
    api_base_url: Optional[str] = None
    api_timeout_s: float = 10.0
    data_file: Optional[Path] = None
    fetch_limit: int = DEFAULT_FETCH_LIMIT
    export_fields: List[str] = field(default_factory=lambda: list(DEFAULT_SELECTED_FIELDS))
