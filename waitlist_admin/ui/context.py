from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from waitlist_admin.config.model import GlobalConfig
from waitlist_admin.core.applicant import Applicant
from waitlist_admin.core.exceptions import BackendError
from waitlist_admin.services.waitlist_service import WaitlistService


@dataclass
class AppContext:
    """
    Holds shared state for the Dash app: config root, global config and the
    waitlist service. This is passed into layout + callback registration
    functions instead of using module-level globals.
    """
    config_root: Path
    global_config: GlobalConfig
    service: WaitlistService

    def load_applicants(self) -> Tuple[List[Applicant], Optional[str]]:
        """Snapshot of applicants, or an empty list plus the error text when the backend fails."""
        try:
            return self.service.get_applicants(), None
        except BackendError as e:
            return [], str(e)
