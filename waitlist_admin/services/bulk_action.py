from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from waitlist_admin.core.exceptions import UnknownStageError
from waitlist_admin.core.stages import STAGE_LABELS, is_canonical_stage, normalize_stage
from waitlist_admin.services.backend import MutationResult
from waitlist_admin.services.waitlist_service import WaitlistService

logger = logging.getLogger(__name__)


def _plural(n: int) -> str:
    return "" if n == 1 else "s"


def bulk_action_label(count: int) -> str:
    return f"Bulk Action for {count} Applicant{_plural(count)}"


@dataclass
class BulkAction:
    """
    Confirmation flow for moving every filtered applicant to one stage.

    - pending_stage: canonical stage awaiting confirmation (None = dialog closed)
    - last_result: outcome of the last confirmed attempt

    The dialog only closes after a successful update, so a failed attempt can
    be retried with the same targets. Requests already running are blocked by
    the confirm button, which the Dash callback disables while it runs.
    """

    pending_stage: Optional[str] = None
    last_result: Optional[MutationResult] = None

    @property
    def is_open(self) -> bool:
        return self.pending_stage is not None

    def can_use(self, ids: Sequence[str]) -> bool:
        return len(ids) > 0

    def request(self, stage: str) -> BulkAction:
        if not is_canonical_stage(stage):
            raise UnknownStageError(f"Unknown stage {stage!r}")
        self.pending_stage = normalize_stage(stage)
        self.last_result = None
        return self

    def cancel(self) -> BulkAction:
        self.pending_stage = None
        return self

    def confirmation_message(self, count: int) -> str:
        label = STAGE_LABELS.get(self.pending_stage or "", self.pending_stage or "")
        return (
            f"Are you sure you want to update {count} applicant{_plural(count)} "
            f"to “{label}”?"
        )

    def confirm(self, service: WaitlistService, ids: List[str]) -> Optional[MutationResult]:
        """Run the stage update once for ``ids``; returns None when nothing is pending."""
        if self.pending_stage is None or not self.can_use(ids):
            return None

        result = service.update_stage(list(ids), self.pending_stage)

        self.last_result = result
        if result.success:
            self.pending_stage = None
        return result

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pending_stage": self.pending_stage,
            "last_result": (
                {"success": self.last_result.success, "message": self.last_result.message}
                if self.last_result is not None
                else None
            ),
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> BulkAction:
        data = data or {}
        last = data.get("last_result")
        return cls(
            pending_stage=data.get("pending_stage") or None,
            last_result=(
                MutationResult(bool(last.get("success")), str(last.get("message") or ""))
                if isinstance(last, dict)
                else None
            ),
        )
