from __future__ import annotations

import logging
from typing import Dict, List, Optional

from waitlist_admin.core.applicant import Applicant
from waitlist_admin.services.backend import DEFAULT_FETCH_LIMIT, MutationResult, WaitlistBackend

logger = logging.getLogger(__name__)


class WaitlistService:
    """
    Owns the applicant snapshot of a view session.

    The collection is fetched once and served from memory until a successful
    mutation (or an explicit ``invalidate``) drops it; the next read refetches.
    """

    def __init__(self, backend: WaitlistBackend, *, fetch_limit: int = DEFAULT_FETCH_LIMIT):
        self.backend = backend
        self.fetch_limit = fetch_limit
        self._snapshot: Optional[List[Applicant]] = None
        self._by_id: Dict[str, Applicant] = {}
        self.version = 0

    def get_applicants(self) -> List[Applicant]:
        if self._snapshot is None:
            self._snapshot = self.backend.list_applicants(self.fetch_limit)
            self._by_id = {a.id: a for a in self._snapshot}
            logger.info("Loaded %d applicants (snapshot v%d)", len(self._snapshot), self.version)
        return self._snapshot

    def get_applicant(self, applicant_id: Optional[str]) -> Optional[Applicant]:
        if not applicant_id:
            return None
        self.get_applicants()
        return self._by_id.get(applicant_id)

    def invalidate(self) -> None:
        self._snapshot = None
        self._by_id = {}
        self.version += 1

    def _after(self, action: str, result: MutationResult) -> MutationResult:
        if result.success:
            logger.info("%s succeeded: %s", action, result.message)
            self.invalidate()
        else:
            logger.warning("%s failed: %s", action, result.message)
        return result

    def update_stage(self, ids: List[str], stage: str) -> MutationResult:
        return self._after(
            f"Stage update of {len(ids)} applicant(s) to {stage!r}",
            self.backend.update_stage(list(ids), stage),
        )

    def delete_applicant(self, applicant_id: str) -> MutationResult:
        return self._after(f"Delete of {applicant_id}", self.backend.delete_applicant(applicant_id))

    def register_trainee(self, applicant_id: str) -> MutationResult:
        return self._after(
            f"Trainee registration of {applicant_id}",
            self.backend.register_trainee(applicant_id),
        )
