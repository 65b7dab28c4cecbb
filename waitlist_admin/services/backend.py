from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

import requests

from waitlist_admin.core.applicant import Applicant, applicants_from_records
from waitlist_admin.core.exceptions import BackendError
from waitlist_admin.core.stages import normalize_stage

logger = logging.getLogger(__name__)

DEFAULT_FETCH_LIMIT = 6000


@dataclass(frozen=True)
class MutationResult:
    """Outcome of one mutation call (per invocation, not per id)."""
    success: bool
    message: str = ""


class WaitlistBackend(ABC):
    """
    Abstract interface for the applicant data source (REST API, fixture file, ...).
    """

    @abstractmethod
    def list_applicants(self, limit: int = DEFAULT_FETCH_LIMIT) -> List[Applicant]:
        """Return the full applicant collection for one view session."""
        pass

    @abstractmethod
    def update_stage(self, ids: List[str], stage: str) -> MutationResult:
        pass

    @abstractmethod
    def delete_applicant(self, applicant_id: str) -> MutationResult:
        pass

    @abstractmethod
    def register_trainee(self, applicant_id: str) -> MutationResult:
        """Create a trainee account from a waitlist applicant."""
        pass


class InMemoryWaitlistBackend(WaitlistBackend):
    """
    Keeps raw applicant records in memory. Used for local runs and tests.
    """

    def __init__(self, records: Optional[Iterable[Mapping[str, Any]]] = None):
        self._records: List[Dict[str, Any]] = [dict(r) for r in (records or [])]
        self.registered_ids: List[str] = []

    @classmethod
    def from_json_file(cls, path: Path | str) -> InMemoryWaitlistBackend:
        path = Path(path)
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise BackendError(f"Could not read applicant file {path}: {e}") from e
        if isinstance(raw, dict):
            raw = raw.get("data", [])
        if not isinstance(raw, list):
            raise BackendError(f"Applicant file {path} must hold a JSON array")
        return cls(raw)

    def _find(self, applicant_id: str) -> Optional[Dict[str, Any]]:
        return next(
            (r for r in self._records if str(r.get("_id") or r.get("id")) == applicant_id),
            None,
        )

    def list_applicants(self, limit: int = DEFAULT_FETCH_LIMIT) -> List[Applicant]:
        return applicants_from_records(self._records[:limit])

    def update_stage(self, ids: List[str], stage: str) -> MutationResult:
        wanted = set(ids)
        updated = 0
        for rec in self._records:
            if str(rec.get("_id") or rec.get("id")) in wanted:
                rec["stage"] = normalize_stage(stage)
                updated += 1
        return MutationResult(True, f"Updated {updated} applicant{'s' if updated != 1 else ''}")

    def delete_applicant(self, applicant_id: str) -> MutationResult:
        rec = self._find(applicant_id)
        if rec is None:
            return MutationResult(False, f"Applicant {applicant_id} not found")
        self._records.remove(rec)
        return MutationResult(True, "Deleted successfully")

    def register_trainee(self, applicant_id: str) -> MutationResult:
        if self._find(applicant_id) is None:
            return MutationResult(False, f"Applicant {applicant_id} not found")
        self.registered_ids.append(applicant_id)
        return MutationResult(True, "Created successfully")


class HttpWaitlistBackend(WaitlistBackend):
    """Client for the applicant REST API"""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.base_url}/api/applicant{path}"

    @staticmethod
    def _message(response: Optional[requests.Response], default: str) -> str:
        if response is None:
            return default
        try:
            body = response.json()
        except ValueError:
            return default
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return default

    def _mutate(self, method: str, path: str, ok_message: str, **kwargs: Any) -> MutationResult:
        url = self._url(path)
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.warning("Waitlist %s %s failed: %s", method, url, e)
            return MutationResult(False, self._message(e.response, "Something went wrong"))
        return MutationResult(True, self._message(response, ok_message))

    def list_applicants(self, limit: int = DEFAULT_FETCH_LIMIT) -> List[Applicant]:
        url = self._url("")
        logger.info("Fetching waitlist applicants (limit=%d)", limit)
        try:
            response = self.session.get(
                url, params={"limit": limit, "page": 1}, timeout=self.timeout
            )
            response.raise_for_status()
            body = response.json()
        except requests.exceptions.RequestException as e:
            raise BackendError(f"Error querying applicant API: {e}") from e
        except ValueError as e:
            raise BackendError(f"Applicant API returned invalid JSON: {e}") from e

        records = body.get("data") if isinstance(body, dict) else body
        if not isinstance(records, list):
            raise BackendError("Applicant API response has no 'data' list")

        applicants = applicants_from_records(records)
        logger.info("Applicant API returned %d applicants", len(applicants))
        return applicants

    def update_stage(self, ids: List[str], stage: str) -> MutationResult:
        return self._mutate(
            "PUT", "/stage", "Successfully updated stage", json={"ids": list(ids), "stage": stage}
        )

    def delete_applicant(self, applicant_id: str) -> MutationResult:
        return self._mutate("DELETE", f"/{applicant_id}", "Deleted successfully")

    def register_trainee(self, applicant_id: str) -> MutationResult:
        return self._mutate("POST", f"/applicants/{applicant_id}/register", "Created successfully")
