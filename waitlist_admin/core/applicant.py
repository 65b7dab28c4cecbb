from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

logger = logging.getLogger(__name__)


def as_text(value: Any) -> str:
    """None-safe string conversion used for every displayed/compared field."""
    if value is None:
        return ""
    return str(value)


@dataclass(frozen=True)
class Applicant:
    """
    A single waitlist applicant as returned by the backend.

    Fields:

    - id: stable identifier (backend ``_id``)
    - full_name / email: identifying fields used by the free-text search
    - age: numeric age as sent by the backend (may be missing or a string)
    - current_employment_status: free-text "status" field
    - batch: cohort label
    - stage: pipeline stage, stored loosely (see ``core.stages``)

    The full backend payload is kept in ``raw`` so exports can read any key.
    """

    id: str
    full_name: str = ""
    email: str = ""
    age: Any = None
    current_employment_status: str = ""
    batch: str = ""
    stage: str = ""
    created_at: Optional[str] = None
    has_computer_access: bool = False
    education_level: str = ""
    raw: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    def get(self, key: str, default: Any = None) -> Any:
        """Return a raw backend field by its API key (e.g. ``"fullName"``)."""
        return self.raw.get(key, default)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.raw)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Applicant:
        applicant_id = data.get("_id") or data.get("id")
        if not applicant_id:
            raise ValueError("Applicant record has no '_id' or 'id'")
        return cls(
            id=str(applicant_id),
            full_name=as_text(data.get("fullName")),
            email=as_text(data.get("email")),
            age=data.get("age"),
            current_employment_status=as_text(data.get("currentEmploymentStatus")),
            batch=as_text(data.get("batch")),
            stage=as_text(data.get("stage")),
            created_at=data.get("createdAt"),
            has_computer_access=bool(data.get("hasComputerAccess", False)),
            education_level=as_text(data.get("educationLevel")),
            raw=dict(data),
        )


def applicants_from_records(records: Iterable[Mapping[str, Any]]) -> List[Applicant]:
    """Build Applicants, skipping records without an identifier."""
    out: List[Applicant] = []
    for rec in records:
        try:
            out.append(Applicant.from_dict(rec))
        except ValueError:
            logger.warning("Skipping applicant record without id: %r", rec)
    return out


def batch_options(applicants: Iterable[Applicant]) -> List[str]:
    """Unique, trimmed, non-empty batch labels in sorted order."""
    values = {a.batch.strip() for a in applicants}
    values.discard("")
    return sorted(values)
