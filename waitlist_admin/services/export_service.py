from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

import pandas as pd

from waitlist_admin.core.applicant import Applicant, as_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AvailableField:
    key: str
    label: str
    category: str


AVAILABLE_FIELDS: List[AvailableField] = [
    AvailableField("fullName", "Full Name", "Personal"),
    AvailableField("email", "Email", "Personal"),
    AvailableField("phoneNumber", "Phone Number", "Personal"),
    AvailableField("age", "Age", "Personal"),
    AvailableField("sex", "Gender", "Personal"),
    AvailableField("maritalStatus", "Marital Status", "Personal"),
    AvailableField("hasDisability", "Has Disability", "Personal"),
    AvailableField("disabilityDetails", "Disability Details", "Personal"),
    AvailableField("digitalDevices", "Digital Devices", "Personal"),
    AvailableField("currentEmploymentStatus", "Current Employment", "Employment"),
    AvailableField("otherCurrentEmployment", "Other Current Employment", "Employment"),
    AvailableField("previousEmploymentStatus", "Previous Employment", "Employment"),
    AvailableField("otherPreviousEmployment", "Other Previous Employment", "Employment"),
    AvailableField("monthlyEarnings", "Monthly Earnings", "Employment"),
    AvailableField("hasComputerAccess", "Computer Access", "Technical"),
    AvailableField("weeklyCommitment", "Weekly Commitment", "Technical"),
    AvailableField("computerSkill", "Computer Skill", "Technical"),
    AvailableField("internetSkill", "Internet Skill", "Technical"),
    AvailableField("mediaSkill", "Media Skill", "Technical"),
    AvailableField("englishProficiency", "English Proficiency", "Technical"),
    AvailableField("amharicProficiency", "Amharic Proficiency", "Technical"),
    AvailableField("prevMasterCardMember", "Previous MasterCard Member", "Other"),
    AvailableField("doYouAcceptSafeguardingConducts", "Accepts Safeguarding Conducts", "Other"),
    AvailableField("educationLevel", "Education Level", "Education"),
    AvailableField("studySubject", "Study Subject", "Education"),
    AvailableField("region", "Region", "Location"),
    AvailableField("subcity", "Subcity", "Location"),
    AvailableField("woreda", "Woreda", "Location"),
    AvailableField("zone", "Zone", "Location"),
    AvailableField("batch", "Batch", "Program"),
    AvailableField("stage", "Stage", "Program"),
    AvailableField("createdAt", "Created At", "Meta"),
]

CATEGORY_ORDER = [
    "Personal",
    "Employment",
    "Technical",
    "Other",
    "Education",
    "Location",
    "Program",
    "Meta",
]

DEFAULT_SELECTED_FIELDS = ["fullName", "email", "currentEmploymentStatus", "batch", "stage"]
FALLBACK_EXPORT_FIELDS = ["fullName", "email", "batch", "stage"]

FIELD_LABELS: Dict[str, str] = {f.key: f.label for f in AVAILABLE_FIELDS}


def grouped_fields(fields: Sequence[AvailableField] = AVAILABLE_FIELDS) -> Dict[str, List[AvailableField]]:
    """Fields grouped by category, known categories first, others after in first-seen order."""
    groups: Dict[str, List[AvailableField]] = {}
    for f in fields:
        groups.setdefault(f.category, []).append(f)
    ordered = [c for c in CATEGORY_ORDER if c in groups]
    ordered += [c for c in groups if c not in CATEGORY_ORDER]
    return {c: groups[c] for c in ordered}


def export_headers(selected_fields: Optional[Sequence[str]]) -> List[str]:
    return list(selected_fields) if selected_fields else list(FALLBACK_EXPORT_FIELDS)


def _cell(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(_cell(v) for v in value)
    return as_text(value)


def build_export_rows(
    applicants: Sequence[Applicant],
    selected_fields: Optional[Sequence[str]],
) -> List[Dict[str, str]]:
    headers = export_headers(selected_fields)
    return [{key: _cell(a.get(key)) for key in headers} for a in applicants]


def to_csv(rows: Sequence[Dict[str, str]], selected_fields: Optional[Sequence[str]]) -> str:
    """
    Header line unquoted; every cell double-quoted with inner quotes doubled.
    """
    headers = export_headers(selected_fields)
    body = pd.DataFrame(list(rows), columns=headers).fillna("").to_csv(
        index=False, header=False, quoting=csv.QUOTE_ALL, lineterminator="\n"
    )
    return "\n".join([",".join(headers), body.rstrip("\n")]).rstrip("\n")


def export_filename(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return f"waitlist-{int(now.timestamp() * 1000)}.csv"


def export_applicants_csv(
    applicants: Sequence[Applicant],
    selected_fields: Optional[Sequence[str]],
) -> str:
    rows = build_export_rows(applicants, selected_fields)
    logger.info("Exporting %d applicants (%d fields)", len(rows), len(export_headers(selected_fields)))
    return to_csv(rows, selected_fields)


def preview_rows(
    applicants: Sequence[Applicant],
    selected_fields: Optional[Sequence[str]],
    limit: int = 5,
) -> List[Dict[str, str]]:
    return build_export_rows(list(applicants)[:limit], selected_fields)
