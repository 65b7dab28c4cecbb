from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List

REJECTED = "rejected"
REGISTERED = "registered"
ELIGIBLE = "eligible"
APPROVED = "approved"
UNABLE_TO_REACH = "unable_to_reach"

CANONICAL_STAGES = (REJECTED, REGISTERED, ELIGIBLE, APPROVED, UNABLE_TO_REACH)


@dataclass(frozen=True)
class StageOption:
    value: str
    label: str


STAGE_OPTIONS: List[StageOption] = [
    StageOption(REJECTED, "Rejected/Not interested"),
    StageOption(REGISTERED, "Registered/Pending Review"),
    StageOption(ELIGIBLE, "Eligible"),
    StageOption(APPROVED, "Approved"),
    StageOption(UNABLE_TO_REACH, "Unable to reach"),
]

STAGE_LABELS: Dict[str, str] = {opt.value: opt.label for opt in STAGE_OPTIONS}

# Keys are already punctuation-stripped, lower-cased and space separated.
# "1".."5" are the legacy numeric stage codes.
STAGE_ALIASES: Dict[str, str] = {
    "1": REJECTED,
    "2": REGISTERED,
    "3": ELIGIBLE,
    "4": APPROVED,
    "5": UNABLE_TO_REACH,
    "rejected": REJECTED,
    "not interested": REJECTED,
    "registered": REGISTERED,
    "pending review": REGISTERED,
    "eligible": ELIGIBLE,
    "approved": APPROVED,
    "unable to reach": UNABLE_TO_REACH,
    "unreachable": UNABLE_TO_REACH,
}

_NON_ALNUM = re.compile(r"[^a-z0-9]", re.IGNORECASE)


def normalize_stage(value: object) -> str:
    """
    Map any historical or current spelling of a stage onto its canonical token.

    Unknown values fall back to their snake_case form; empty input gives "".
    """
    if value is None:
        return ""
    words = _NON_ALNUM.sub(" ", str(value)).lower().split()
    if not words:
        return ""
    key = " ".join(words)
    return STAGE_ALIASES.get(key, "_".join(words))


def is_canonical_stage(value: object) -> bool:
    return normalize_stage(value) in CANONICAL_STAGES


def stage_label(value: object) -> str:
    token = normalize_stage(value)
    return STAGE_LABELS.get(token, "" if value is None else str(value))
