"""Stored record shapes: patients, assessments, goals and session notes.

Records are persisted by the caller's document store. Field names are
snake_case; the camelCase keys used by stored documents (``patientId``,
``selectedRegions``, ``createdAt``...) are accepted as aliases.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ot_tracker.instruments.program_evaluation import ProgramDomain
from ot_tracker.instruments.rom import ROMRegion

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class AssessmentType(str, Enum):
    PRE = "pre"
    POST = "post"


class AssessmentStatus(str, Enum):
    """Save state of an assessment. Only complete assessments feed progress views."""

    IN_PROGRESS = "in_progress"  # draft
    COMPLETE = "complete"


class GoalCategory(str, Enum):
    FUNCTIONAL = "functional"
    MOTOR = "motor"
    COGNITIVE = "cognitive"
    SOCIAL = "social"
    SELF_CARE = "self_care"
    OTHER = "other"

    @classmethod
    def _missing_(cls, value: object) -> Optional[GoalCategory]:
        if value == "selfCare":
            return cls.SELF_CARE
        return None


GOAL_CATEGORY_NAMES: dict[GoalCategory, str] = {
    GoalCategory.FUNCTIONAL: "Functional Skills",
    GoalCategory.MOTOR: "Motor Skills",
    GoalCategory.COGNITIVE: "Cognitive Skills",
    GoalCategory.SOCIAL: "Social/Behavioral",
    GoalCategory.SELF_CARE: "Self-Care",
    GoalCategory.OTHER: "Other",
}


class GoalStatus(str, Enum):
    ACTIVE = "active"
    ACHIEVED = "achieved"
    MODIFIED = "modified"
    DISCONTINUED = "discontinued"


class AttendanceStatus(str, Enum):
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"
    RESCHEDULED = "rescheduled"

    @classmethod
    def _missing_(cls, value: object) -> Optional[AttendanceStatus]:
        if value == "noShow":
            return cls.NO_SHOW
        return None


def _leading_int(value: Any) -> int:
    """Integer prefix of a form value ("45", "45.5", 45.0), or 0."""
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, (int, float)):
        return int(value)
    digits = ""
    for char in str(value).strip():
        if char.isdigit() or (char == "-" and not digits):
            digits += char
        else:
            break
    try:
        return int(digits)
    except ValueError:
        return 0


class RecordBase(BaseModel):
    """Common document fields."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def sort_key(self) -> datetime:
        return self.created_at or EPOCH


class Patient(RecordBase):
    first_name: str
    last_name: str
    date_of_birth: Optional[date] = None
    diagnosis: str = ""
    notes: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class ProgramAssessment(RecordBase):
    """Program evaluation record with its derived domain averages."""

    patient_id: str
    type: AssessmentType = AssessmentType.PRE
    status: AssessmentStatus = AssessmentStatus.IN_PROGRESS
    responses: dict[str, Any] = Field(default_factory=dict)
    domain_averages: dict[ProgramDomain, Optional[Decimal]] = Field(default_factory=dict)
    total_score: Optional[int | float] = None
    notes: str = ""

    @property
    def is_complete(self) -> bool:
        return self.status == AssessmentStatus.COMPLETE


class ROMAssessment(RecordBase):
    """Range-of-motion record: selected regions and raw angle readings."""

    patient_id: str
    type: AssessmentType = AssessmentType.PRE
    status: AssessmentStatus = AssessmentStatus.IN_PROGRESS
    selected_regions: list[ROMRegion] = Field(default_factory=list)
    measurements: dict[str, Any] = Field(default_factory=dict)
    notes: str = ""

    @field_validator("selected_regions")
    @classmethod
    def _dedupe_regions(cls, value: list[ROMRegion]) -> list[ROMRegion]:
        return list(dict.fromkeys(value))

    @property
    def is_complete(self) -> bool:
        return self.status == AssessmentStatus.COMPLETE


class Goal(RecordBase):
    patient_id: str
    title: str
    description: str = ""
    target_date: Optional[date] = None
    category: GoalCategory = GoalCategory.FUNCTIONAL
    status: GoalStatus = GoalStatus.ACTIVE
    measurable_objective: str = ""
    progress: int = Field(0, description="Percent toward the goal, 0-100")

    @field_validator("progress", mode="before")
    @classmethod
    def _parse_progress(cls, value: Any) -> int:
        return max(0, min(_leading_int(value), 100))

    @field_validator("target_date", mode="before")
    @classmethod
    def _blank_date(cls, value: Any) -> Any:
        return None if value == "" else value


class SessionNote(RecordBase):
    patient_id: str
    session_date: date
    duration: int = Field(0, description="Minutes")
    focus: str = ""
    activities: str = ""
    observations: str = ""
    progress: str = ""
    next_steps: str = ""
    attendance_status: AttendanceStatus = AttendanceStatus.COMPLETED

    @field_validator("duration", mode="before")
    @classmethod
    def _parse_duration(cls, value: Any) -> int:
        return max(_leading_int(value), 0)
