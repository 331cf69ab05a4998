"""Caseload overview: dashboard counters and history series across patients."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Optional, Sequence, TypeVar

from pydantic import BaseModel, Field

from ot_tracker.models.records import (
    Goal,
    GoalStatus,
    Patient,
    ProgramAssessment,
    RecordBase,
    ROMAssessment,
    SessionNote,
)
from ot_tracker.progress.program import TotalScorePoint, total_score_timeline
from ot_tracker.scoring.values import to_number

R = TypeVar("R", bound=RecordBase)


class DashboardStats(BaseModel):
    total_patients: int = 0
    assessments_this_month: int = 0
    active_goals: int = 0
    session_notes_count: int = 0


class AverageROMPoint(BaseModel):
    assessment_id: Optional[str] = None
    created_at: Optional[datetime] = None
    average_degrees: float


class CaseloadOverview(BaseModel):
    stats: DashboardStats = Field(default_factory=DashboardStats)
    goal_status_counts: dict[GoalStatus, int] = Field(default_factory=dict)
    total_scores: list[TotalScorePoint] = Field(default_factory=list)
    average_rom: list[AverageROMPoint] = Field(default_factory=list)


def filter_by_patient(records: Iterable[R], patient_id: Optional[str]) -> list[R]:
    """Records of one patient, or all records when patient_id is None."""
    if patient_id is None:
        return list(records)
    return [r for r in records if getattr(r, "patient_id", None) == patient_id]


def _month_start(now: datetime) -> datetime:
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def dashboard_stats(
    patients: Sequence[Patient],
    program_assessments: Iterable[ProgramAssessment],
    goals: Iterable[Goal],
    session_notes: Iterable[SessionNote],
    patient_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> DashboardStats:
    """Headline counters for the caseload, or for one patient when patient_id is set."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    month_start = _month_start(now)

    assessments = [a for a in filter_by_patient(program_assessments, patient_id) if a.is_complete]
    this_month = sum(1 for a in assessments if a.created_at is not None and a.created_at >= month_start)
    active_goals = sum(
        1 for g in filter_by_patient(goals, patient_id) if g.status == GoalStatus.ACTIVE
    )

    return DashboardStats(
        total_patients=len(patients) if patient_id is None else 1,
        assessments_this_month=this_month,
        active_goals=active_goals,
        session_notes_count=len(filter_by_patient(session_notes, patient_id)),
    )


def goal_status_counts(goals: Iterable[Goal]) -> dict[GoalStatus, int]:
    counts = {status: 0 for status in GoalStatus}
    for goal in goals:
        counts[goal.status] += 1
    return counts


def average_rom_degrees(assessment: ROMAssessment) -> float:
    """Mean of the raw numeric readings of an assessment, 0 when there are none."""
    values = [v for v in (to_number(value) for value in assessment.measurements.values()) if v is not None]
    return sum(values) / len(values) if values else 0.0


def build_overview(
    patients: Sequence[Patient],
    program_assessments: Iterable[ProgramAssessment],
    rom_assessments: Iterable[ROMAssessment],
    goals: Iterable[Goal],
    session_notes: Iterable[SessionNote],
    patient_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> CaseloadOverview:
    program_assessments = filter_by_patient(program_assessments, patient_id)
    goals = filter_by_patient(goals, patient_id)
    rom_history = sorted(filter_by_patient(rom_assessments, patient_id), key=lambda a: a.sort_key)

    return CaseloadOverview(
        stats=dashboard_stats(patients, program_assessments, goals, session_notes, patient_id, now),
        goal_status_counts=goal_status_counts(goals),
        total_scores=total_score_timeline(program_assessments),
        average_rom=[
            AverageROMPoint(
                assessment_id=a.id,
                created_at=a.created_at,
                average_degrees=average_rom_degrees(a),
            )
            for a in rom_history
        ],
    )
