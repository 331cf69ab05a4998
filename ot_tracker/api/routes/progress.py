"""Progress report routes over caller-supplied assessment histories."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ot_tracker.models.records import (
    Goal,
    Patient,
    ProgramAssessment,
    ROMAssessment,
    SessionNote,
)
from ot_tracker.progress import (
    CaseloadOverview,
    ProgramProgressReport,
    ROMProgressReport,
    build_overview,
    build_program_report,
    build_rom_report,
    joint_progress,
)
from ot_tracker.progress.rom import JointProgressPoint

router = APIRouter(prefix="/progress", tags=["progress"])


class _Request(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProgramProgressRequest(_Request):
    assessments: list[ProgramAssessment] = Field(default_factory=list)


class ROMProgressRequest(_Request):
    assessments: list[ROMAssessment] = Field(default_factory=list)


class JointProgressRequest(ROMProgressRequest):
    key: str = Field(..., description="Measurement key, e.g. shoulder_flexion_left")


class OverviewRequest(_Request):
    patients: list[Patient] = Field(default_factory=list)
    program_assessments: list[ProgramAssessment] = Field(default_factory=list)
    rom_assessments: list[ROMAssessment] = Field(default_factory=list)
    goals: list[Goal] = Field(default_factory=list)
    session_notes: list[SessionNote] = Field(default_factory=list)
    patient_id: Optional[str] = None
    now: Optional[datetime] = None


@router.post("/program", response_model=ProgramProgressReport)
async def program_progress(request: ProgramProgressRequest):
    return build_program_report(request.assessments)


@router.post("/rom", response_model=ROMProgressReport)
async def rom_progress(request: ROMProgressRequest):
    return build_rom_report(request.assessments)


@router.post("/rom/joint", response_model=list[JointProgressPoint])
async def rom_joint_progress(request: JointProgressRequest):
    """Raw degrees over time for one measurement key."""
    return joint_progress(request.assessments, request.key)


@router.post("/overview", response_model=CaseloadOverview)
async def caseload_overview(request: OverviewRequest):
    """Dashboard counters and history series, optionally for one patient."""
    return build_overview(
        request.patients,
        request.program_assessments,
        request.rom_assessments,
        request.goals,
        request.session_notes,
        patient_id=request.patient_id,
        now=request.now,
    )
