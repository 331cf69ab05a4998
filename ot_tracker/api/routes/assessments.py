"""Assessment scoring and save routes."""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ot_tracker.assessments import (
    IncompleteAssessmentError,
    ProgramAssessmentDraft,
    ROMAssessmentDraft,
    save_program_assessment,
    save_rom_assessment,
)
from ot_tracker.instruments import ROMRegion
from ot_tracker.models.records import ProgramAssessment, ROMAssessment
from ot_tracker.scoring import ProgramEvaluationScore, ROMScore, score_program_evaluation, score_rom


router = APIRouter(prefix="/assessments", tags=["assessments"])


class ProgramScoreRequest(BaseModel):
    responses: dict[str, Any] = Field(default_factory=dict)


class ROMScoreRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    selected_regions: list[ROMRegion] = Field(default_factory=list)
    measurements: dict[str, Any] = Field(default_factory=dict)


class SaveProgramRequest(ProgramAssessmentDraft):
    """Form contents plus the stored record when editing."""

    existing: Optional[ProgramAssessment] = None


class SaveROMRequest(ROMAssessmentDraft):
    existing: Optional[ROMAssessment] = None


@router.post("/program/score", response_model=ProgramEvaluationScore)
async def score_program(request: ProgramScoreRequest):
    """Score a program evaluation response set. Partial sets are accepted."""
    return score_program_evaluation(request.responses)


@router.post("/program", response_model=ProgramAssessment)
async def save_program(request: SaveProgramRequest):
    """Validate (when completing) and build the record to persist."""
    try:
        return save_program_assessment(request, existing=request.existing)
    except IncompleteAssessmentError as e:
        raise HTTPException(status_code=422, detail=e.to_dict())


@router.post("/rom/score", response_model=ROMScore)
async def score_rom_measurements(request: ROMScoreRequest):
    return score_rom(request.measurements, request.selected_regions)


@router.post("/rom", response_model=ROMAssessment)
async def save_rom(request: SaveROMRequest):
    try:
        return save_rom_assessment(request, existing=request.existing)
    except IncompleteAssessmentError as e:
        raise HTTPException(status_code=422, detail=e.to_dict())
