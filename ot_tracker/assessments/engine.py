"""Assessment save path: validate, score and stamp a record for storage.

Called by the form endpoints for both "save as draft" and "mark complete".
Only the complete path runs the completeness checks; derived values are
recomputed on every save.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ot_tracker.assessments.validation import (
    IncompleteAssessmentError,
    validate_program_completion,
    validate_rom_completion,
)
from ot_tracker.instruments.rom import ROMRegion, get_measurements_by_region
from ot_tracker.models.records import (
    AssessmentStatus,
    AssessmentType,
    ProgramAssessment,
    ROMAssessment,
)
from ot_tracker.scoring.program_evaluation import all_domain_averages, total_score

logger = logging.getLogger(__name__)


class _DraftBase(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    patient_id: str
    type: AssessmentType = AssessmentType.PRE
    status: AssessmentStatus = AssessmentStatus.IN_PROGRESS
    notes: str = ""


class ProgramAssessmentDraft(_DraftBase):
    """Program evaluation form contents."""

    responses: dict[str, Any] = Field(default_factory=dict)


class ROMAssessmentDraft(_DraftBase):
    """ROM form contents."""

    selected_regions: list[ROMRegion] = Field(default_factory=list)
    measurements: dict[str, Any] = Field(default_factory=dict)


def _stamp(existing: Optional[BaseModel], now: Optional[datetime]) -> dict:
    now = now or datetime.now(timezone.utc)
    created_at = getattr(existing, "created_at", None) or now
    return {
        "id": getattr(existing, "id", None),
        "created_at": created_at,
        "updated_at": now,
    }


def save_program_assessment(
    draft: ProgramAssessmentDraft,
    existing: Optional[ProgramAssessment] = None,
    now: Optional[datetime] = None,
) -> ProgramAssessment:
    """Build the program evaluation record to persist.

    Args:
        draft: Form contents, including the requested status.
        existing: Stored record being edited, if any. Its id and creation
            time are kept.
        now: Save time (defaults to the current UTC time).

    Returns:
        ProgramAssessment with domain averages and total score recomputed
        from the full response set.

    Raises:
        IncompleteAssessmentError: status is complete but some questions
            are unanswered.
    """
    if draft.status == AssessmentStatus.COMPLETE:
        try:
            validate_program_completion(draft.responses)
        except IncompleteAssessmentError as e:
            logger.warning(
                "Rejected complete program assessment for patient %s: %d unanswered",
                draft.patient_id,
                len(e.missing),
            )
            raise

    record = ProgramAssessment(
        patient_id=draft.patient_id,
        type=draft.type,
        status=draft.status,
        responses=dict(draft.responses),
        domain_averages=all_domain_averages(draft.responses),
        total_score=total_score(draft.responses),
        notes=draft.notes,
        **_stamp(existing, now),
    )
    logger.info(
        "Saved program assessment patient=%s type=%s status=%s",
        record.patient_id,
        record.type.value,
        record.status.value,
    )
    return record


def prune_measurements(selected_regions: list[ROMRegion], measurements: dict[str, Any]) -> dict[str, Any]:
    """Drop readings of catalog movements whose region is not selected.

    Keys that do not belong to any catalog movement are kept as entered.
    """
    selected = set(selected_regions)
    dropped: set[str] = set()
    for region in ROMRegion:
        if region in selected:
            continue
        for definition in get_measurements_by_region(region):
            dropped.update(definition.keys)
    return {key: value for key, value in measurements.items() if key not in dropped}


def save_rom_assessment(
    draft: ROMAssessmentDraft,
    existing: Optional[ROMAssessment] = None,
    now: Optional[datetime] = None,
) -> ROMAssessment:
    """Build the ROM record to persist. Raises IncompleteAssessmentError like the program path."""
    measurements = prune_measurements(draft.selected_regions, draft.measurements)

    if draft.status == AssessmentStatus.COMPLETE:
        try:
            validate_rom_completion(draft.selected_regions, measurements)
        except IncompleteAssessmentError as e:
            logger.warning("Rejected complete ROM assessment for patient %s: %s", draft.patient_id, e.message)
            raise

    record = ROMAssessment(
        patient_id=draft.patient_id,
        type=draft.type,
        status=draft.status,
        selected_regions=draft.selected_regions,
        measurements=measurements,
        notes=draft.notes,
        **_stamp(existing, now),
    )
    logger.info(
        "Saved ROM assessment patient=%s type=%s status=%s regions=%d",
        record.patient_id,
        record.type.value,
        record.status.value,
        len(record.selected_regions),
    )
    return record
