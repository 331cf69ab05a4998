"""Assessment save path: completeness validation and record building."""

from ot_tracker.assessments.engine import (
    ProgramAssessmentDraft,
    ROMAssessmentDraft,
    prune_measurements,
    save_program_assessment,
    save_rom_assessment,
)
from ot_tracker.assessments.validation import (
    IncompleteAssessmentError,
    missing_program_responses,
    validate_program_completion,
    validate_rom_completion,
)

__all__ = [
    "IncompleteAssessmentError",
    "ProgramAssessmentDraft",
    "ROMAssessmentDraft",
    "missing_program_responses",
    "prune_measurements",
    "save_program_assessment",
    "save_rom_assessment",
    "validate_program_completion",
    "validate_rom_completion",
]
