"""Completeness checks run before an assessment is saved as complete.

Scorers accept partial input; these checks only gate the "complete" status.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from ot_tracker.scoring.program_evaluation import missing_question_ids
from ot_tracker.scoring.values import to_number

PROGRAM_INCOMPLETE_MESSAGE = "Please answer all questions before submitting"
ROM_NO_REGION_MESSAGE = "Please select at least one body region to assess"
ROM_NO_MEASUREMENT_MESSAGE = "Please enter at least one ROM measurement"


class IncompleteAssessmentError(ValueError):
    """Raised when an assessment marked complete is missing required input."""

    def __init__(self, message: str, missing: Iterable[str] = ()):
        super().__init__(message)
        self.message = message
        self.missing = list(missing)

    def to_dict(self) -> dict:
        return {"message": self.message, "missing": self.missing}


def missing_program_responses(responses: Mapping[str, Any]) -> list[str]:
    """Question ids that still need an answer."""
    return missing_question_ids(responses)


def validate_program_completion(responses: Mapping[str, Any]) -> None:
    missing = missing_program_responses(responses)
    if missing:
        raise IncompleteAssessmentError(PROGRAM_INCOMPLETE_MESSAGE, missing)


def has_rom_measurements(measurements: Mapping[str, Any]) -> bool:
    return any(to_number(value) for value in measurements.values())


def validate_rom_completion(selected_regions: Iterable[Any], measurements: Mapping[str, Any]) -> None:
    """Require at least one selected region and one entered measurement."""
    if not list(selected_regions):
        raise IncompleteAssessmentError(ROM_NO_REGION_MESSAGE, ["selected_regions"])
    if not has_rom_measurements(measurements):
        raise IncompleteAssessmentError(ROM_NO_MEASUREMENT_MESSAGE, ["measurements"])
