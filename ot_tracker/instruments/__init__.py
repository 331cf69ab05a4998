"""Static assessment catalogs: program evaluation questions and ROM movements."""

from ot_tracker.instruments.program_evaluation import (
    DOMAIN_NAMES,
    MAX_RATING,
    MAX_TOTAL_SCORE,
    PROGRAM_QUESTIONS,
    RATING_SCALE,
    AssessmentQuestion,
    ProgramDomain,
    RatingLevel,
    get_questions_by_domain,
)
from ot_tracker.instruments.rom import (
    REGION_NAMES,
    ROM_MEASUREMENTS,
    NormalRange,
    ROMMeasurement,
    ROMRegion,
    ROMSide,
    get_measurements_by_region,
    measurement_key,
    region_label,
)

__all__ = [
    "AssessmentQuestion",
    "DOMAIN_NAMES",
    "MAX_RATING",
    "MAX_TOTAL_SCORE",
    "NormalRange",
    "PROGRAM_QUESTIONS",
    "ProgramDomain",
    "RATING_SCALE",
    "REGION_NAMES",
    "ROMMeasurement",
    "ROMRegion",
    "ROMSide",
    "ROM_MEASUREMENTS",
    "RatingLevel",
    "get_measurements_by_region",
    "get_questions_by_domain",
    "measurement_key",
    "region_label",
]
