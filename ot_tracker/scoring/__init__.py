"""Scoring for the program evaluation and range-of-motion instruments."""

from ot_tracker.scoring.program_evaluation import (
    ProgramEvaluationScore,
    all_domain_averages,
    answered_question_ids,
    domain_average,
    missing_question_ids,
    score_program_evaluation,
    total_score,
)
from ot_tracker.scoring.rom import (
    RegionComparison,
    RegionScore,
    ROMReading,
    ROMScore,
    ROMStatus,
    iter_readings,
    overall_rom_percentage,
    region_comparison,
    region_percentage,
    rom_percentage,
    rom_status,
    score_rom,
)

__all__ = [
    "ProgramEvaluationScore",
    "ROMReading",
    "ROMScore",
    "ROMStatus",
    "RegionComparison",
    "RegionScore",
    "all_domain_averages",
    "answered_question_ids",
    "domain_average",
    "iter_readings",
    "missing_question_ids",
    "overall_rom_percentage",
    "region_comparison",
    "region_percentage",
    "rom_percentage",
    "rom_status",
    "score_program_evaluation",
    "score_rom",
    "total_score",
]
