"""Derived progress data for charts and reports."""

from ot_tracker.progress.overview import (
    CaseloadOverview,
    DashboardStats,
    average_rom_degrees,
    build_overview,
    dashboard_stats,
    filter_by_patient,
    goal_status_counts,
)
from ot_tracker.progress.program import (
    DomainComparison,
    ProgramProgressReport,
    build_program_report,
    domain_trends,
    overall_average,
    pre_post_comparison,
    total_score_timeline,
)
from ot_tracker.progress.rom import (
    ROMProgressReport,
    build_rom_report,
    joint_progress,
    latest_assessment,
    latest_region_comparison,
    measured_joint_keys,
    radar_breakdown,
    rom_improvement,
    rom_timeline,
)

__all__ = [
    "CaseloadOverview",
    "DashboardStats",
    "DomainComparison",
    "ProgramProgressReport",
    "ROMProgressReport",
    "average_rom_degrees",
    "build_overview",
    "build_program_report",
    "build_rom_report",
    "dashboard_stats",
    "domain_trends",
    "filter_by_patient",
    "goal_status_counts",
    "joint_progress",
    "latest_assessment",
    "latest_region_comparison",
    "measured_joint_keys",
    "overall_average",
    "pre_post_comparison",
    "radar_breakdown",
    "rom_improvement",
    "rom_timeline",
    "total_score_timeline",
]
