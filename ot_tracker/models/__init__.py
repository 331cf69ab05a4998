"""Data models for OT Tracker."""

from ot_tracker.models.records import (
    GOAL_CATEGORY_NAMES,
    AssessmentStatus,
    AssessmentType,
    AttendanceStatus,
    Goal,
    GoalCategory,
    GoalStatus,
    Patient,
    ProgramAssessment,
    RecordBase,
    ROMAssessment,
    SessionNote,
)

__all__ = [
    "AssessmentStatus",
    "AssessmentType",
    "AttendanceStatus",
    "GOAL_CATEGORY_NAMES",
    "Goal",
    "GoalCategory",
    "GoalStatus",
    "Patient",
    "ProgramAssessment",
    "ROMAssessment",
    "RecordBase",
    "SessionNote",
]
