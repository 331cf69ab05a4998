"""Range-of-motion progress: timeline, pre/post region comparison and radar data."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from pydantic import BaseModel, Field

from ot_tracker.instruments.rom import ROMRegion, region_label
from ot_tracker.models.records import AssessmentType, ROMAssessment
from ot_tracker.scoring.rom import (
    RegionComparison,
    ROMStatus,
    overall_rom_percentage,
    region_comparison,
    region_percentage,
    rom_status,
)
from ot_tracker.scoring.values import round_half_up, to_number


class ROMTimelinePoint(BaseModel):
    assessment_id: Optional[str] = None
    created_at: Optional[datetime] = None
    type: AssessmentType
    percentage: int
    status: ROMStatus


class RadarPoint(BaseModel):
    region: ROMRegion
    label: str
    percentage: int


class ROMImprovement(BaseModel):
    pre_percentage: int
    post_percentage: int
    improvement: int
    improvement_percentage: int


class JointProgressPoint(BaseModel):
    assessment_id: Optional[str] = None
    created_at: Optional[datetime] = None
    degrees: float


class ROMProgressReport(BaseModel):
    assessment_count: int = 0
    timeline: list[ROMTimelinePoint] = Field(default_factory=list)
    region_comparison: list[RegionComparison] = Field(default_factory=list)
    radar: list[RadarPoint] = Field(default_factory=list)
    improvement: Optional[ROMImprovement] = None
    joints: list[str] = Field(default_factory=list)


def completed(assessments: Iterable[ROMAssessment]) -> list[ROMAssessment]:
    """Complete assessments in chronological order."""
    return sorted((a for a in assessments if a.is_complete), key=lambda a: a.sort_key)


def assessment_percentage(assessment: ROMAssessment) -> int:
    return overall_rom_percentage(assessment.measurements, assessment.selected_regions)


def rom_timeline(assessments: Iterable[ROMAssessment]) -> list[ROMTimelinePoint]:
    points = []
    for a in completed(assessments):
        percentage = assessment_percentage(a)
        points.append(
            ROMTimelinePoint(
                assessment_id=a.id,
                created_at=a.created_at,
                type=a.type,
                percentage=percentage,
                status=rom_status(percentage),
            )
        )
    return points


def latest_assessment(
    assessments: Iterable[ROMAssessment],
    assessment_type: Optional[AssessmentType] = None,
) -> Optional[ROMAssessment]:
    """Most recent complete assessment, optionally of one type.

    On equal timestamps the earliest record in the input wins.
    """
    candidates = [
        a for a in completed(assessments) if assessment_type is None or a.type == assessment_type
    ]
    return max(candidates, key=lambda a: a.sort_key) if candidates else None


def latest_region_comparison(assessments: Iterable[ROMAssessment]) -> list[RegionComparison]:
    """Region comparison between the latest pre and the latest post assessment."""
    assessments = list(assessments)
    pre = latest_assessment(assessments, AssessmentType.PRE)
    post = latest_assessment(assessments, AssessmentType.POST)
    if pre is None or post is None:
        return []
    return region_comparison(pre, post)


def radar_breakdown(assessment: Optional[ROMAssessment]) -> list[RadarPoint]:
    """Per-region percentage for each region the assessment selected."""
    if assessment is None:
        return []
    return [
        RadarPoint(
            region=region,
            label=region_label(region),
            percentage=region_percentage(assessment.measurements, region),
        )
        for region in assessment.selected_regions
    ]


def rom_improvement(assessments: Iterable[ROMAssessment]) -> Optional[ROMImprovement]:
    """Overall change from the latest pre to the latest post assessment."""
    assessments = list(assessments)
    pre = latest_assessment(assessments, AssessmentType.PRE)
    post = latest_assessment(assessments, AssessmentType.POST)
    if pre is None or post is None:
        return None

    pre_percentage = assessment_percentage(pre)
    post_percentage = assessment_percentage(post)
    improvement = post_percentage - pre_percentage
    relative = round_half_up(improvement / pre_percentage * 100) if pre_percentage > 0 else 0
    return ROMImprovement(
        pre_percentage=pre_percentage,
        post_percentage=post_percentage,
        improvement=improvement,
        improvement_percentage=relative,
    )


def measured_joint_keys(assessments: Iterable[ROMAssessment]) -> list[str]:
    """Sorted union of the measurement keys recorded across assessments."""
    keys: set[str] = set()
    for a in assessments:
        keys.update(a.measurements)
    return sorted(keys)


def joint_progress(assessments: Iterable[ROMAssessment], key: str) -> list[JointProgressPoint]:
    """Raw degrees over time for one measurement key.

    Assessments that did not record the key, or recorded a non-numeric value,
    are skipped.
    """
    points = []
    for a in sorted(assessments, key=lambda a: a.sort_key):
        degrees = to_number(a.measurements.get(key))
        if degrees is None:
            continue
        points.append(JointProgressPoint(assessment_id=a.id, created_at=a.created_at, degrees=degrees))
    return points


def build_rom_report(assessments: Iterable[ROMAssessment]) -> ROMProgressReport:
    assessments = list(assessments)
    done = completed(assessments)
    return ROMProgressReport(
        assessment_count=len(done),
        timeline=rom_timeline(done),
        region_comparison=latest_region_comparison(done),
        radar=radar_breakdown(latest_assessment(done)),
        improvement=rom_improvement(done),
        joints=measured_joint_keys(assessments),
    )
