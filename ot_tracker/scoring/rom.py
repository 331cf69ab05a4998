"""Range-of-motion scoring.

A reading is expressed as a percentage of the movement's normal maximum,
clamped at 100 (hypermobility is not represented). Aggregates are unweighted
means over individual readings: a bilateral movement contributes one reading
per measured side, so regions with more tracked movements weigh more.

Status buckets (inclusive lower bounds):
  >= 90  normal
  >= 75  mild
  >= 50  moderate
  <  50  severe
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any, Iterable, Iterator, Mapping, Optional, Sequence

from pydantic import BaseModel, Field, computed_field

from ot_tracker.instruments.rom import (
    ROM_MEASUREMENTS,
    ROMMeasurement,
    ROMRegion,
    ROMSide,
    get_measurements_by_region,
    measurement_key,
    region_label,
)
from ot_tracker.models.records import ROMAssessment
from ot_tracker.scoring.values import round_half_up, to_number


class ROMStatus(str, Enum):
    NORMAL = "normal"
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"


# (lower bound, status), highest first
STATUS_THRESHOLDS: tuple[tuple[int, ROMStatus], ...] = (
    (90, ROMStatus.NORMAL),
    (75, ROMStatus.MILD),
    (50, ROMStatus.MODERATE),
)


class ROMReading(BaseModel):
    """One scored measurement."""

    key: str
    measurement_id: str
    region: ROMRegion
    movement: str
    side: Optional[ROMSide] = None
    degrees: float
    normal_max: float
    percentage: int
    status: ROMStatus


class RegionScore(BaseModel):
    region: ROMRegion
    label: str
    percentage: int
    status: ROMStatus
    reading_count: int


class RegionComparison(BaseModel):
    """Pre/post percentage for one region present in both assessments."""

    region: ROMRegion
    label: str
    pre: int
    post: int

    @computed_field
    @property
    def change(self) -> int:
        return self.post - self.pre


class ROMScore(BaseModel):
    """Scored ROM measurement set."""

    overall_percentage: int = 0
    overall_status: ROMStatus = ROMStatus.SEVERE
    reading_count: int = 0
    regions: list[RegionScore] = Field(default_factory=list)
    readings: list[ROMReading] = Field(default_factory=list)


def rom_percentage(measured_degrees: Any, normal_max: Any) -> int:
    """Percentage of normal range, clamped at 100.

    Returns 0 when the measurement is absent or zero, or when the normal
    maximum is missing or zero (e.g. elbow and knee extension).
    """
    measured = to_number(measured_degrees)
    maximum = to_number(normal_max)
    if not measured or not maximum:
        return 0
    ratio = min(measured / maximum * 100, 100)
    if not math.isfinite(ratio):
        return 0
    return round_half_up(ratio)


def rom_status(percentage: float) -> ROMStatus:
    for lower_bound, status in STATUS_THRESHOLDS:
        if percentage >= lower_bound:
            return status
    return ROMStatus.SEVERE


def _sides(measurement: ROMMeasurement) -> list[Optional[ROMSide]]:
    if measurement.bilateral:
        return [ROMSide.LEFT, ROMSide.RIGHT]
    return [None]


def iter_readings(
    measurements: Mapping[str, Any],
    regions: Iterable[ROMRegion | str],
    catalog: Sequence[ROMMeasurement] = ROM_MEASUREMENTS,
) -> Iterator[ROMReading]:
    """Yield a reading for every present measurement of the given regions.

    A measurement is present when its key holds a non-zero number.
    """
    for region in regions:
        for definition in get_measurements_by_region(region, catalog):
            for side in _sides(definition):
                key = measurement_key(definition.id, side)
                degrees = to_number(measurements.get(key))
                if not degrees:
                    continue
                percentage = rom_percentage(degrees, definition.normal_range.max)
                yield ROMReading(
                    key=key,
                    measurement_id=definition.id,
                    region=definition.region,
                    movement=definition.movement,
                    side=side,
                    degrees=degrees,
                    normal_max=definition.normal_range.max,
                    percentage=percentage,
                    status=rom_status(percentage),
                )


def _mean_percentage(readings: Iterable[ROMReading]) -> int:
    total = 0
    count = 0
    for reading in readings:
        total += reading.percentage
        count += 1
    return round_half_up(total / count) if count else 0


def region_percentage(
    measurements: Mapping[str, Any],
    region: ROMRegion | str,
    catalog: Sequence[ROMMeasurement] = ROM_MEASUREMENTS,
) -> int:
    """Unweighted mean percentage of the present readings of one region."""
    return _mean_percentage(iter_readings(measurements, [region], catalog))


def overall_rom_percentage(
    measurements: Mapping[str, Any],
    selected_regions: Iterable[ROMRegion | str],
    catalog: Sequence[ROMMeasurement] = ROM_MEASUREMENTS,
) -> int:
    """Unweighted mean percentage across every present reading of the selected regions.

    Returns 0 when nothing in the selected regions was measured.
    """
    return _mean_percentage(iter_readings(measurements, selected_regions, catalog))


def region_comparison(
    pre: ROMAssessment,
    post: ROMAssessment,
    catalog: Sequence[ROMMeasurement] = ROM_MEASUREMENTS,
) -> list[RegionComparison]:
    """Compare per-region percentages over the regions both assessments selected.

    Regions selected on only one side are left out; there is no imputation.
    """
    post_regions = set(post.selected_regions)
    return [
        RegionComparison(
            region=region,
            label=region_label(region),
            pre=region_percentage(pre.measurements, region, catalog),
            post=region_percentage(post.measurements, region, catalog),
        )
        for region in pre.selected_regions
        if region in post_regions
    ]


def _known_regions(regions: Iterable[ROMRegion | str]) -> list[ROMRegion]:
    known = {region.value for region in ROMRegion}
    values = [getattr(region, "value", region) for region in regions]
    return [ROMRegion(value) for value in dict.fromkeys(values) if value in known]


def score_rom(
    measurements: Mapping[str, Any],
    selected_regions: Iterable[ROMRegion | str],
    catalog: Sequence[ROMMeasurement] = ROM_MEASUREMENTS,
) -> ROMScore:
    """Score a measurement set over the selected regions. Unknown regions are skipped."""
    regions = _known_regions(selected_regions)
    readings = list(iter_readings(measurements, regions, catalog))

    region_scores = []
    for region in regions:
        region_readings = [r for r in readings if r.region == region]
        percentage = _mean_percentage(region_readings)
        region_scores.append(
            RegionScore(
                region=region,
                label=region_label(region),
                percentage=percentage,
                status=rom_status(percentage),
                reading_count=len(region_readings),
            )
        )

    overall = _mean_percentage(readings)
    return ROMScore(
        overall_percentage=overall,
        overall_status=rom_status(overall),
        reading_count=len(readings),
        regions=region_scores,
        readings=readings,
    )
