"""Program evaluation progress: domain trends and pre/post comparison.

Only complete assessments are charted. Stored domain averages are used as-is;
a domain without an average is plotted as 0.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Iterable, Optional

from pydantic import BaseModel, Field

from ot_tracker.instruments.program_evaluation import (
    DOMAIN_NAMES,
    MAX_TOTAL_SCORE,
    ProgramDomain,
)
from ot_tracker.models.records import AssessmentType, ProgramAssessment
from ot_tracker.scoring.program_evaluation import total_score
from ot_tracker.scoring.values import quantize_2


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    FLAT = "flat"


class DomainTrendPoint(BaseModel):
    assessment_id: Optional[str] = None
    created_at: Optional[datetime] = None
    type: AssessmentType
    scores: dict[ProgramDomain, float]


class DomainComparison(BaseModel):
    domain: ProgramDomain
    label: str
    pre: float
    post: float
    improvement: float
    direction: Direction


class TotalScorePoint(BaseModel):
    assessment_id: Optional[str] = None
    created_at: Optional[datetime] = None
    type: AssessmentType
    total_score: int | float
    max_total_score: int = MAX_TOTAL_SCORE


class ProgramProgressReport(BaseModel):
    assessment_count: int = 0
    pre_count: int = 0
    post_count: int = 0
    has_comparison: bool = False
    overall_average: float = 0.0
    domain_trends: list[DomainTrendPoint] = Field(default_factory=list)
    comparison: list[DomainComparison] = Field(default_factory=list)
    total_scores: list[TotalScorePoint] = Field(default_factory=list)


def completed(assessments: Iterable[ProgramAssessment]) -> list[ProgramAssessment]:
    """Complete assessments in chronological order."""
    return sorted((a for a in assessments if a.is_complete), key=lambda a: a.sort_key)


def _domain_value(assessment: ProgramAssessment, domain: ProgramDomain) -> float:
    value = assessment.domain_averages.get(domain)
    return float(value) if value is not None else 0.0


def _round2(value: float) -> float:
    return float(quantize_2(value))


def domain_trends(assessments: Iterable[ProgramAssessment]) -> list[DomainTrendPoint]:
    return [
        DomainTrendPoint(
            assessment_id=a.id,
            created_at=a.created_at,
            type=a.type,
            scores={domain: _domain_value(a, domain) for domain in ProgramDomain},
        )
        for a in completed(assessments)
    ]


def _mean_domain(assessments: list[ProgramAssessment], domain: ProgramDomain) -> float:
    if not assessments:
        return 0.0
    return sum(_domain_value(a, domain) for a in assessments) / len(assessments)


def pre_post_comparison(assessments: Iterable[ProgramAssessment]) -> list[DomainComparison]:
    """Per-domain mean of all pre versus all post assessments.

    Means are taken over every complete assessment of each type, not just
    the latest one.
    """
    done = completed(assessments)
    pre = [a for a in done if a.type == AssessmentType.PRE]
    post = [a for a in done if a.type == AssessmentType.POST]

    comparison = []
    for domain in ProgramDomain:
        pre_avg = _mean_domain(pre, domain)
        post_avg = _mean_domain(post, domain)
        improvement = _round2(post_avg - pre_avg)
        if improvement > 0:
            direction = Direction.UP
        elif improvement < 0:
            direction = Direction.DOWN
        else:
            direction = Direction.FLAT
        comparison.append(
            DomainComparison(
                domain=domain,
                label=DOMAIN_NAMES[domain],
                pre=_round2(pre_avg),
                post=_round2(post_avg),
                improvement=improvement,
                direction=direction,
            )
        )
    return comparison


def overall_average(assessments: Iterable[ProgramAssessment]) -> float:
    """Mean across assessments of the four-domain mean, to two decimals."""
    done = completed(assessments)
    if not done:
        return 0.0
    per_assessment = [
        sum(_domain_value(a, domain) for domain in ProgramDomain) / len(ProgramDomain)
        for a in done
    ]
    return _round2(sum(per_assessment) / len(per_assessment))


def assessment_total(assessment: ProgramAssessment) -> int | float:
    if assessment.total_score is not None:
        return assessment.total_score
    return total_score(assessment.responses)


def total_score_timeline(assessments: Iterable[ProgramAssessment]) -> list[TotalScorePoint]:
    return [
        TotalScorePoint(
            assessment_id=a.id,
            created_at=a.created_at,
            type=a.type,
            total_score=assessment_total(a),
        )
        for a in completed(assessments)
    ]


def build_program_report(assessments: Iterable[ProgramAssessment]) -> ProgramProgressReport:
    done = completed(assessments)
    pre_count = sum(1 for a in done if a.type == AssessmentType.PRE)
    post_count = len(done) - pre_count
    return ProgramProgressReport(
        assessment_count=len(done),
        pre_count=pre_count,
        post_count=post_count,
        has_comparison=pre_count > 0 and post_count > 0,
        overall_average=overall_average(done),
        domain_trends=domain_trends(done),
        comparison=pre_post_comparison(done),
        total_scores=total_score_timeline(done),
    )
