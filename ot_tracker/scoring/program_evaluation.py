"""Program evaluation scoring: domain averages and total score.

Domain averages are always recomputed from the full response set. A domain
without any answered question has no average (``None``) rather than 0, so an
unassessed domain is never reported as the worst score.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field

from ot_tracker.instruments.program_evaluation import (
    MAX_TOTAL_SCORE,
    PROGRAM_QUESTIONS,
    ProgramDomain,
    get_questions_by_domain,
)
from ot_tracker.scoring.values import quantize_2, to_decimal, whole_or_float


class ProgramEvaluationScore(BaseModel):
    """Scored program evaluation response set."""

    domain_averages: dict[ProgramDomain, Optional[Decimal]] = Field(default_factory=dict)
    total_score: int | float = 0
    max_total_score: int = MAX_TOTAL_SCORE
    answered_count: int = 0
    question_count: int = len(PROGRAM_QUESTIONS)
    is_complete: bool = False
    missing_question_ids: list[str] = Field(default_factory=list)


def _rating(responses: Mapping[str, Any], question_id: str) -> Optional[Decimal]:
    return to_decimal(responses.get(question_id))


def domain_average(responses: Mapping[str, Any], domain: ProgramDomain | str) -> Optional[Decimal]:
    """Mean rating of the answered questions of a domain, to two decimals.

    Args:
        responses: Question id -> rating. Missing, empty and non-numeric
            entries are ignored.
        domain: Domain to average.

    Returns:
        The mean as a two-place Decimal, or None if nothing in the domain
        was answered.
    """
    ratings = [
        rating
        for rating in (_rating(responses, q.id) for q in get_questions_by_domain(domain))
        if rating is not None
    ]
    if not ratings:
        return None
    return quantize_2(sum(ratings) / len(ratings))


def all_domain_averages(responses: Mapping[str, Any]) -> dict[ProgramDomain, Optional[Decimal]]:
    """Average for every domain, each independently None or a number."""
    return {domain: domain_average(responses, domain) for domain in ProgramDomain}


def answered_question_ids(responses: Mapping[str, Any]) -> list[str]:
    return [q.id for q in PROGRAM_QUESTIONS if _rating(responses, q.id) is not None]


def missing_question_ids(responses: Mapping[str, Any]) -> list[str]:
    return [q.id for q in PROGRAM_QUESTIONS if _rating(responses, q.id) is None]


def total_score(responses: Mapping[str, Any]) -> int | float:
    """Sum of answered ratings across the catalog questions."""
    total = sum(
        (rating for rating in (_rating(responses, q.id) for q in PROGRAM_QUESTIONS) if rating is not None),
        Decimal(0),
    )
    return whole_or_float(total)


def score_program_evaluation(responses: Mapping[str, Any]) -> ProgramEvaluationScore:
    """Score a (possibly partial) response set."""
    missing = missing_question_ids(responses)
    return ProgramEvaluationScore(
        domain_averages=all_domain_averages(responses),
        total_score=total_score(responses),
        answered_count=len(PROGRAM_QUESTIONS) - len(missing),
        is_complete=not missing,
        missing_question_ids=missing,
    )
