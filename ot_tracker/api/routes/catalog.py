"""Assessment catalog routes: question set, rating scale and ROM movements."""

from fastapi import APIRouter
from pydantic import BaseModel

from ot_tracker.instruments import (
    DOMAIN_NAMES,
    MAX_RATING,
    MAX_TOTAL_SCORE,
    PROGRAM_QUESTIONS,
    RATING_SCALE,
    AssessmentQuestion,
    ProgramDomain,
    RatingLevel,
    ROMMeasurement,
    ROMRegion,
    get_measurements_by_region,
    get_questions_by_domain,
    region_label,
)

router = APIRouter(prefix="/catalog", tags=["catalog"])


class DomainInfo(BaseModel):
    id: ProgramDomain
    label: str
    question_ids: list[str]


class ProgramCatalog(BaseModel):
    questions: list[AssessmentQuestion]
    domains: list[DomainInfo]
    rating_scale: list[RatingLevel]
    max_rating: int
    max_total_score: int


class RegionInfo(BaseModel):
    id: ROMRegion
    label: str
    measurements: list[ROMMeasurement]


class ROMCatalog(BaseModel):
    regions: list[RegionInfo]


@router.get("/program-evaluation", response_model=ProgramCatalog)
async def program_evaluation_catalog():
    return ProgramCatalog(
        questions=list(PROGRAM_QUESTIONS),
        domains=[
            DomainInfo(
                id=domain,
                label=DOMAIN_NAMES[domain],
                question_ids=[q.id for q in get_questions_by_domain(domain)],
            )
            for domain in ProgramDomain
        ],
        rating_scale=list(RATING_SCALE),
        max_rating=MAX_RATING,
        max_total_score=MAX_TOTAL_SCORE,
    )


@router.get("/rom", response_model=ROMCatalog)
async def rom_catalog():
    """ROM movements grouped by body region, in display order."""
    return ROMCatalog(
        regions=[
            RegionInfo(
                id=region,
                label=region_label(region),
                measurements=get_measurements_by_region(region),
            )
            for region in ROMRegion
        ]
    )
