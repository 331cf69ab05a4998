"""Program evaluation instrument: 17 questions across 4 developmental domains.

Each question is rated on a 5-point assistance scale:
  1 = Cannot do / Not observed
  2 = Does with significant assistance
  3 = Does with moderate assistance
  4 = Does with minimal assistance
  5 = Does independently
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class ProgramDomain(str, Enum):
    """Domain a program evaluation question belongs to."""

    PLAY = "play"
    SELF_CARE = "self_care"
    FINE_MOTOR = "fine_motor"
    GROSS_MOTOR = "gross_motor"


class AssessmentQuestion(BaseModel):
    """Single program evaluation item."""

    model_config = ConfigDict(frozen=True)

    id: str
    domain: ProgramDomain
    number: int
    text: str


class RatingLevel(BaseModel):
    """One step of the rating scale."""

    model_config = ConfigDict(frozen=True)

    value: int
    label: str


def _q(number: int, domain: ProgramDomain, text: str) -> AssessmentQuestion:
    return AssessmentQuestion(id=f"q{number}", domain=domain, number=number, text=text)


PROGRAM_QUESTIONS: tuple[AssessmentQuestion, ...] = (
    # Play (1-5)
    _q(1, ProgramDomain.PLAY, "Child engages in age-appropriate play activities"),
    _q(2, ProgramDomain.PLAY, "Child shows creativity and imagination during play"),
    _q(3, ProgramDomain.PLAY, "Child participates in cooperative play with peers"),
    _q(4, ProgramDomain.PLAY, "Child demonstrates sustained attention during play"),
    _q(5, ProgramDomain.PLAY, "Child shows interest in variety of play materials"),
    # Self-care (6-10)
    _q(6, ProgramDomain.SELF_CARE, "Child feeds self independently"),
    _q(7, ProgramDomain.SELF_CARE, "Child dresses self with minimal assistance"),
    _q(8, ProgramDomain.SELF_CARE, "Child maintains personal hygiene routines"),
    _q(9, ProgramDomain.SELF_CARE, "Child uses utensils appropriately"),
    _q(10, ProgramDomain.SELF_CARE, "Child manages toileting independently"),
    # Fine motor (11-14)
    _q(11, ProgramDomain.FINE_MOTOR, "Child demonstrates appropriate pencil grasp"),
    _q(12, ProgramDomain.FINE_MOTOR, "Child manipulates small objects with precision"),
    _q(13, ProgramDomain.FINE_MOTOR, "Child cuts with scissors along lines"),
    _q(14, ProgramDomain.FINE_MOTOR, "Child performs age-appropriate handwriting tasks"),
    # Gross motor (15-17)
    _q(15, ProgramDomain.GROSS_MOTOR, "Child demonstrates balance and coordination"),
    _q(16, ProgramDomain.GROSS_MOTOR, "Child participates in age-appropriate physical activities"),
    _q(17, ProgramDomain.GROSS_MOTOR, "Child demonstrates body awareness and motor planning"),
)

DOMAIN_NAMES: dict[ProgramDomain, str] = {
    ProgramDomain.PLAY: "Play",
    ProgramDomain.SELF_CARE: "Self-Care",
    ProgramDomain.FINE_MOTOR: "Fine Motor",
    ProgramDomain.GROSS_MOTOR: "Gross Motor",
}

RATING_SCALE: tuple[RatingLevel, ...] = (
    RatingLevel(value=1, label="Cannot do / Not observed"),
    RatingLevel(value=2, label="Significant assistance"),
    RatingLevel(value=3, label="Moderate assistance"),
    RatingLevel(value=4, label="Minimal assistance"),
    RatingLevel(value=5, label="Independent"),
)

MAX_RATING = RATING_SCALE[-1].value
MAX_TOTAL_SCORE = len(PROGRAM_QUESTIONS) * MAX_RATING


def get_questions_by_domain(domain: ProgramDomain | str) -> list[AssessmentQuestion]:
    """Return the catalog questions of a domain, in display order."""
    return [q for q in PROGRAM_QUESTIONS if q.domain == domain]
