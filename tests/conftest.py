"""Pytest configuration and fixtures."""

from datetime import datetime, timezone

import pytest

from ot_tracker.instruments import PROGRAM_QUESTIONS
from ot_tracker.models.records import (
    AssessmentStatus,
    AssessmentType,
    ProgramAssessment,
    ROMAssessment,
)
from ot_tracker.scoring import all_domain_averages, total_score


def _make_responses(rating=4) -> dict:
    """Answer every catalog question with the same rating."""
    return {q.id: rating for q in PROGRAM_QUESTIONS}


def _make_program_assessment(
    rating=4,
    type=AssessmentType.PRE,
    status=AssessmentStatus.COMPLETE,
    created_at=None,
    patient_id="patient-1",
    id=None,
) -> ProgramAssessment:
    responses = _make_responses(rating)
    return ProgramAssessment(
        id=id,
        patient_id=patient_id,
        type=type,
        status=status,
        responses=responses,
        domain_averages=all_domain_averages(responses),
        total_score=total_score(responses),
        created_at=created_at,
    )


@pytest.fixture
def complete_responses():
    return _make_responses(4)


@pytest.fixture
def program_history():
    """One pre (all 3s) and one post (all 4s) evaluation, plus a draft."""
    return [
        _make_program_assessment(
            3, AssessmentType.PRE, created_at=datetime(2024, 1, 10, tzinfo=timezone.utc), id="pe-pre"
        ),
        _make_program_assessment(
            4, AssessmentType.POST, created_at=datetime(2024, 3, 10, tzinfo=timezone.utc), id="pe-post"
        ),
        _make_program_assessment(
            1,
            AssessmentType.POST,
            status=AssessmentStatus.IN_PROGRESS,
            created_at=datetime(2024, 3, 12, tzinfo=timezone.utc),
            id="pe-draft",
        ),
    ]


@pytest.fixture
def rom_pre():
    # shoulder 50% and 75% -> 63, elbow 50%; overall 58
    return ROMAssessment(
        id="rom-pre",
        patient_id="patient-1",
        type=AssessmentType.PRE,
        status=AssessmentStatus.COMPLETE,
        selected_regions=["shoulder", "elbow"],
        measurements={
            "shoulder_flexion_left": 90,
            "shoulder_flexion_right": 135,
            "elbow_flexion_left": 75,
        },
        created_at=datetime(2024, 1, 10, tzinfo=timezone.utc),
    )


@pytest.fixture
def rom_post():
    # shoulder 90% and 95% -> 93, elbow 100%; overall 95
    return ROMAssessment(
        id="rom-post",
        patient_id="patient-1",
        type=AssessmentType.POST,
        status=AssessmentStatus.COMPLETE,
        selected_regions=["shoulder", "elbow"],
        measurements={
            "shoulder_flexion_left": 162,
            "shoulder_flexion_right": 171,
            "elbow_flexion_left": 150,
        },
        created_at=datetime(2024, 3, 10, tzinfo=timezone.utc),
    )


@pytest.fixture
def make_responses():
    return _make_responses


@pytest.fixture
def make_program_assessment():
    return _make_program_assessment


@pytest.fixture
def client():
    """Test client over the full application."""
    from fastapi.testclient import TestClient

    from ot_tracker.api.app import create_app

    with TestClient(create_app()) as test_client:
        yield test_client
