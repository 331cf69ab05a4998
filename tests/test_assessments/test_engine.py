"""Tests for the assessment save path."""

import logging
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from ot_tracker.assessments import (
    IncompleteAssessmentError,
    ProgramAssessmentDraft,
    ROMAssessmentDraft,
    prune_measurements,
    save_program_assessment,
    save_rom_assessment,
    validate_program_completion,
    validate_rom_completion,
)
from ot_tracker.assessments.validation import (
    PROGRAM_INCOMPLETE_MESSAGE,
    ROM_NO_MEASUREMENT_MESSAGE,
    ROM_NO_REGION_MESSAGE,
)
from ot_tracker.instruments import ProgramDomain, ROMRegion
from ot_tracker.models.records import AssessmentStatus, AssessmentType, ProgramAssessment

NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


class TestProgramValidation:
    def test_complete_passes(self, complete_responses):
        validate_program_completion(complete_responses)

    def test_missing_listed(self, complete_responses):
        del complete_responses["q3"]
        complete_responses["q12"] = ""

        with pytest.raises(IncompleteAssessmentError) as exc_info:
            validate_program_completion(complete_responses)

        assert exc_info.value.message == PROGRAM_INCOMPLETE_MESSAGE
        assert exc_info.value.missing == ["q3", "q12"]

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            validate_program_completion({})

    def test_to_dict(self):
        error = IncompleteAssessmentError("msg", ["a"])
        assert error.to_dict() == {"message": "msg", "missing": ["a"]}


class TestROMValidation:
    def test_requires_region(self):
        with pytest.raises(IncompleteAssessmentError) as exc_info:
            validate_rom_completion([], {"hip_flexion_left": 100})
        assert exc_info.value.message == ROM_NO_REGION_MESSAGE
        assert exc_info.value.missing == ["selected_regions"]

    def test_requires_non_zero_measurement(self):
        with pytest.raises(IncompleteAssessmentError) as exc_info:
            validate_rom_completion(["hip"], {"hip_flexion_left": 0, "hip_flexion_right": ""})
        assert exc_info.value.message == ROM_NO_MEASUREMENT_MESSAGE

    def test_passes(self):
        validate_rom_completion(["hip"], {"hip_flexion_left": "95"})


class TestSaveProgramAssessment:
    def test_draft_skips_completeness(self):
        draft = ProgramAssessmentDraft(patient_id="p1", responses={"q1": 4, "q2": 5})

        record = save_program_assessment(draft, now=NOW)

        assert record.status == AssessmentStatus.IN_PROGRESS
        assert record.domain_averages[ProgramDomain.PLAY] == Decimal("4.50")
        assert record.domain_averages[ProgramDomain.SELF_CARE] is None
        assert record.total_score == 9
        assert record.created_at == NOW
        assert record.updated_at == NOW

    def test_complete_recomputes(self, complete_responses):
        draft = ProgramAssessmentDraft(
            patient_id="p1",
            type=AssessmentType.POST,
            status=AssessmentStatus.COMPLETE,
            responses=complete_responses,
        )

        record = save_program_assessment(draft, now=NOW)

        assert record.is_complete
        assert record.type == AssessmentType.POST
        assert all(v == Decimal("4.00") for v in record.domain_averages.values())
        assert record.total_score == 68

    def test_incomplete_complete_save_rejected(self, complete_responses, caplog):
        del complete_responses["q17"]
        draft = ProgramAssessmentDraft(
            patient_id="p1", status=AssessmentStatus.COMPLETE, responses=complete_responses
        )

        with caplog.at_level(logging.WARNING), pytest.raises(IncompleteAssessmentError) as exc_info:
            save_program_assessment(draft, now=NOW)

        assert exc_info.value.missing == ["q17"]
        assert "Rejected complete program assessment" in caplog.text

    def test_edit_keeps_identity(self, complete_responses):
        created = datetime(2024, 1, 1, tzinfo=timezone.utc)
        existing = ProgramAssessment(id="pe-1", patient_id="p1", created_at=created)
        draft = ProgramAssessmentDraft(patient_id="p1", responses=complete_responses)

        record = save_program_assessment(draft, existing=existing, now=NOW)

        assert record.id == "pe-1"
        assert record.created_at == created
        assert record.updated_at == NOW

    def test_draft_accepts_camel_case(self):
        draft = ProgramAssessmentDraft.model_validate(
            {"patientId": "p1", "status": "complete", "responses": {}}
        )
        assert draft.patient_id == "p1"
        assert draft.status == AssessmentStatus.COMPLETE


class TestPruneMeasurements:
    def test_drops_unselected_regions(self):
        measurements = {
            "shoulder_flexion_left": 150,
            "knee_flexion_left": 120,
            "lumbar_flexion": 60,
        }
        assert prune_measurements([ROMRegion.SHOULDER], measurements) == {"shoulder_flexion_left": 150}

    def test_keeps_unknown_keys(self):
        assert prune_measurements([ROMRegion.HIP], {"grip_strength": 20}) == {"grip_strength": 20}


class TestSaveROMAssessment:
    def test_draft(self):
        draft = ROMAssessmentDraft(
            patient_id="p1",
            selected_regions=["elbow"],
            measurements={"elbow_flexion_left": 120, "wrist_flexion_left": 60},
        )

        record = save_rom_assessment(draft, now=NOW)

        assert record.selected_regions == [ROMRegion.ELBOW]
        assert record.measurements == {"elbow_flexion_left": 120}
        assert record.created_at == NOW

    def test_complete_without_regions_rejected(self):
        draft = ROMAssessmentDraft(patient_id="p1", status=AssessmentStatus.COMPLETE)

        with pytest.raises(IncompleteAssessmentError) as exc_info:
            save_rom_assessment(draft, now=NOW)

        assert exc_info.value.missing == ["selected_regions"]

    def test_complete_checks_pruned_measurements(self):
        # only readings outside the selected region were entered
        draft = ROMAssessmentDraft(
            patient_id="p1",
            status=AssessmentStatus.COMPLETE,
            selected_regions=["hip"],
            measurements={"knee_flexion_left": 120},
        )

        with pytest.raises(IncompleteAssessmentError) as exc_info:
            save_rom_assessment(draft, now=NOW)

        assert exc_info.value.missing == ["measurements"]

    def test_complete(self):
        draft = ROMAssessmentDraft(
            patient_id="p1",
            status=AssessmentStatus.COMPLETE,
            selected_regions=["hip", "hip"],
            measurements={"hip_flexion_left": 110},
        )

        record = save_rom_assessment(draft, now=NOW)

        assert record.is_complete
        assert record.selected_regions == [ROMRegion.HIP]
