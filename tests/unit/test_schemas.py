"""Tests for core schemas: Analysis, CompanyIntel, RoundStage, ConfidenceLevel."""

from datetime import datetime

import pytest
from pydantic import ValidationError

from src.core.schemas import (
    SKILL_CATEGORIES,
    Analysis,
    CompanyIntel,
    CompanyType,
    ConfidenceLevel,
    ConfidenceUpdate,
    RoundStage,
    empty_skills,
)


def _make_analysis(**overrides: object) -> Analysis:
    defaults: dict[str, object] = {
        "id": "a-1",
        "created_at": datetime(2026, 1, 1, 9, 30),
        "updated_at": datetime(2026, 1, 1, 9, 30),
        "role": "SDE-1",
        "company": "Google",
        "base_score": 80,
        "readiness_score": 80,
    }
    defaults.update(overrides)
    return Analysis(**defaults)  # type: ignore[arg-type]


class TestConfidenceLevel:
    def test_flip_know(self) -> None:
        assert ConfidenceLevel.KNOW.flipped() is ConfidenceLevel.PRACTICE

    def test_flip_practice(self) -> None:
        assert ConfidenceLevel.PRACTICE.flipped() is ConfidenceLevel.KNOW

    def test_flip_unset_reads_as_practice(self) -> None:
        assert ConfidenceLevel.UNSET.flipped() is ConfidenceLevel.KNOW


class TestCompanyIntel:
    def test_defaults(self) -> None:
        intel = CompanyIntel()
        assert intel.name == "Unknown Company"
        assert intel.type is CompanyType.STARTUP
        assert intel.size == "< 200 Employees"
        assert intel.focus == "Product & Speed"
        assert intel.industry == "Technology"

    def test_frozen(self) -> None:
        intel = CompanyIntel()
        with pytest.raises(ValidationError):
            intel.name = "Other"  # type: ignore[misc]

    def test_type_serializes_to_label(self) -> None:
        intel = CompanyIntel(type=CompanyType.MID_SIZE)
        assert intel.model_dump(mode="json")["type"] == "Mid-Size"


class TestRoundStage:
    def test_requires_all_fields(self) -> None:
        with pytest.raises(ValidationError):
            RoundStage(title="Only title")  # type: ignore[call-arg]


class TestAnalysis:
    def test_skills_default_to_all_categories(self) -> None:
        a = _make_analysis()
        assert tuple(a.extracted_skills) == SKILL_CATEGORIES
        assert all(v == [] for v in a.extracted_skills.values())

    def test_missing_categories_filled(self) -> None:
        a = _make_analysis(extracted_skills={"web": ["React"]})
        assert a.extracted_skills["web"] == ["React"]
        assert a.extracted_skills["data"] == []
        assert set(a.extracted_skills) == set(SKILL_CATEGORIES)

    def test_unknown_category_rejected(self) -> None:
        with pytest.raises(ValidationError, match="unknown skill categories"):
            _make_analysis(extracted_skills={"frontend": ["React"]})

    def test_duplicate_skills_removed(self) -> None:
        a = _make_analysis(extracted_skills={"web": ["React", "Node", "React"]})
        assert a.extracted_skills["web"] == ["React", "Node"]

    def test_none_strings_become_empty(self) -> None:
        a = _make_analysis(role=None, company=None, jd_text=None)
        assert (a.role, a.company, a.jd_text) == ("", "", "")

    def test_score_bounds(self) -> None:
        with pytest.raises(ValidationError):
            _make_analysis(readiness_score=101)
        with pytest.raises(ValidationError):
            _make_analysis(base_score=-1)

    def test_unset_not_storable(self) -> None:
        with pytest.raises(ValidationError, match="only 'know' or 'practice'"):
            _make_analysis(skill_confidence={"React": "unset"})

    def test_anchor_is_base_score(self) -> None:
        a = _make_analysis(base_score=70, readiness_score=76)
        assert a.anchor_score == 70

    def test_anchor_falls_back_to_readiness(self) -> None:
        a = _make_analysis(base_score=None, readiness_score=64)
        assert a.anchor_score == 64

    def test_all_skills_in_category_order(self) -> None:
        a = _make_analysis(extracted_skills={
            "testing": ["Jest"],
            "coreCS": ["DSA"],
            "web": ["React"],
        })
        assert a.all_skills() == ["DSA", "React", "Jest"]

    def test_record_uses_camel_case_keys(self) -> None:
        record = _make_analysis().to_record()
        assert set(record) == {
            "id", "createdAt", "updatedAt", "role", "company", "jdText",
            "extractedSkills", "baseScore", "readinessScore", "skillConfidence",
            "companyIntel", "plan", "roundMapping", "questions",
        }
        assert record["createdAt"] == "2026-01-01T09:30:00"

    def test_record_round_trip(self) -> None:
        a = _make_analysis(
            skill_confidence={"React": ConfidenceLevel.KNOW},
            round_mapping=[RoundStage(title="T", description="D", purpose="P")],
        )
        restored = Analysis.model_validate(a.to_record())
        assert restored == a
        assert restored.skill_confidence["React"] is ConfidenceLevel.KNOW


class TestConfidenceUpdate:
    def test_to_fields(self) -> None:
        update = ConfidenceUpdate(
            skill_confidence={"React": ConfidenceLevel.KNOW},
            readiness_score=87,
            updated_at=datetime(2026, 2, 3, 4, 5, 6),
        )
        assert update.to_fields() == {
            "skillConfidence": {"React": "know"},
            "readinessScore": 87,
            "updatedAt": "2026-02-03T04:05:06",
        }


def test_empty_skills_is_fresh() -> None:
    first = empty_skills()
    first["web"].append("React")
    assert empty_skills()["web"] == []
