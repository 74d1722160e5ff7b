"""Tests for live rescoring from skill confidence toggles."""

from datetime import datetime, timedelta

import pytest

from src.core.schemas import Analysis, ConfidenceLevel
from src.core.store import AnalysisStore, MemoryBackend
from src.pipeline.confidence import (
    apply_toggle,
    effective_status,
    focus_areas,
    live_score,
    skill_status,
    toggle_skill,
)

KNOW = ConfidenceLevel.KNOW
PRACTICE = ConfidenceLevel.PRACTICE

_T0 = datetime(2020, 6, 1, 10, 0)


def _analysis(base: int | None = 85, readiness: int | None = None, **kw: object) -> Analysis:
    defaults: dict[str, object] = {
        "id": "a-1",
        "created_at": _T0,
        "updated_at": _T0,
        "extracted_skills": {
            "coreCS": ["System Design"],
            "web": ["React", "Node", "Node.js"],
            "data": ["SQL"],
            "cloud": ["AWS"],
        },
        "base_score": base,
        "readiness_score": base if readiness is None else readiness,
    }
    defaults.update(kw)
    return Analysis(**defaults)  # type: ignore[arg-type]


def _apply(analysis: Analysis, skill: str) -> Analysis:
    """Toggle in memory the way a caller merges the returned fields."""
    update = toggle_skill(analysis, skill)
    return analysis.model_copy(update={
        "skill_confidence": update.skill_confidence,
        "readiness_score": update.readiness_score,
        "updated_at": update.updated_at,
    })


class TestStatus:
    def test_absent_is_unset(self) -> None:
        assert skill_status(_analysis(), "React") is ConfidenceLevel.UNSET

    def test_stored_value(self) -> None:
        a = _analysis(skill_confidence={"React": KNOW})
        assert skill_status(a, "React") is KNOW

    def test_unset_reads_as_practice(self) -> None:
        assert effective_status(ConfidenceLevel.UNSET) is PRACTICE
        assert effective_status(KNOW) is KNOW


class TestLiveScore:
    def test_empty_map(self) -> None:
        assert live_score(85, {}) == 85

    def test_sums_over_map(self) -> None:
        assert live_score(85, {"a": KNOW, "b": KNOW, "c": PRACTICE}) == 87

    def test_clamped_high(self) -> None:
        assert live_score(99, {"a": KNOW, "b": KNOW}) == 100

    def test_clamped_low(self) -> None:
        assert live_score(1, {"a": PRACTICE, "b": PRACTICE}) == 0

    def test_custom_step(self) -> None:
        assert live_score(50, {"a": KNOW}, step=5) == 55

    def test_clamped_to_max_score(self) -> None:
        assert live_score(78, {"a": KNOW, "b": KNOW}, max_score=80) == 80


class TestToggleSkill:
    def test_first_toggle_goes_to_know(self) -> None:
        update = toggle_skill(_analysis(), "React")
        assert update.skill_confidence == {"React": KNOW}
        assert update.readiness_score == 87

    def test_scenario_know_then_practice(self) -> None:
        a = _apply(_analysis(), "React")
        assert a.readiness_score == 87
        a = _apply(a, "React")
        assert a.skill_confidence["React"] is PRACTICE
        assert a.readiness_score == 83

    @pytest.mark.parametrize("start", [KNOW, PRACTICE])
    def test_double_toggle_restores(self, start: ConfidenceLevel) -> None:
        before = _apply(_analysis(), "SQL")
        before = before.model_copy(update={
            "skill_confidence": {**before.skill_confidence, "React": start},
        })
        before = before.model_copy(update={
            "readiness_score": live_score(85, before.skill_confidence),
        })
        after = _apply(_apply(before, "React"), "React")
        assert after.skill_confidence == before.skill_confidence
        assert after.readiness_score == before.readiness_score

    def test_recomputed_from_base_not_previous_score(self) -> None:
        drifted = _analysis(base=85, readiness=40, skill_confidence={"SQL": KNOW})
        update = toggle_skill(drifted, "React")
        assert update.readiness_score == 89

    def test_legacy_anchor(self) -> None:
        legacy = _analysis(base=None, readiness=70)
        assert toggle_skill(legacy, "AWS").readiness_score == 72

    def test_does_not_mutate_analysis(self) -> None:
        a = _analysis()
        toggle_skill(a, "React")
        assert a.skill_confidence == {}
        assert a.readiness_score == 85

    def test_uses_clock(self) -> None:
        stamp = _T0 + timedelta(hours=1)
        assert toggle_skill(_analysis(), "React", clock=lambda: stamp).updated_at == stamp

    def test_respects_max_score(self) -> None:
        assert toggle_skill(_analysis(base=80), "React", max_score=80).readiness_score == 80

    def test_default_clock_is_utc(self) -> None:
        assert toggle_skill(_analysis(), "React").updated_at.tzinfo is not None

    def test_bounds_under_many_toggles(self) -> None:
        a = _analysis(base=3)
        for skill in ("System Design", "React", "Node", "Node.js"):
            a = _apply(_apply(a, skill), skill)
        assert a.readiness_score == 0


class TestApplyToggle:
    @pytest.fixture
    def store(self) -> AnalysisStore:
        store = AnalysisStore(MemoryBackend())
        store.save(_analysis())
        return store

    def test_persists(self, store: AnalysisStore) -> None:
        updated = apply_toggle(store, "a-1", "React")
        assert updated is not None
        assert updated.readiness_score == 87
        reloaded = store.get_by_id("a-1")
        assert reloaded is not None
        assert reloaded.skill_confidence == {"React": KNOW}
        assert reloaded.readiness_score == 87
        assert reloaded.base_score == 85

    def test_sequence_through_store(self, store: AnalysisStore) -> None:
        apply_toggle(store, "a-1", "React")
        apply_toggle(store, "a-1", "SQL")
        updated = apply_toggle(store, "a-1", "React")
        assert updated is not None
        assert updated.skill_confidence == {"React": PRACTICE, "SQL": KNOW}
        assert updated.readiness_score == 85

    def test_stamps_updated_at(self, store: AnalysisStore) -> None:
        stamp = _T0 + timedelta(days=1)
        updated = apply_toggle(store, "a-1", "React", clock=lambda: stamp)
        assert updated is not None
        assert updated.updated_at == stamp
        assert updated.created_at == _T0

    def test_unknown_id(self, store: AnalysisStore) -> None:
        assert apply_toggle(store, "ghost", "React") is None

    def test_max_score_through_store(self) -> None:
        store = AnalysisStore(MemoryBackend())
        store.save(_analysis(base=90))
        updated = apply_toggle(store, "a-1", "React", max_score=90)
        assert updated is not None
        assert updated.readiness_score == 90


class TestFocusAreas:
    def test_defaults_to_first_skills(self) -> None:
        assert focus_areas(_analysis()) == ["System Design", "React", "Node"]

    def test_practice_skills_first(self) -> None:
        a = _analysis(skill_confidence={"SQL": PRACTICE, "React": KNOW, "AWS": PRACTICE})
        assert focus_areas(a) == ["SQL", "AWS"]

    def test_limit(self) -> None:
        assert focus_areas(_analysis(), limit=1) == ["System Design"]
