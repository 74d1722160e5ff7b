"""Live readiness rescoring from per-skill confidence toggles.

Each skill moves unset -> know -> practice -> know ... . An unset skill
reads as practice, so its first toggle lands on know.

The live score is always recomputed from the whole confidence map:

    readiness = clamp(anchor + sum(+step for know, -step for practice), 0, max_score)

where anchor is the analysis' base score. Toggling the same skill twice
restores both its state and the score.
"""

import logging
from collections.abc import Callable
from datetime import datetime

from src.core.schemas import Analysis, ConfidenceLevel, ConfidenceUpdate, utc_now
from src.core.store import AnalysisStore

logger = logging.getLogger(__name__)

DEFAULT_STEP = 2
DEFAULT_MAX_SCORE = 100


def skill_status(analysis: Analysis, skill: str) -> ConfidenceLevel:
    """Return the stored state for skill, UNSET if never toggled."""
    return analysis.skill_confidence.get(skill, ConfidenceLevel.UNSET)


def effective_status(level: ConfidenceLevel) -> ConfidenceLevel:
    """Map UNSET to its default read value, PRACTICE."""
    if level is ConfidenceLevel.UNSET:
        return ConfidenceLevel.PRACTICE
    return level


def live_score(
    anchor: int,
    confidence: dict[str, ConfidenceLevel],
    step: int = DEFAULT_STEP,
    max_score: int = DEFAULT_MAX_SCORE,
) -> int:
    """Recompute the readiness score from the anchor and the full map."""
    delta = 0
    for level in confidence.values():
        if level is ConfidenceLevel.KNOW:
            delta += step
        elif level is ConfidenceLevel.PRACTICE:
            delta -= step
    return max(0, min(max_score, anchor + delta))


def toggle_skill(
    analysis: Analysis,
    skill: str,
    step: int = DEFAULT_STEP,
    clock: Callable[[], datetime] = utc_now,
    max_score: int = DEFAULT_MAX_SCORE,
) -> ConfidenceUpdate:
    """Flip one skill and return the fields to persist.

    The analysis itself is left untouched.
    """
    current = effective_status(skill_status(analysis, skill))
    confidence = {**analysis.skill_confidence, skill: current.flipped()}
    score = live_score(analysis.anchor_score, confidence, step, max_score)
    logger.debug(
        "Toggled '%s' to %s: readiness %d -> %d",
        skill, confidence[skill].value, analysis.readiness_score, score,
    )
    return ConfidenceUpdate(
        skill_confidence=confidence,
        readiness_score=score,
        updated_at=clock(),
    )


def apply_toggle(
    store: AnalysisStore,
    analysis_id: str,
    skill: str,
    step: int = DEFAULT_STEP,
    clock: Callable[[], datetime] = utc_now,
    max_score: int = DEFAULT_MAX_SCORE,
) -> Analysis | None:
    """Read an analysis, toggle skill, and write the result back.

    Returns the updated analysis, or None if the id is unknown or the
    write fails.
    """
    analysis = store.get_by_id(analysis_id)
    if analysis is None:
        logger.info("Cannot toggle '%s': analysis '%s' not found", skill, analysis_id)
        return None
    update = toggle_skill(analysis, skill, step, clock, max_score)
    return store.update(analysis_id, update.to_fields())


def focus_areas(analysis: Analysis, limit: int = 3) -> list[str]:
    """Skills to work on next.

    Skills marked practice come first, in the order they were toggled; if
    none are marked, the first extracted skills stand in.
    """
    practice = [
        skill for skill, level in analysis.skill_confidence.items()
        if level is ConfidenceLevel.PRACTICE
    ]
    if practice:
        return practice[:limit]
    return analysis.all_skills()[:limit]
