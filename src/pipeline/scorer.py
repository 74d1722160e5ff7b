"""Base readiness score for a fresh analysis.

Score = base + min(per_category * populated categories, category_cap)
        + company_bonus + role_bonus + long_jd_bonus, capped at max_score.

Pure: identical inputs always produce the identical score.
"""

import logging

from src.core.config import ScoringConfig

logger = logging.getLogger(__name__)


def populated_categories(skills: dict[str, list[str]]) -> int:
    """Count categories with at least one skill."""
    return sum(1 for members in skills.values() if members)


def score_readiness(
    skills: dict[str, list[str]],
    text: str | None,
    role: str | None,
    company: str | None,
    config: ScoringConfig | None = None,
) -> int:
    """Compute the base readiness score.

    Args:
        skills: Output of extract_skills.
        text: Job description text.
        role: Target role; any non-empty value earns the role bonus.
        company: Company name; any non-empty value earns the company bonus.
        config: Scoring weights. Defaults reproduce 35/5/30/10/10/10.

    Returns:
        Integer score between 0 and config.max_score.
    """
    config = config or ScoringConfig()

    score = config.base
    score += min(config.per_category * populated_categories(skills), config.category_cap)
    if company:
        score += config.company_bonus
    if role:
        score += config.role_bonus
    if text and len(text) > config.long_jd_threshold:
        score += config.long_jd_bonus

    score = max(0, min(score, config.max_score))
    logger.debug("Base readiness score: %d", score)
    return score
