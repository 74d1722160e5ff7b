"""Orchestrator: composes the analysis pipeline into one Analysis record.

Data flow:
  1. Skill extraction
  2. Company classification
  3. Base readiness score
  4. 7-day plan
  5. Round mapping
  6. Question selection
  7. Assemble record (fresh id, timestamps, readiness = base, no confidence)

Persistence is the caller's job (see AnalysisStore.save).
"""

import logging
import random
import uuid
from collections.abc import Callable
from datetime import datetime

from src.core.config import Settings
from src.core.schemas import Analysis, utc_now
from src.pipeline.company import classify_company
from src.pipeline.extractor import extract_skills
from src.pipeline.planner import generate_plan
from src.pipeline.questions import select_questions
from src.pipeline.rounds import generate_round_mapping
from src.pipeline.scorer import score_readiness

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return str(uuid.uuid4())


def analyze_jd(
    text: str | None,
    role: str | None = None,
    company: str | None = None,
    settings: Settings | None = None,
    rng: random.Random | None = None,
    clock: Callable[[], datetime] = utc_now,
    id_factory: Callable[[], str] = _new_id,
) -> Analysis:
    """Run the full pipeline over one job description.

    Args:
        text: Job description. None is treated as empty.
        role: Target role. None is treated as empty.
        company: Company name. None is treated as empty.
        settings: Scoring and question settings; defaults when omitted.
        rng: Random source for question selection.
        clock: Timestamp source for createdAt/updatedAt.
        id_factory: Produces the record id.

    Returns:
        A new, unsaved Analysis.
    """
    settings = settings or Settings()
    text = text or ""
    role = role or ""
    company = company or ""

    skills = extract_skills(text)
    intel = classify_company(company, text)
    score = score_readiness(skills, text, role, company, settings.scoring)
    plan = generate_plan(skills)
    rounds = generate_round_mapping(intel.type, skills)
    questions = select_questions(
        skills,
        rng=rng,
        limit=settings.questions.limit,
        min_pool=settings.questions.min_pool,
    )

    now = clock()
    analysis = Analysis(
        id=id_factory(),
        created_at=now,
        updated_at=now,
        role=role,
        company=company,
        jd_text=text,
        extracted_skills=skills,
        base_score=score,
        readiness_score=score,
        skill_confidence={},
        company_intel=intel,
        plan=plan,
        round_mapping=rounds,
        questions=questions,
    )
    logger.info(
        "Analysis %s: score %d, %s, %d rounds, %d questions",
        analysis.id, score, intel.type.value, len(rounds), len(questions),
    )
    return analysis
