"""Likely interview questions drawn from a canned bank.

The candidate pool is deterministic for a given skill set; only the final
shuffle is random, and it draws from an injectable ``random.Random``.
"""

import logging
import random

from src.core.schemas import SKILL_CATEGORIES

logger = logging.getLogger(__name__)

QUESTION_BANK: dict[str, list[str]] = {
    "React": [
        "Explain the Virtual DOM and how it improves performance.",
        "What are React Hooks? Name three common hooks.",
        "Difference between State and Props.",
        "Explain the useEffect dependency array.",
    ],
    "Node.js": [
        "Explain the Event Loop in Node.js.",
        "Difference between process.nextTick() and setImmediate().",
        "How does Node.js handle concurrency?",
        "What is Middleware in Express?",
    ],
    "Java": [
        "Explain the difference between JDK, JRE, and JVM.",
        "What are the four pillars of OOP?",
        "Difference between Interface and Abstract Class.",
        "Explain Garbage Collection in Java.",
    ],
    "Python": [
        "Difference between list and tuple.",
        "Explain decorators in Python.",
        "What is the Global Interpreter Lock (GIL)?",
        "How is memory managed in Python?",
    ],
    "SQL": [
        "Explain the difference between DELETE and TRUNCATE.",
        "What are ACID properties?",
        "Explain different types of Joins.",
        "What is Indexing and how does it work?",
    ],
    "DSA": [
        "Explain Time and Space Complexity.",
        "Difference between Array and Linked List.",
        "How does a Hash Map work?",
        "Explain QuickSort algorithm.",
    ],
    "System Design": [
        "What is Load Balancing?",
        "Explain Horizontal vs Vertical Scaling.",
        "CAP Theorem explained.",
        "How would you design a URL shortener?",
    ],
}

FILLER_QUESTIONS: tuple[str, ...] = (
    "Explain a challenging bug you fixed.",
    "How do you handle tight deadlines?",
)


def matching_keys(skill: str) -> list[str]:
    """Bank keys equal to skill, or contained in it, case-insensitively."""
    skill_lower = skill.lower()
    return [key for key in QUESTION_BANK if key.lower() in skill_lower]


def candidate_pool(skills: dict[str, list[str]], min_pool: int = 5) -> list[str]:
    """Collect every bank question for the extracted skills.

    Duplicates are kept (``React`` and ``React.js`` both pull the React set).
    A pool smaller than min_pool gets the generic filler questions appended.
    """
    pool: list[str] = []
    for category in SKILL_CATEGORIES:
        for skill in skills.get(category, []):
            for key in matching_keys(skill):
                pool.extend(QUESTION_BANK[key])

    if len(pool) < min_pool:
        pool.extend(FILLER_QUESTIONS)
    return pool


def select_questions(
    skills: dict[str, list[str]],
    rng: random.Random | None = None,
    limit: int = 10,
    min_pool: int = 5,
) -> list[str]:
    """Return up to limit questions from a uniform shuffle of the pool.

    Args:
        skills: Output of extract_skills.
        rng: Random source; pass ``random.Random(seed)`` to pin the output.
        limit: Maximum number of questions.
        min_pool: Pool size below which filler questions are added.
    """
    rng = rng or random.Random()
    pool = candidate_pool(skills, min_pool)
    rng.shuffle(pool)
    selected = pool[:limit]
    logger.debug("Selected %d of %d candidate questions", len(selected), len(pool))
    return selected
