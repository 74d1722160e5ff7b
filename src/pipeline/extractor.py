"""Table-driven skill extraction from job description text.

Each rule pairs a canonical keyword with its category and match mode.
Plain keywords match case-insensitively on ``\\b`` word boundaries.
Keywords that carry punctuation (``C++``, ``Node.js``, ``CI/CD``) match as
case-insensitive substrings, since ``\\b`` is not meaningful next to a
non-word character.

Text claimed by a substring keyword is blanked out before the whole-word
pass, so ``Node.js`` does not also yield ``Node`` or ``JS``. Dotted names
the table does not list (``Vue.js``) still yield their plain keyword.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum

from src.core.schemas import SKILL_CATEGORIES, empty_skills

logger = logging.getLogger(__name__)


class MatchMode(str, Enum):
    WHOLE_WORD = "whole_word"
    SUBSTRING = "substring"


@dataclass(frozen=True)
class SkillRule:
    category: str
    keyword: str
    mode: MatchMode

    def matches(self, text_lower: str) -> bool:
        needle = self.keyword.lower()
        if self.mode is MatchMode.SUBSTRING:
            return needle in text_lower
        pattern = r"\b" + re.escape(needle) + r"\b"
        return re.search(pattern, text_lower) is not None


_KEYWORDS: dict[str, list[str]] = {
    "coreCS": [
        "DSA", "Data Structures", "Algorithms", "OOP", "Object Oriented",
        "DBMS", "Database Management", "OS", "Operating Systems", "Networks",
        "Computer Networks", "System Design", "Low Level Design",
        "High Level Design", "LLD", "HLD",
    ],
    "languages": [
        "Java", "Python", "JavaScript", "JS", "TypeScript", "TS", "C++", "C#",
        "Golang", "Go", "Ruby", "Swift", "Kotlin", "Rust", "PHP",
    ],
    "web": [
        "React", "React.js", "Next.js", "Node", "Node.js", "Express", "Vue",
        "Angular", "HTML", "CSS", "Tailwind", "Bootstrap", "REST", "GraphQL",
        "API",
    ],
    "data": [
        "SQL", "MySQL", "PostgreSQL", "Postgres", "MongoDB", "Mongo", "Redis",
        "Cassandra", "Elasticsearch", "Kafka", "Spark", "Hadoop",
    ],
    "cloud": [
        "AWS", "Azure", "GCP", "Docker", "Kubernetes", "K8s", "CI/CD",
        "Jenkins", "GitHub Actions", "Terraform", "Linux", "Bash", "Shell",
    ],
    "testing": [
        "Selenium", "Cypress", "Playwright", "Jest", "Mocha", "JUnit",
        "PyTest", "Manual Testing",
    ],
}

DEFAULT_OTHER_SKILLS: tuple[str, ...] = (
    "Communication",
    "Problem Solving",
    "Basic Coding",
    "Projects",
)

# Word characters and spaces are safe for \b matching at both ends.
_BOUNDARY_SAFE = re.compile(r"^[\w ]+$")


def match_mode_for(keyword: str) -> MatchMode:
    """Pick the match mode a keyword needs."""
    if _BOUNDARY_SAFE.match(keyword):
        return MatchMode.WHOLE_WORD
    return MatchMode.SUBSTRING


SKILL_RULES: tuple[SkillRule, ...] = tuple(
    SkillRule(category=category, keyword=keyword, mode=match_mode_for(keyword))
    for category, keywords in _KEYWORDS.items()
    for keyword in keywords
)


def mask_claimed(text_lower: str, rules: tuple[SkillRule, ...]) -> str:
    """Blank out every occurrence of a substring-mode keyword.

    Spaces keep offsets stable and leave word boundaries on both sides.
    """
    masked = text_lower
    for rule in rules:
        if rule.mode is MatchMode.SUBSTRING:
            needle = rule.keyword.lower()
            masked = masked.replace(needle, " " * len(needle))
    return masked


def extract_skills(
    text: str | None,
    rules: tuple[SkillRule, ...] = SKILL_RULES,
) -> dict[str, list[str]]:
    """Classify text into the fixed skill categories.

    Args:
        text: Raw job description. None is treated as empty.
        rules: Rule table; defaults to the built-in dictionary.

    Returns:
        Mapping of every category to its canonical-cased, deduplicated
        matches, in rule-table order. When nothing matches at all,
        ``other`` holds DEFAULT_OTHER_SKILLS and every other category is
        empty.
    """
    text_lower = (text or "").lower()
    masked = mask_claimed(text_lower, rules)
    extracted = empty_skills()

    for rule in rules:
        if rule.category not in extracted:
            msg = f"rule for '{rule.keyword}' names unknown category '{rule.category}'"
            raise ValueError(msg)
        found = extracted[rule.category]
        haystack = text_lower if rule.mode is MatchMode.SUBSTRING else masked
        if rule.keyword not in found and rule.matches(haystack):
            found.append(rule.keyword)

    total = sum(len(skills) for skills in extracted.values())
    if total == 0:
        extracted["other"] = list(DEFAULT_OTHER_SKILLS)
        logger.debug("No skills matched - using default 'other' set")
    else:
        populated = [c for c in SKILL_CATEGORIES if extracted[c]]
        logger.debug("Extracted %d skills across %s", total, populated)

    return extracted
