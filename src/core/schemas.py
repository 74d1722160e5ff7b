"""Core data models for the placement prep engine.

Analysis records serialize with camelCase keys (``createdAt``,
``extractedSkills``...) so persisted blobs keep the field names of the
record format; Python code uses the snake_case attribute names.
"""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# Fixed category order; every extractedSkills mapping carries exactly these keys.
SKILL_CATEGORIES: tuple[str, ...] = (
    "coreCS",
    "languages",
    "web",
    "data",
    "cloud",
    "testing",
    "other",
)


class CompanyType(str, Enum):
    STARTUP = "Startup"
    MID_SIZE = "Mid-Size"
    ENTERPRISE = "Enterprise"


class ConfidenceLevel(str, Enum):
    """Per-skill self assessment.

    ``UNSET`` is never stored; a skill absent from the confidence map is
    unset, and an unset skill reads as ``PRACTICE`` when scoring.
    """

    UNSET = "unset"
    KNOW = "know"
    PRACTICE = "practice"

    def flipped(self) -> "ConfidenceLevel":
        """Return the opposite stored state (unset counts as practice)."""
        if self is ConfidenceLevel.KNOW:
            return ConfidenceLevel.PRACTICE
        return ConfidenceLevel.KNOW


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CompanyIntel(_CamelModel):
    """Heuristic classification of an employer."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    name: str = "Unknown Company"
    type: CompanyType = CompanyType.STARTUP
    size: str = "< 200 Employees"
    focus: str = "Product & Speed"
    industry: str = "Technology"


class RoundStage(_CamelModel):
    """One expected interview stage."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    title: str
    description: str
    purpose: str


def empty_skills() -> dict[str, list[str]]:
    """Return a mapping with every category present and empty."""
    return {category: [] for category in SKILL_CATEGORIES}


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


class Analysis(_CamelModel):
    """A preparation artifact derived from one job description.

    Everything except ``skill_confidence``, ``readiness_score`` and
    ``updated_at`` is fixed at creation. ``base_score`` may be missing on
    records written before it existed; see ``anchor_score``.
    """

    id: str
    created_at: datetime
    updated_at: datetime
    role: str = ""
    company: str = ""
    jd_text: str = ""
    extracted_skills: dict[str, list[str]] = Field(default_factory=empty_skills)
    base_score: int | None = Field(default=None, ge=0, le=100)
    readiness_score: int = Field(default=0, ge=0, le=100)
    skill_confidence: dict[str, ConfidenceLevel] = Field(default_factory=dict)
    company_intel: CompanyIntel = Field(default_factory=CompanyIntel)
    plan: dict[str, list[str]] = Field(default_factory=dict)
    round_mapping: list[RoundStage] = Field(default_factory=list)
    questions: list[str] = Field(default_factory=list)

    @field_validator("role", "company", "jd_text", mode="before")
    @classmethod
    def none_as_empty(cls, v: str | None) -> str:
        return v or ""

    @field_validator("extracted_skills")
    @classmethod
    def categories_fixed(cls, v: dict[str, list[str]]) -> dict[str, list[str]]:
        unknown = set(v) - set(SKILL_CATEGORIES)
        if unknown:
            msg = f"unknown skill categories: {sorted(unknown)}"
            raise ValueError(msg)
        return {
            category: list(dict.fromkeys(v.get(category, [])))
            for category in SKILL_CATEGORIES
        }

    @field_validator("skill_confidence")
    @classmethod
    def no_unset_entries(
        cls, v: dict[str, ConfidenceLevel],
    ) -> dict[str, ConfidenceLevel]:
        if any(level is ConfidenceLevel.UNSET for level in v.values()):
            msg = "skill_confidence stores only 'know' or 'practice'"
            raise ValueError(msg)
        return v

    @property
    def anchor_score(self) -> int:
        """Score that live rescoring starts from.

        Older records lack ``base_score``; their current readiness score
        stands in for it.
        """
        if self.base_score is None:
            return self.readiness_score
        return self.base_score

    def all_skills(self) -> list[str]:
        """Flatten extracted skills in category order."""
        return [
            skill
            for category in SKILL_CATEGORIES
            for skill in self.extracted_skills.get(category, [])
        ]

    def to_record(self) -> dict:
        """Serialize to the persisted JSON shape."""
        return self.model_dump(mode="json", by_alias=True)


class ConfidenceUpdate(BaseModel):
    """Fields changed by a confidence toggle, ready to persist."""

    model_config = ConfigDict(frozen=True)

    skill_confidence: dict[str, ConfidenceLevel]
    readiness_score: int = Field(ge=0, le=100)
    updated_at: datetime

    def to_fields(self) -> dict:
        """Serialize to the camelCase partial-record shape used by the store."""
        return {
            "skillConfidence": {k: v.value for k, v in self.skill_confidence.items()},
            "readinessScore": self.readiness_score,
            "updatedAt": self.updated_at.isoformat(),
        }
