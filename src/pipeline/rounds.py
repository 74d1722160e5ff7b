"""Interview round forecast.

Enterprise employers get a four-stage OA -> TR1 -> TR2 -> HR loop; every
other company type gets a three-stage practical loop.
"""

from src.core.schemas import CompanyType, RoundStage

DSA_SKILLS = ("DSA", "Algorithms", "Data Structures")


def _enterprise_rounds(has_dsa: bool) -> list[RoundStage]:
    return [
        RoundStage(
            title="Online Assessment",
            description="Aptitude + 2 Medium DSA Problems",
            purpose="Filter candidates based on raw problem-solving speed and accuracy.",
        ),
        RoundStage(
            title="Technical Round 1",
            description=(
                "Data Structures & Algorithms (Trees, Graphs, DP)"
                if has_dsa
                else "Deep dive into OS/DBMS & Coding"
            ),
            purpose="Validate strong CS fundamentals and code quality.",
        ),
        RoundStage(
            title="Technical Round 2",
            description="System Design (LLD) + Project Deep Dive",
            purpose="Assess capability to build scalable components and understand trade-offs.",
        ),
        RoundStage(
            title="Managerial / HR",
            description="Behavioral + Culture Fit",
            purpose="Ensure alignment with company values and long-term retention.",
        ),
    ]


def _startup_rounds(has_web: bool) -> list[RoundStage]:
    return [
        RoundStage(
            title="Screening / Machine Coding",
            description=(
                "Build a small feature (React/Node) in 1-2 hours"
                if has_web
                else "Take-home assignment or Live Coding"
            ),
            purpose="Verify hands-on practical coding skills immediately.",
        ),
        RoundStage(
            title="Technical Discussion",
            description="Code Review + Architecture Discussion",
            purpose="Check depth of knowledge in your stack and decision-making process.",
        ),
        RoundStage(
            title="Founder / Culture Fit",
            description="Product thinking + Alignment",
            purpose="Assess ownership mindset and cultural fit for a fast-paced environment.",
        ),
    ]


def generate_round_mapping(
    company_type: CompanyType,
    skills: dict[str, list[str]],
) -> list[RoundStage]:
    """Return the ordered interview stages for a company type and skill set."""
    if company_type == CompanyType.ENTERPRISE:
        has_dsa = any(s in DSA_SKILLS for s in skills.get("coreCS", []))
        return _enterprise_rounds(has_dsa)
    return _startup_rounds(bool(skills.get("web")))
