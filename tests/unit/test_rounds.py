"""Tests for the interview round forecast."""

from src.core.schemas import CompanyType, empty_skills
from src.pipeline.rounds import generate_round_mapping


def _skills(**categories: list[str]) -> dict[str, list[str]]:
    skills = empty_skills()
    skills.update(categories)
    return skills


class TestEnterprise:
    def test_four_rounds_in_order(self) -> None:
        rounds = generate_round_mapping(CompanyType.ENTERPRISE, empty_skills())
        assert [r.title for r in rounds] == [
            "Online Assessment",
            "Technical Round 1",
            "Technical Round 2",
            "Managerial / HR",
        ]

    def test_dsa_variant(self) -> None:
        for skill in ("DSA", "Algorithms", "Data Structures"):
            rounds = generate_round_mapping(CompanyType.ENTERPRISE, _skills(coreCS=[skill]))
            assert rounds[1].description == "Data Structures & Algorithms (Trees, Graphs, DP)"

    def test_os_dbms_variant(self) -> None:
        rounds = generate_round_mapping(
            CompanyType.ENTERPRISE, _skills(coreCS=["System Design"]),
        )
        assert rounds[1].description == "Deep dive into OS/DBMS & Coding"

    def test_every_round_has_purpose(self) -> None:
        rounds = generate_round_mapping(CompanyType.ENTERPRISE, empty_skills())
        assert all(r.purpose for r in rounds)

    def test_accepts_plain_label(self) -> None:
        assert len(generate_round_mapping("Enterprise", empty_skills())) == 4  # type: ignore[arg-type]


class TestNonEnterprise:
    def test_three_rounds_for_startup_and_mid_size(self) -> None:
        for company_type in (CompanyType.STARTUP, CompanyType.MID_SIZE):
            rounds = generate_round_mapping(company_type, empty_skills())
            assert [r.title for r in rounds] == [
                "Screening / Machine Coding",
                "Technical Discussion",
                "Founder / Culture Fit",
            ]

    def test_web_variant(self) -> None:
        rounds = generate_round_mapping(CompanyType.STARTUP, _skills(web=["React"]))
        assert rounds[0].description == "Build a small feature (React/Node) in 1-2 hours"

    def test_generic_variant(self) -> None:
        rounds = generate_round_mapping(CompanyType.STARTUP, _skills(languages=["Go"]))
        assert rounds[0].description == "Take-home assignment or Live Coding"

    def test_dsa_ignored_outside_enterprise(self) -> None:
        with_dsa = generate_round_mapping(CompanyType.STARTUP, _skills(coreCS=["DSA"]))
        without = generate_round_mapping(CompanyType.STARTUP, empty_skills())
        assert with_dsa == without
