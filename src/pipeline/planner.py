"""7-day preparation plan."""

import logging

logger = logging.getLogger(__name__)

PLAN_DAYS: tuple[str, ...] = ("Day 1-2", "Day 3-4", "Day 5", "Day 6", "Day 7")

_BASELINE_TASKS: dict[str, str] = {
    "Day 1-2": "Brush up on Aptitude & CS Fundamentals (OOP, DBMS, CN, OS).",
    "Day 3-4": "Focus on Data Structures & Algorithms (Arrays, Strings, Trees, Graphs).",
    "Day 5": "Project Deep Dive & Resume Walkthrough.",
    "Day 6": "Mock Interviews & Behavioral Questions.",
    "Day 7": "Final Revision & Cheat Sheets.",
}

_SYSTEM_DESIGN_SKILLS = ("System Design", "HLD")


def generate_plan(skills: dict[str, list[str]]) -> dict[str, list[str]]:
    """Build the plan skeleton and append skill-specific tasks.

    Tasks within a day keep append order, baseline first.
    """
    plan = {day: [_BASELINE_TASKS[day]] for day in PLAN_DAYS}

    web = skills.get("web", [])
    if web:
        plan["Day 1-2"].append(f"Revise Web Fundamentals: {', '.join(web[:3])}.")
        plan["Day 5"].append("Prepare to explain architecture of your Web Projects.")
    if skills.get("data"):
        plan["Day 1-2"].append("Practice complex SQL Queries and Normalization.")
    if any(s in _SYSTEM_DESIGN_SKILLS for s in skills.get("coreCS", [])):
        plan["Day 3-4"].append("Review High Level Design concepts (Scalability, Load Balancing).")

    logger.debug("Plan has %d tasks", sum(len(tasks) for tasks in plan.values()))
    return plan
