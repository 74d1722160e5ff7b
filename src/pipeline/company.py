"""Heuristic employer classification from company name and JD text."""

import logging

from src.core.schemas import CompanyIntel, CompanyType

logger = logging.getLogger(__name__)

ENTERPRISE_COMPANIES: tuple[str, ...] = (
    "Google", "Amazon", "Microsoft", "Meta", "Facebook", "Apple", "Netflix",
    "TCS", "Infosys", "Wipro", "Accenture", "Cognizant", "IBM", "Oracle",
    "Cisco", "Intel", "Samsung", "Adobe", "Salesforce", "SAP", "Deloitte",
    "Goldman Sachs",
)

# Case-sensitive markers, checked against the raw text.
MID_SIZE_MARKERS: tuple[str, ...] = ("global", "multinational", "established")

# Checked in order without early exit: the last matching industry wins.
INDUSTRY_MARKERS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Fintech", ("Fintech", "financial")),
    ("HealthTech", ("Healthcare", "medical")),
    ("E-commerce", ("E-commerce", "retail")),
    ("SaaS", ("SaaS", "B2B")),
)

DEFAULT_INDUSTRY = "Technology"


def is_enterprise(company: str) -> bool:
    company_lower = company.lower()
    return any(name.lower() in company_lower for name in ENTERPRISE_COMPANIES)


def classify_industry(text: str) -> str:
    """Return the industry of the last marker group found in text."""
    industry = DEFAULT_INDUSTRY
    for label, markers in INDUSTRY_MARKERS:
        if any(marker in text for marker in markers):
            industry = label
    return industry


def classify_company(company: str | None, text: str | None) -> CompanyIntel:
    """Infer employer type, size, focus and industry.

    Without a company name nothing is inferred and the defaults are
    returned under the name "Unknown Company".
    """
    if not company:
        return CompanyIntel()

    text = text or ""
    if is_enterprise(company):
        fields = {
            "type": CompanyType.ENTERPRISE,
            "size": "2000+ Employees",
            "focus": "Scale & Fundamentals",
        }
    elif any(marker in text for marker in MID_SIZE_MARKERS):
        fields = {"type": CompanyType.MID_SIZE, "size": "200-2000 Employees"}
    else:
        fields = {}

    intel = CompanyIntel(name=company, industry=classify_industry(text), **fields)
    logger.debug("Classified '%s' as %s (%s)", company, intel.type.value, intel.industry)
    return intel
