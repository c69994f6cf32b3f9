"""Static vocabulary tables used by the scorers, parser and fallback.

Keep these as data: the scorers look terms up here rather than carrying
inline literals, so each list can be edited and tested on its own.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Callable

HARD_SKILLS = frozenset({
    "python", "react", "aws", "sql", "javascript",
    "node.js", "docker", "kubernetes", "mongodb", "postgresql",
})

JOB_TITLES = frozenset({
    "software engineer", "fullstack", "backend", "frontend", "developer", "architect",
})

EDUCATION_CERTS = frozenset({
    "bs", "ms", "phd", "certified", "aws certified", "azure", "google cloud",
})

SOFT_SKILLS = frozenset({
    "teamwork", "communication", "leadership", "problem solving",
    "collaboration", "agile", "scrum",
})


class KeywordTier(Enum):
    HARD_SKILL = 4
    JOB_TITLE = 3
    EDUCATION_CERT = 2
    SOFT_SKILL = 1

    @property
    def weight(self) -> int:
        return self.value


def _member_of(vocabulary: frozenset[str]) -> Callable[[str], bool]:
    return lambda keyword: keyword.strip().lower() in vocabulary


# First matching rule wins.
TIER_RULES: tuple[tuple[Callable[[str], bool], KeywordTier], ...] = (
    (_member_of(HARD_SKILLS), KeywordTier.HARD_SKILL),
    (_member_of(JOB_TITLES), KeywordTier.JOB_TITLE),
    (_member_of(EDUCATION_CERTS), KeywordTier.EDUCATION_CERT),
    (_member_of(SOFT_SKILLS), KeywordTier.SOFT_SKILL),
)


def classify_keyword(keyword: str) -> KeywordTier | None:
    """Return the weight tier for a keyword, or None if it is unweighted."""
    for predicate, tier in TIER_RULES:
        if predicate(keyword):
            return tier
    return None


ACTION_VERBS = (
    "led", "built", "improved", "developed", "created", "implemented", "designed",
    "optimized", "increased", "reduced", "delivered", "managed", "coordinated",
    "architected", "scaled",
)

BULLET_MARKERS = ("•", "-", "*")

IMPACT_PATTERN = re.compile(
    r"\d+%|\$\d+|\d+ users|\d+ customers|\d+ million|\d+ thousand",
    re.IGNORECASE,
)

# `.` stops at newlines, so the span ends at the first line break that is
# followed by a blank line, a letter, or the end of the text.
SKILLS_SECTION_PATTERN = re.compile(
    r"(skills|technologies|tools|languages).*?(?=\n\n|\n[A-Z]|\Z)",
    re.IGNORECASE,
)

STYLE_HEADER_PATTERN = re.compile(r"(experience|education|skills|projects)", re.IGNORECASE)
BULLET_CHAR_PATTERN = re.compile(r"[•\-*]")

SECTION_HEADERS = (
    "SUMMARY", "EXPERIENCE", "WORK EXPERIENCE", "EMPLOYMENT",
    "EDUCATION", "PROJECTS", "SKILLS", "TECHNICAL SKILLS",
    "CERTIFICATIONS", "AWARDS", "PUBLICATIONS", "LANGUAGES",
)

# Degraded mode only.
FALLBACK_VOCABULARY = (
    "javascript", "python", "java", "react", "node.js", "sql", "aws", "docker",
    "kubernetes", "machine learning", "ai", "data analysis", "agile", "scrum",
    "communication", "leadership", "problem solving", "teamwork", "analytics",
)
FALLBACK_DEFAULT_KEYWORDS = ("software development", "programming", "technology")
