"""Resumeworded-style ATS scorer.

Blends keyword coverage with writing-style signals: bullet brevity, action
verbs, quantified impact and keywords listed in a skills block. The weights
below are empirical and must stay as they are.
"""

from __future__ import annotations

from dataclasses import dataclass

from ats_tailor.models.scoring import ResumewordedBreakdown, ScoreResult, ScoringMethod
from ats_tailor.scoring.text import contains, matched_keywords, percentage, round_half_up
from ats_tailor.scoring.vocabulary import (
    ACTION_VERBS,
    BULLET_CHAR_PATTERN,
    BULLET_MARKERS,
    IMPACT_PATTERN,
    SKILLS_SECTION_PATTERN,
    STYLE_HEADER_PATTERN,
)

WEIGHTS = {
    "keyword": 0.30,
    "impact": 0.25,
    "brevity": 0.20,
    "skills": 0.15,
    "style": 0.10,
}

IDEAL_BULLET_WORDS = (12, 18)
ACCEPTABLE_BULLET_WORDS = (8, 25)
IDEAL_BULLET_POINTS = 20
ACCEPTABLE_BULLET_POINTS = 10
ACTION_VERB_POINTS = 5
IMPACT_POINTS = 15
FORMAT_POINTS = 10
GOOD_LENGTH = (500, 2000)  # exclusive bounds


@dataclass(frozen=True)
class ResumewordedComponents:
    """Unrounded sub-scores of a Resumeworded scoring pass."""

    keyword_score: float
    impact_score: float
    brevity_score: float
    skills_score: float
    style_score: float
    format_bonus: int
    overall: float


def extract_bullets(resume_text: str) -> list[str]:
    return [
        line for line in resume_text.split("\n")
        if line.strip().startswith(BULLET_MARKERS)
    ]


def brevity_score(bullets: list[str]) -> float:
    total = 0
    for bullet in bullets:
        words = len(bullet.split(" "))
        if IDEAL_BULLET_WORDS[0] <= words <= IDEAL_BULLET_WORDS[1]:
            total += IDEAL_BULLET_POINTS
        elif ACCEPTABLE_BULLET_WORDS[0] <= words <= ACCEPTABLE_BULLET_WORDS[1]:
            total += ACCEPTABLE_BULLET_POINTS
    return min(100.0, total / max(len(bullets), 1))


def style_score(resume_text: str) -> float:
    hits = sum(1 for verb in ACTION_VERBS if contains(resume_text, verb))
    return min(100.0, hits * ACTION_VERB_POINTS)


def impact_score(resume_text: str) -> float:
    metrics = IMPACT_PATTERN.findall(resume_text.lower())
    return min(100.0, len(metrics) * IMPACT_POINTS)


def skills_section(resume_text: str) -> str | None:
    """First skills/technologies/tools/languages span, if any."""
    match = SKILLS_SECTION_PATTERN.search(resume_text)
    return match.group(0) if match else None


def skills_score(resume_text: str, keywords: list[str]) -> float:
    span = skills_section(resume_text)
    if span is None:
        return 0.0
    return percentage(len(matched_keywords(span, keywords)), len(keywords))


def format_bonus(resume_text: str) -> int:
    bonus = 0
    if STYLE_HEADER_PATTERN.search(resume_text):
        bonus += FORMAT_POINTS
    if BULLET_CHAR_PATTERN.search(resume_text):
        bonus += FORMAT_POINTS
    if GOOD_LENGTH[0] < len(resume_text) < GOOD_LENGTH[1]:
        bonus += FORMAT_POINTS
    return bonus


def resumeworded_components(resume_text: str, keywords: list[str]) -> ResumewordedComponents:
    keyword = percentage(len(matched_keywords(resume_text, keywords)), len(keywords))
    impact = impact_score(resume_text)
    brevity = brevity_score(extract_bullets(resume_text))
    skills = skills_score(resume_text, keywords)
    style = style_score(resume_text)
    bonus = format_bonus(resume_text)

    weighted = (
        keyword * WEIGHTS["keyword"]
        + impact * WEIGHTS["impact"]
        + brevity * WEIGHTS["brevity"]
        + skills * WEIGHTS["skills"]
        + style * WEIGHTS["style"]
    )
    return ResumewordedComponents(
        keyword_score=keyword,
        impact_score=impact,
        brevity_score=brevity,
        skills_score=skills,
        style_score=style,
        format_bonus=bonus,
        overall=min(100.0, weighted + bonus),
    )


def score_resumeworded(
    resume_text: str,
    job_description_text: str,
    keywords: list[str],
) -> ScoreResult:
    """Score a résumé Resumeworded-style."""
    parts = resumeworded_components(resume_text, keywords)
    overall = round_half_up(parts.overall)
    matched = matched_keywords(resume_text, keywords)

    return ScoreResult(
        method=ScoringMethod.RESUMEWORDED,
        overall=overall,
        breakdown=ResumewordedBreakdown(
            keyword_match=round_half_up(parts.keyword_score),
            impact=round_half_up(parts.impact_score),
            brevity=round_half_up(parts.brevity_score),
            skills=round_half_up(parts.skills_score),
            style=round_half_up(parts.style_score),
            overall=overall,
        ),
        matched_keywords=matched,
        missing_keywords=[k for k in keywords if k not in matched],
    )
