"""Jobscan-style ATS scorer.

Weighted keyword tiers, a capped repetition bonus for hard skills, and flat
bonuses for section words and formatting. The ``+25`` in the denominator
and the bonus values are empirical constants; keep them as they are.
"""

from __future__ import annotations

from dataclasses import dataclass

from ats_tailor.models.scoring import JobscanBreakdown, ScoreResult, ScoringMethod
from ats_tailor.scoring.text import (
    contains,
    count_occurrences,
    matched_keywords,
    percentage,
    round_half_up,
)
from ats_tailor.scoring.vocabulary import KeywordTier, classify_keyword

NORMALIZATION_CONSTANT = 25
REPETITION_BONUS_CAP = 2

SECTION_BONUSES: tuple[tuple[tuple[str, ...], int], ...] = (
    (("experience", "work"), 10),
    (("projects", "portfolio"), 8),
    (("skills", "technologies"), 5),
)

GOOD_LENGTH = (500, 2000)  # exclusive bounds
LENGTH_BONUS = 10
BULLET_BONUS = 5
METRIC_BONUS = 5


@dataclass(frozen=True)
class JobscanTally:
    """Unrounded intermediate values of a Jobscan scoring pass."""

    total_score: int
    max_possible_score: int
    section_bonus: int
    coverage: float
    format_score: int
    final_score: float


def section_bonus(resume_text: str) -> int:
    lowered = resume_text.lower()
    return sum(
        points
        for words, points in SECTION_BONUSES
        if any(word in lowered for word in words)
    )


def format_bonus(resume_text: str) -> int:
    score = 0
    if GOOD_LENGTH[0] < len(resume_text) < GOOD_LENGTH[1]:
        score += LENGTH_BONUS
    if "•" in resume_text or "-" in resume_text:
        score += BULLET_BONUS
    if "%" in resume_text or "$" in resume_text:
        score += METRIC_BONUS
    return score


def tally_jobscan(resume_text: str, keywords: list[str]) -> JobscanTally:
    total = 0
    max_possible = 0
    for keyword in keywords:
        tier = classify_keyword(keyword)
        if tier is None:
            continue
        max_possible += tier.weight
        if not contains(resume_text, keyword):
            continue
        total += tier.weight
        if tier is KeywordTier.HARD_SKILL:
            occurrences = count_occurrences(resume_text, keyword)
            if occurrences > 1:
                total += min(occurrences - 1, REPETITION_BONUS_CAP)

    sections = section_bonus(resume_text)
    fmt = format_bonus(resume_text)
    coverage = percentage(len(matched_keywords(resume_text, keywords)), len(keywords))

    final = 0.0
    if max_possible > 0:
        final = min(
            100.0,
            (total + sections + fmt) / (max_possible + NORMALIZATION_CONSTANT) * 100,
        )

    return JobscanTally(
        total_score=total,
        max_possible_score=max_possible,
        section_bonus=sections,
        coverage=coverage,
        format_score=fmt,
        final_score=final,
    )


def score_jobscan(
    resume_text: str,
    job_description_text: str,
    keywords: list[str],
) -> ScoreResult:
    """Score a résumé Jobscan-style.

    ``job_description_text`` is accepted for interface parity with the other
    scorer and does not affect the arithmetic.
    """
    tally = tally_jobscan(resume_text, keywords)
    # The repetition bonus can push total above max; the field is a 0-100 ratio.
    keyword_match = min(100, round_half_up(percentage(tally.total_score, tally.max_possible_score)))
    overall = round_half_up(tally.final_score)
    matched = matched_keywords(resume_text, keywords)

    return ScoreResult(
        method=ScoringMethod.JOBSCAN,
        overall=overall,
        breakdown=JobscanBreakdown(
            keyword_match=keyword_match,
            section_placement=round_half_up(tally.section_bonus),
            coverage=round_half_up(tally.coverage),
            format=round_half_up(tally.format_score),
            overall=overall,
        ),
        matched_keywords=matched,
        missing_keywords=[k for k in keywords if k not in matched],
    )
