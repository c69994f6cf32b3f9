"""Deterministic ATS scoring engine.

Both scorers are pure functions over strings: no I/O, no randomness and no
shared state, so they are safe to call from any thread or task.
"""

from __future__ import annotations

from typing import Callable

from ats_tailor.models.scoring import ScoreResult, ScoringInput, ScoringMethod
from ats_tailor.scoring.jobscan import score_jobscan
from ats_tailor.scoring.resumeworded import score_resumeworded

Scorer = Callable[[str, str, list[str]], ScoreResult]

SCORERS: dict[ScoringMethod, Scorer] = {
    ScoringMethod.JOBSCAN: score_jobscan,
    ScoringMethod.RESUMEWORDED: score_resumeworded,
}


def resolve_method(method: ScoringMethod | str | None) -> ScoringMethod:
    """Coerce a method name to the enum; None selects jobscan."""
    if method is None:
        return ScoringMethod.JOBSCAN
    try:
        return ScoringMethod(method)
    except ValueError:
        valid = ", ".join(m.value for m in ScoringMethod)
        raise ValueError(f"Unknown scoring method {method!r} (expected one of: {valid})") from None


def score_input(
    scoring_input: ScoringInput,
    method: ScoringMethod | str | None = ScoringMethod.JOBSCAN,
) -> ScoreResult:
    scorer = SCORERS[resolve_method(method)]
    return scorer(
        scoring_input.resume_text,
        scoring_input.job_description_text,
        list(scoring_input.keywords),
    )


def calculate_ats_score(
    resume_text: str,
    job_description_text: str,
    keywords: list[str],
    method: ScoringMethod | str | None = ScoringMethod.JOBSCAN,
) -> ScoreResult:
    """Score a résumé against a job's keywords with the selected method.

    Keywords are de-duplicated (case-insensitively, first wins) before
    scoring.
    """
    return score_input(
        ScoringInput(
            resume_text=resume_text,
            job_description_text=job_description_text,
            keywords=keywords,
        ),
        method,
    )


__all__ = [
    "SCORERS",
    "ScoreResult",
    "ScoringInput",
    "ScoringMethod",
    "calculate_ats_score",
    "resolve_method",
    "score_input",
    "score_jobscan",
    "score_resumeworded",
]
