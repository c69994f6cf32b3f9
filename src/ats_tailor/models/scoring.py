"""Pydantic models for ATS scoring input and output."""

from __future__ import annotations

from enum import Enum
from typing import Union

from pydantic import BaseModel, field_validator


class ScoringMethod(str, Enum):
    JOBSCAN = "jobscan"
    RESUMEWORDED = "resumeworded"


class ScoringInput(BaseModel):
    """Immutable input to a scoring call.

    Keywords keep extraction order; blanks and case-insensitive duplicates
    are dropped (first occurrence wins).
    """

    resume_text: str
    job_description_text: str = ""
    keywords: list[str] = []

    model_config = {"frozen": True}

    @field_validator("keywords")
    @classmethod
    def _dedupe_keywords(cls, value: list[str]) -> list[str]:
        seen: set[str] = set()
        result = []
        for keyword in value:
            cleaned = keyword.strip()
            if not cleaned or cleaned.lower() in seen:
                continue
            seen.add(cleaned.lower())
            result.append(cleaned)
        return result


class JobscanBreakdown(BaseModel):
    keyword_match: int  # 0-100
    section_placement: int  # raw bonus points, max 23
    coverage: int  # 0-100
    format: int  # raw bonus points, max 20
    overall: int  # 0-100


class ResumewordedBreakdown(BaseModel):
    keyword_match: int
    impact: int
    brevity: int
    skills: int
    style: int
    overall: int


class ScoreResult(BaseModel):
    method: ScoringMethod
    overall: int
    breakdown: Union[JobscanBreakdown, ResumewordedBreakdown]
    matched_keywords: list[str] = []
    missing_keywords: list[str] = []
