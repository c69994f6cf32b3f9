"""Pydantic models for job descriptions and keyword extraction."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from ats_tailor.models.scoring import ScoringMethod


class KeywordAnalysis(BaseModel):
    """Keyword extractor output for one job description."""

    extracted_keywords: list[str] = []
    required_skills: list[str] = []
    matched_keywords: list[str] = []
    missing_keywords: list[str] = []
    ats_score: int = 0
    scoring_method: ScoringMethod = ScoringMethod.JOBSCAN
    degraded: bool = False  # True when produced by the vocabulary-scan fallback


class JobDescription(BaseModel):
    id: str
    title: str
    company: str | None = None
    description: str
    url: str | None = None
    extracted_keywords: list[str] = []
    required_skills: list[str] = []
    created_at: datetime


class JobPosting(BaseModel):
    """A title/description pair fed to multi-job analysis."""

    title: str
    description: str


class JobInsight(BaseModel):
    title: str
    unique_keywords: list[str] = []
    match_score: int = 0


class MultiJobAnalysis(BaseModel):
    common_keywords: list[str] = []
    master_optimization: str = ""
    job_specific_insights: list[JobInsight] = []
    degraded: bool = False
