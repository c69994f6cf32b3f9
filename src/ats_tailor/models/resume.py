"""Pydantic models for résumés, tailored versions and parsed sections."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel

from ats_tailor.models.scoring import ScoreResult


class ResumeSection(BaseModel):
    """One parsed section: a header line plus its content lines.

    Content lines are plain text, ``SUBSECTION: <text>`` markers or
    ``CONTENT: <text>`` lines under the most recent subsection.
    """

    title: str
    content: list[str] = []


class Improvement(BaseModel):
    section: str
    before: str
    after: str
    reasoning: str


class ResumeOptimization(BaseModel):
    optimized_content: str
    improvements: list[Improvement] = []
    keyword_matches: list[str] = []
    ats_score: int = 0
    score: ScoreResult | None = None  # None only in degraded mode
    degraded: bool = False


class Resume(BaseModel):
    id: str
    file_name: str
    original_content: str
    file_type: str
    file_size: int
    created_at: datetime


class ResumeVersion(BaseModel):
    """A tailored résumé. ``ats_score`` is fixed at creation time."""

    id: str
    resume_id: str
    job_description_id: str
    version_name: str
    tailored_content: str
    ats_score: Decimal | None = None
    keyword_matches: list[str] = []
    improvements: list[Improvement] = []
    is_active: bool = True
    created_at: datetime


class StoreStats(BaseModel):
    total_resumes: int
    total_versions: int
    average_ats_score: int
    total_applications: int
