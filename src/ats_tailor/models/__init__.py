"""Data models for the ats-tailor pipeline."""

from ats_tailor.models.interview import (
    CoverLetter,
    CoverLetterDraft,
    InterviewPrep,
    InterviewQuestion,
    InterviewQuestionDraft,
)
from ats_tailor.models.job import (
    JobDescription,
    JobInsight,
    JobPosting,
    KeywordAnalysis,
    MultiJobAnalysis,
)
from ats_tailor.models.resume import (
    Improvement,
    Resume,
    ResumeOptimization,
    ResumeSection,
    ResumeVersion,
    StoreStats,
)
from ats_tailor.models.scoring import (
    JobscanBreakdown,
    ResumewordedBreakdown,
    ScoreResult,
    ScoringInput,
    ScoringMethod,
)

__all__ = [
    "CoverLetter",
    "CoverLetterDraft",
    "Improvement",
    "InterviewPrep",
    "InterviewQuestion",
    "InterviewQuestionDraft",
    "JobDescription",
    "JobInsight",
    "JobPosting",
    "JobscanBreakdown",
    "KeywordAnalysis",
    "MultiJobAnalysis",
    "Resume",
    "ResumeOptimization",
    "ResumeSection",
    "ResumeVersion",
    "ResumewordedBreakdown",
    "ScoreResult",
    "ScoringInput",
    "ScoringMethod",
    "StoreStats",
]
