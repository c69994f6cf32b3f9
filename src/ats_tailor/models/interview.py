"""Models for cover letters and interview preparation."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class CoverLetterDraft(BaseModel):
    content: str = ""
    tone: str = "professional"
    key_points: list[str] = []


class CoverLetter(BaseModel):
    id: str
    resume_version_id: str
    content: str
    tone: str = "professional"  # professional, casual, enthusiastic
    created_at: datetime


class InterviewQuestionDraft(BaseModel):
    question: str
    suggested_answer: str
    category: str  # behavioral, technical, situational, leadership
    difficulty: str = "medium"  # easy, medium, hard


class InterviewPrep(BaseModel):
    questions: list[InterviewQuestionDraft] = []


class InterviewQuestion(BaseModel):
    id: str
    resume_version_id: str
    question: str
    suggested_answer: str
    category: str
    difficulty: str = "medium"
    created_at: datetime
