"""Shared test fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from ats_tailor.clients.llm_client import LLMClient, LLMResponse
from ats_tailor.scoring.fallback import DegradedMode
from ats_tailor.storage.resume_store import ResumeStore


@pytest.fixture
def sample_jd_text() -> str:
    return """Senior Backend Engineer - Payments Platform

We are looking for a backend developer to design and scale our payment APIs.

Requirements:
- 5+ years of Python experience
- Production experience with AWS, Docker and Kubernetes
- Strong SQL skills (PostgreSQL preferred)
- Excellent communication and teamwork in an agile team

Nice to have:
- Node.js or React exposure
"""


@pytest.fixture
def sample_resume_text() -> str:
    return """Jane Doe
jane@example.com | +15551234567 | linkedin.com/in/janedoe
SUMMARY
Backend engineer focused on reliable payment systems and APIs.
EXPERIENCE
Acme Corp - Senior Engineer (2020-2023)
• Built payment APIs serving 2 million users
• Reduced latency by 40%
SKILLS
Python, AWS, Docker
"""


@pytest.fixture
def mock_llm_client() -> LLMClient:
    """Create a mock LLM client."""
    client = AsyncMock(spec=LLMClient)
    client.generate = AsyncMock(
        return_value=LLMResponse(text="{}", input_tokens=100, output_tokens=50)
    )
    client.generate_json = AsyncMock(return_value={})
    return client


@pytest.fixture
def degraded() -> DegradedMode:
    return DegradedMode(seed=42)


@pytest.fixture
def store(tmp_path) -> ResumeStore:
    return ResumeStore(tmp_path / "test.db")
