"""Interview Coach - generates likely interview questions with sample answers."""

from __future__ import annotations

import logging

from ats_tailor.clients.llm_client import LLM_FAILURES, LLMClient
from ats_tailor.errors import GenerationError
from ats_tailor.models.interview import InterviewPrep

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """\
You are an expert interview coach. Generate interview questions with strong sample \
answers for this candidate and role.

1. QUESTION TYPES: a balanced mix of behavioral, technical (the role's stack), \
situational and leadership/teamwork questions
2. DIFFICULTY: vary between easy, medium and hard
3. ANSWERS: STAR structure for behavioral questions, clear explanations for technical \
ones, a stepwise approach for situational ones; cite concrete examples and outcomes \
from the résumé
4. ALIGNMENT: tie every question to the job requirements and the candidate's background

Respond ONLY with JSON in exactly this format:
{"questions": [{"question": "...", "suggested_answer": "...", \
"category": "behavioral|technical|situational|leadership", "difficulty": "easy|medium|hard"}]}"""


class InterviewCoach:
    def __init__(
        self,
        llm: LLMClient | None,
        model: str = "claude-sonnet-4-5-20250929",
        *,
        temperature: float = 0.2,
        question_count: str = "10-12",
    ):
        self.llm = llm
        self.model = model
        self.temperature = temperature
        self.question_count = question_count

    async def prepare(self, resume_text: str, job_text: str) -> InterviewPrep:
        """Generate interview questions. Raises GenerationError on any failure."""
        if self.llm is None:
            raise GenerationError("Interview preparation requires an LLM (set ANTHROPIC_API_KEY)")

        prompt = f"""Generate {self.question_count} interview questions with detailed sample answers based on:

Candidate Resume:
{resume_text}

Job Description:
{job_text}"""
        try:
            data = await self.llm.generate_json(
                prompt=prompt,
                system=SYSTEM_PROMPT,
                model=self.model,
                temperature=self.temperature,
            )
            prep = InterviewPrep(**data)
        except LLM_FAILURES as exc:
            logger.error("Interview question generation failed", exc_info=True)
            raise GenerationError("Failed to generate interview questions") from exc

        logger.info("Generated %d interview questions", len(prep.questions))
        return prep
