"""Cover Letter Writer - drafts a cover letter from a tailored résumé."""

from __future__ import annotations

import logging

from ats_tailor.clients.llm_client import LLM_FAILURES, LLMClient
from ats_tailor.errors import GenerationError
from ats_tailor.models.interview import CoverLetterDraft

logger = logging.getLogger(__name__)

TONES = ("professional", "casual", "enthusiastic")

SYSTEM_PROMPT_TEMPLATE = """\
You are an expert cover letter writer. Write a compelling, personalized cover letter:

1. OPENING: a strong hook connecting the candidate's impact to the company's mission
2. BODY: specific examples from the résumé that map to the job requirements
3. CLOSING: a clear call to action and enthusiasm for the role
4. LENGTH: 250-300 words at most
5. TONE: {tone}
6. KEYWORDS: weave in the job description's key terms naturally
7. IMPACT: measurable achievements and business outcomes

Respond ONLY with JSON in exactly this format:
{{"content": "cover letter text", "tone": "{tone}", "key_points": ["point1", "point2"]}}"""


class CoverLetterWriter:
    def __init__(
        self,
        llm: LLMClient | None,
        model: str = "claude-sonnet-4-5-20250929",
        *,
        temperature: float = 0.3,
    ):
        self.llm = llm
        self.model = model
        self.temperature = temperature

    async def write(
        self,
        resume_text: str,
        job_text: str,
        tone: str = "professional",
    ) -> CoverLetterDraft:
        """Draft a cover letter. Raises GenerationError on any failure."""
        if tone not in TONES:
            raise ValueError(f"Unknown tone {tone!r} (expected one of: {', '.join(TONES)})")
        if self.llm is None:
            raise GenerationError("Cover letter generation requires an LLM (set ANTHROPIC_API_KEY)")

        prompt = f"""Write a tailored cover letter based on:

Resume Content:
{resume_text}

Job Description:
{job_text}

Tone: {tone}"""
        try:
            data = await self.llm.generate_json(
                prompt=prompt,
                system=SYSTEM_PROMPT_TEMPLATE.format(tone=tone),
                model=self.model,
                temperature=self.temperature,
            )
            draft = CoverLetterDraft(**data)
        except LLM_FAILURES as exc:
            logger.error("Cover letter generation failed", exc_info=True)
            raise GenerationError("Failed to generate cover letter") from exc

        return draft.model_copy(update={"tone": tone})
