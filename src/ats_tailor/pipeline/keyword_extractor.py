"""Keyword Extractor - pulls ATS keywords and required skills from a job description."""

from __future__ import annotations

import logging

from ats_tailor.clients.llm_client import DEFAULT_MODEL, LLM_FAILURES, LLMClient
from ats_tailor.models.job import KeywordAnalysis
from ats_tailor.models.scoring import ScoringMethod
from ats_tailor.scoring.fallback import DegradedMode

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """\
You are an expert ATS (Applicant Tracking System) analyzer. Extract the keywords a \
résumé must contain to pass automated screening for the given job description.

Respond ONLY with valid JSON in exactly this format:
{
  "extracted_keywords": ["keyword1", "keyword2"],
  "required_skills": ["skill1", "skill2"],
  "ats_score": 75
}

Rules:
- extracted_keywords: the salient terms (hard skills, tools, job titles, certifications, \
soft skills), most important first, each as it appears in the posting
- required_skills: the skills the posting explicitly requires
- ats_score: 0-100, how keyword-dense the posting is
- Do not invent requirements that are not in the posting"""


class KeywordExtractor:
    def __init__(
        self,
        llm: LLMClient | None,
        model: str = DEFAULT_MODEL,
        *,
        temperature: float = 0.1,
        fallback: DegradedMode | None = None,
    ):
        self.llm = llm
        self.model = model
        self.temperature = temperature
        self.fallback = fallback or DegradedMode()

    async def extract(
        self,
        job_text: str,
        method: ScoringMethod = ScoringMethod.JOBSCAN,
    ) -> KeywordAnalysis:
        """Extract keywords; falls back to a vocabulary scan if the LLM fails."""
        if self.llm is None:
            logger.info("No LLM configured, extracting keywords in degraded mode")
            return self.fallback.extract_keywords(job_text, method)

        prompt = f"""Analyze this job description and extract keywords and skills. Respond with JSON only:

{job_text}"""
        try:
            data = await self.llm.generate_json(
                prompt=prompt,
                system=SYSTEM_PROMPT,
                model=self.model,
                temperature=self.temperature,
            )
            analysis = KeywordAnalysis(**data)
        except LLM_FAILURES:
            logger.warning("Keyword extraction failed, using degraded mode", exc_info=True)
            return self.fallback.extract_keywords(job_text, method)

        return analysis.model_copy(
            update={
                "matched_keywords": [],
                "missing_keywords": list(analysis.extracted_keywords),
                "scoring_method": method,
                "degraded": False,
            }
        )
