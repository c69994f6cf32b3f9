"""Multi-Job Analyst - finds common themes across several postings for a master résumé."""

from __future__ import annotations

import logging

from ats_tailor.clients.llm_client import DEFAULT_MODEL, LLM_FAILURES, LLMClient
from ats_tailor.models.job import JobInsight, JobPosting, MultiJobAnalysis
from ats_tailor.scoring.fallback import DegradedMode

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """\
You are an expert at analyzing multiple job postings to build a master résumé strategy. \
Identify the keywords the postings share, what is unique to each, and how well the \
current résumé matches each one.

Each job title must appear only once in job_specific_insights.

Respond ONLY with JSON in exactly this format:
{
  "common_keywords": ["keyword1", "keyword2"],
  "master_optimization": "optimization guidance",
  "job_specific_insights": [
    {"title": "job title", "unique_keywords": ["keyword"], "match_score": 85}
  ]
}"""


def dedupe_insights(insights: list[JobInsight]) -> list[JobInsight]:
    """Keep the first insight for each title."""
    seen: set[str] = set()
    unique = []
    for insight in insights:
        if insight.title in seen:
            continue
        seen.add(insight.title)
        unique.append(insight)
    return unique


class MultiJobAnalyst:
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

    async def analyze(self, resume_text: str, jobs: list[JobPosting]) -> MultiJobAnalysis:
        if self.llm is None:
            logger.info("No LLM configured, analyzing jobs in degraded mode")
            return self.fallback.analyze_multiple_jobs(resume_text, jobs)

        listing = "\n\n".join(
            f"{i}. {job.title}:\n{job.description}" for i, job in enumerate(jobs, start=1)
        )
        prompt = f"""Analyze these job descriptions to create a master resume strategy. \
Ensure each job title appears only once:

Current Resume:
{resume_text}

Job Descriptions:
{listing}"""
        try:
            data = await self.llm.generate_json(
                prompt=prompt,
                system=SYSTEM_PROMPT,
                model=self.model,
                temperature=self.temperature,
            )
            analysis = MultiJobAnalysis(**data)
        except LLM_FAILURES:
            logger.warning("Multi-job analysis failed, using degraded mode", exc_info=True)
            return self.fallback.analyze_multiple_jobs(resume_text, jobs)

        return analysis.model_copy(
            update={
                "job_specific_insights": dedupe_insights(analysis.job_specific_insights),
                "degraded": False,
            }
        )
