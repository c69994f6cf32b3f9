"""Résumé Optimizer - rewrites a résumé for a job and re-scores the result."""

from __future__ import annotations

import logging

from ats_tailor.clients.llm_client import LLM_FAILURES, LLMClient
from ats_tailor.models.resume import ResumeOptimization
from ats_tailor.models.scoring import ScoringMethod
from ats_tailor.scoring import calculate_ats_score
from ats_tailor.scoring.fallback import DegradedMode

logger = logging.getLogger(__name__)

WRITER_MODEL = "claude-sonnet-4-5-20250929"

SYSTEM_PROMPT = """\
You are an expert résumé optimizer. Rewrite the candidate's résumé so it fits the \
job description and passes ATS keyword screening, using ONLY facts present in the \
original résumé.

Respond ONLY with valid JSON in exactly this format:
{
  "optimized_content": "full optimized résumé text",
  "improvements": [
    {"section": "section name", "before": "old text", "after": "new text", "reasoning": "why"}
  ],
  "keyword_matches": ["keyword1", "keyword2"]
}

Tailoring rules:
1. SUMMARY: open with a hook of impact + tech stack + alignment with the role; \
3-4 sentences; no GPA, "pursuing" or filler.
2. EXPERIENCE: every bullet reads as situation, action and result without labels; \
show measurable impact and scale (users, %, latency, revenue).
3. PROJECTS: at least two bullets each, with metrics or outcomes; describe the \
problem solved, not only the stack.
4. CERTIFICATIONS & SKILLS: keep and reorder only what strengthens fit for this job.
5. STRUCTURE: SUMMARY, EXPERIENCE, PROJECTS, EDUCATION, CERTIFICATIONS as plain \
upper-case header lines; bullets start with "•" or "-".
6. ATS: mirror the job description's exact terminology for hard skills, tools and \
role titles.
7. CUT NOISE: no "responsible for", "worked on", "helped with", "highly motivated".
8. LENGTH: about one page (400-500 words)."""


class ResumeOptimizer:
    def __init__(
        self,
        llm: LLMClient | None,
        model: str = WRITER_MODEL,
        *,
        temperature: float = 0.1,
        fallback: DegradedMode | None = None,
    ):
        self.llm = llm
        self.model = model
        self.temperature = temperature
        self.fallback = fallback or DegradedMode()

    async def optimize(
        self,
        resume_text: str,
        job_text: str,
        keywords: list[str],
        method: ScoringMethod = ScoringMethod.JOBSCAN,
    ) -> ResumeOptimization:
        """Rewrite the résumé and attach the selected method's ATS score."""
        if self.llm is None:
            logger.info("No LLM configured, optimizing in degraded mode")
            return self.fallback.optimize(resume_text, keywords, method)

        prompt = f"""Optimize this résumé for the job description following the rules above.
Include keywords: {', '.join(keywords)}. Respond with JSON only:

Resume:
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
            draft = ResumeOptimization(**data)
        except LLM_FAILURES:
            logger.warning("Résumé optimization failed, using degraded mode", exc_info=True)
            return self.fallback.optimize(resume_text, keywords, method)

        content = draft.optimized_content or resume_text
        score = calculate_ats_score(content, job_text, keywords, method)
        logger.info(
            "Optimized résumé scored %d (%s); LLM claimed %d keyword matches, %d found",
            score.overall,
            score.method.value,
            len(draft.keyword_matches),
            len(score.matched_keywords),
        )
        # keyword_matches is recomputed from the content.
        return ResumeOptimization(
            optimized_content=content,
            improvements=draft.improvements,
            keyword_matches=score.matched_keywords,
            ats_score=score.overall,
            score=score,
        )
