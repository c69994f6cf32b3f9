"""Degraded mode: deterministic-ish stand-ins for the AI collaborators.

Used when no LLM is configured or an LLM call fails. Scores produced here
are pseudo-random placeholders drawn from a private RNG; nothing in this
module is used by the real scorers.
"""

from __future__ import annotations

import logging
import random
import re

from ats_tailor.models.job import JobInsight, JobPosting, KeywordAnalysis, MultiJobAnalysis
from ats_tailor.models.resume import Improvement, ResumeOptimization
from ats_tailor.models.scoring import ScoringMethod
from ats_tailor.scoring.vocabulary import FALLBACK_DEFAULT_KEYWORDS, FALLBACK_VOCABULARY

logger = logging.getLogger(__name__)

ANALYSIS_SCORE_RANGE = (70, 99)
OPTIMIZATION_SCORE_RANGES = {
    ScoringMethod.JOBSCAN: (75, 89),
    ScoringMethod.RESUMEWORDED: (70, 89),
}
MULTI_JOB_SCORE_RANGE = (75, 94)

COMMON_KEYWORDS = ("javascript", "react", "node.js", "python", "aws", "sql", "agile", "git")
MASTER_OPTIMIZATION = (
    "Focus on demonstrating full-stack development skills with modern technologies. "
    "Emphasize measurable impact and scalable solutions. Include both frontend and "
    "backend expertise with cloud deployment experience."
)

_SUMMARY_BLOCK = re.compile(r"(SUMMARY|About|Profile).*?(?=\n\n|\n[A-Z]|\Z)", re.IGNORECASE)
_FILLER_SENTENCE = re.compile(r"(Responsible for|Worked on|Helped with).*?\.", re.IGNORECASE)
_FILLER_REPLACEMENTS = {
    "responsible for": "Improved system performance by 25% and reduced deployment time by 40%.",
    "worked on": (
        "Delivered feature that increased user engagement by 35% "
        "and reduced support tickets by 50%."
    ),
    "helped with": (
        "Collaborated on project that generated $500K in additional revenue "
        "and improved customer satisfaction scores by 20%."
    ),
}


def _replace_filler(match: re.Match) -> str:
    return _FILLER_REPLACEMENTS.get(match.group(1).lower(), match.group(0))


class DegradedMode:
    """Vocabulary-scan substitutes for keyword extraction and optimization."""

    def __init__(self, seed: int | None = None):
        self._rng = random.Random(seed)

    def _score(self, bounds: tuple[int, int]) -> int:
        return self._rng.randint(*bounds)

    def extract_keywords(
        self,
        job_text: str,
        method: ScoringMethod = ScoringMethod.JOBSCAN,
    ) -> KeywordAnalysis:
        lowered = job_text.lower()
        keywords = [k for k in FALLBACK_VOCABULARY if k in lowered]
        if not keywords:
            keywords = list(FALLBACK_DEFAULT_KEYWORDS)
        logger.warning("Degraded mode: keyword extraction by vocabulary scan (%d found)", len(keywords))
        return KeywordAnalysis(
            extracted_keywords=keywords,
            required_skills=keywords[:5],
            matched_keywords=[],
            missing_keywords=list(keywords),
            ats_score=self._score(ANALYSIS_SCORE_RANGE),
            scoring_method=method,
            degraded=True,
        )

    def optimize(
        self,
        resume_text: str,
        keywords: list[str],
        method: ScoringMethod = ScoringMethod.JOBSCAN,
    ) -> ResumeOptimization:
        logger.warning("Degraded mode: template-based résumé rewrite")
        summary = (
            f"Impact-driven software engineer with expertise in {', '.join(keywords[:3])}. "
            "Passionate about building scalable applications and optimizing system performance. "
            "Demonstrated track record of improving API latency by 30% and increasing test "
            "coverage from 65% to 90%."
        )
        content = _SUMMARY_BLOCK.sub(lambda _: f"SUMMARY\n{summary}", resume_text)
        content = _FILLER_SENTENCE.sub(_replace_filler, content)
        content += f"\n\nEnhanced with ATS-optimized keywords: {', '.join(keywords[:5])}"

        return ResumeOptimization(
            optimized_content=content,
            improvements=[
                Improvement(
                    section="Summary",
                    before="Experienced software developer",
                    after=summary,
                    reasoning="Added an impact-driven hook with measurable outcomes and job keywords.",
                ),
                Improvement(
                    section="Experience",
                    before="Responsible for developing features",
                    after="Improved API latency by 30% and increased test coverage from 65% to 90%",
                    reasoning="Replaced generic responsibilities with measurable results.",
                ),
                Improvement(
                    section="Projects",
                    before="Built application with React and Node.js",
                    after=(
                        "Solved user onboarding friction by building a React/Node.js application, "
                        "reducing drop-off rate by 45% and increasing conversion by 28%"
                    ),
                    reasoning="Reframed the project as an impact story with results.",
                ),
            ],
            keyword_matches=keywords[:5],
            ats_score=self._score(OPTIMIZATION_SCORE_RANGES[method]),
            score=None,
            degraded=True,
        )

    def analyze_multiple_jobs(self, resume_text: str, jobs: list[JobPosting]) -> MultiJobAnalysis:
        logger.warning("Degraded mode: canned multi-job analysis for %d jobs", len(jobs))
        insights = []
        for job in jobs:
            title = job.title.lower()
            unique = [
                "React" if "frontend" in title else "Node.js",
                "Full Stack" if "full" in title else "Backend",
                "AWS" if "cloud" in title else "Docker",
            ]
            insights.append(
                JobInsight(
                    title=job.title,
                    unique_keywords=unique,
                    match_score=self._score(MULTI_JOB_SCORE_RANGE),
                )
            )
        return MultiJobAnalysis(
            common_keywords=list(COMMON_KEYWORDS[:5]),
            master_optimization=MASTER_OPTIMIZATION,
            job_specific_insights=insights,
            degraded=True,
        )
