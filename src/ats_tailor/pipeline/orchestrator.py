"""Tailoring service - coordinates the AI collaborators and the résumé store."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from pathlib import Path

from ats_tailor.clients.llm_client import LLMClient
from ats_tailor.errors import NotFoundError
from ats_tailor.export.docx_exporter import export_version_docx
from ats_tailor.models.interview import CoverLetter, InterviewQuestion
from ats_tailor.models.job import JobDescription, JobPosting, MultiJobAnalysis
from ats_tailor.models.resume import Resume, ResumeVersion
from ats_tailor.models.scoring import ScoringMethod
from ats_tailor.parsers.resume_parser import sanitize_content
from ats_tailor.pipeline.cover_letter_writer import CoverLetterWriter
from ats_tailor.pipeline.interview_coach import InterviewCoach
from ats_tailor.pipeline.keyword_extractor import KeywordExtractor
from ats_tailor.pipeline.multi_job_analyst import MultiJobAnalyst
from ats_tailor.pipeline.resume_optimizer import ResumeOptimizer
from ats_tailor.scoring.fallback import DegradedMode
from ats_tailor.storage.resume_store import ResumeStore

logger = logging.getLogger(__name__)

MIN_DESCRIPTION_LENGTH = 50


def default_version_name(job_title: str, today: date | None = None) -> str:
    return f"{job_title} - {(today or date.today()).isoformat()}"


class TailoringService:
    """Runs extraction, tailoring and generation against stored records.

    ``llm=None`` runs every collaborator that has one in degraded mode;
    cover letters and interview prep then raise ``GenerationError``.
    """

    def __init__(
        self,
        llm: LLMClient | None,
        store: ResumeStore,
        *,
        fast_model: str = "claude-haiku-4-5-20251001",
        writer_model: str = "claude-sonnet-4-5-20250929",
        analysis_temperature: float = 0.1,
        writer_temperature: float = 0.3,
        fallback: DegradedMode | None = None,
    ):
        fallback = fallback or DegradedMode()
        self.store = store
        self.keyword_extractor = KeywordExtractor(
            llm, model=fast_model, temperature=analysis_temperature, fallback=fallback,
        )
        self.resume_optimizer = ResumeOptimizer(
            llm, model=writer_model, temperature=analysis_temperature, fallback=fallback,
        )
        self.cover_letter_writer = CoverLetterWriter(
            llm, model=writer_model, temperature=writer_temperature,
        )
        self.interview_coach = InterviewCoach(llm, model=writer_model)
        self.multi_job_analyst = MultiJobAnalyst(
            llm, model=fast_model, temperature=analysis_temperature, fallback=fallback,
        )

    # -- lookups -----------------------------------------------------------

    def _resume(self, resume_id: str) -> Resume:
        resume = self.store.get_resume(resume_id)
        if resume is None:
            raise NotFoundError("Resume", resume_id)
        return resume

    def _job(self, job_id: str) -> JobDescription:
        job = self.store.get_job_description(job_id)
        if job is None:
            raise NotFoundError("Job description", job_id)
        return job

    def _version(self, version_id: str) -> ResumeVersion:
        version = self.store.get_version(version_id)
        if version is None:
            raise NotFoundError("Resume version", version_id)
        return version

    # -- operations --------------------------------------------------------

    def add_resume(
        self,
        file_name: str,
        content: str,
        file_type: str = "text/plain",
    ) -> Resume:
        """Store a résumé after stripping control characters from its text."""
        return self.store.create_resume(
            file_name=file_name,
            original_content=sanitize_content(content),
            file_type=file_type,
            file_size=len(content.encode("utf-8")),
        )

    async def add_job_description(
        self,
        title: str,
        description: str,
        *,
        company: str | None = None,
        url: str | None = None,
        method: ScoringMethod = ScoringMethod.JOBSCAN,
    ) -> JobDescription:
        """Extract keywords from a posting and store it with them."""
        if len(description.strip()) < MIN_DESCRIPTION_LENGTH:
            raise ValueError(
                f"Job description must be at least {MIN_DESCRIPTION_LENGTH} characters"
            )
        analysis = await self.keyword_extractor.extract(description, method)
        logger.info(
            "Extracted %d keywords for %r%s",
            len(analysis.extracted_keywords),
            title,
            " (degraded)" if analysis.degraded else "",
        )
        return self.store.create_job_description(
            title=title,
            description=description,
            company=company,
            url=url,
            extracted_keywords=analysis.extracted_keywords,
            required_skills=analysis.required_skills,
        )

    async def tailor(
        self,
        resume_id: str,
        job_id: str,
        version_name: str | None = None,
        method: ScoringMethod = ScoringMethod.JOBSCAN,
    ) -> ResumeVersion:
        """Optimize a résumé for a job and persist the result as a new version."""
        resume = self._resume(resume_id)
        job = self._job(job_id)

        optimization = await self.resume_optimizer.optimize(
            resume.original_content,
            job.description,
            job.extracted_keywords,
            method,
        )
        version = self.store.create_version(
            resume_id=resume.id,
            job_description_id=job.id,
            version_name=version_name or default_version_name(job.title),
            tailored_content=optimization.optimized_content,
            ats_score=Decimal(optimization.ats_score),
            keyword_matches=optimization.keyword_matches,
            improvements=optimization.improvements,
        )
        logger.info(
            "Created version %s scoring %d (%s)", version.id, optimization.ats_score, method.value
        )
        return version

    async def generate_cover_letter(
        self,
        version_id: str,
        tone: str = "professional",
    ) -> CoverLetter:
        version = self._version(version_id)
        job = self._job(version.job_description_id)
        draft = await self.cover_letter_writer.write(
            version.tailored_content, job.description, tone
        )
        return self.store.create_cover_letter(version.id, draft.content, draft.tone)

    async def prepare_interview(self, version_id: str) -> list[InterviewQuestion]:
        version = self._version(version_id)
        job = self._job(version.job_description_id)
        prep = await self.interview_coach.prepare(version.tailored_content, job.description)
        return self.store.create_interview_questions(version.id, prep.questions)

    async def analyze_multiple_jobs(
        self,
        resume_id: str,
        job_ids: list[str],
    ) -> MultiJobAnalysis:
        """Analyze a résumé against several stored postings. Unknown job ids are skipped."""
        resume = self._resume(resume_id)
        postings = []
        for job_id in job_ids:
            job = self.store.get_job_description(job_id)
            if job is None:
                logger.warning("Skipping unknown job description %s", job_id)
                continue
            postings.append(JobPosting(title=job.title, description=job.description))
        return await self.multi_job_analyst.analyze(resume.original_content, postings)

    def export_docx(self, version_id: str, output_path: str | Path) -> Path:
        """Render a stored version to .docx with the original résumé's name and contacts."""
        version = self._version(version_id)
        resume = self._resume(version.resume_id)
        path = export_version_docx(version, resume.original_content, output_path)
        logger.info("Exported version %s to %s", version.id, path)
        return path
