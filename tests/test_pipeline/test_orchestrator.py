"""Tests for the tailoring service."""

from datetime import date
from decimal import Decimal

import pytest

from ats_tailor.errors import GenerationError, NotFoundError
from ats_tailor.pipeline.orchestrator import TailoringService, default_version_name

JD_KEYWORDS = {
    "extracted_keywords": ["Python", "AWS", "Kubernetes"],
    "required_skills": ["Python"],
    "ats_score": 80,
}


@pytest.fixture
def service(mock_llm_client, store, degraded) -> TailoringService:
    return TailoringService(mock_llm_client, store, fallback=degraded)


@pytest.fixture
def offline_service(store, degraded) -> TailoringService:
    return TailoringService(None, store, fallback=degraded)


async def _seed(service, mock_llm_client, resume_text, jd_text):
    mock_llm_client.generate_json.return_value = JD_KEYWORDS
    resume = service.add_resume("resume.txt", resume_text)
    job = await service.add_job_description("Backend Engineer", jd_text, company="Acme")
    return resume, job


class TestAddRecords:
    def test_add_resume_sanitizes(self, service):
        resume = service.add_resume("cv.txt", "Jane\x00 Doe")
        assert resume.original_content == "Jane Doe"
        assert resume.file_size == len("Jane\x00 Doe")
        assert service.store.get_resume(resume.id) == resume

    async def test_add_job_description_stores_keywords(
        self, service, mock_llm_client, sample_jd_text
    ):
        mock_llm_client.generate_json.return_value = JD_KEYWORDS
        job = await service.add_job_description("Backend Engineer", sample_jd_text)

        stored = service.store.get_job_description(job.id)
        assert stored.extracted_keywords == ["Python", "AWS", "Kubernetes"]
        assert stored.required_skills == ["Python"]

    async def test_short_description_rejected(self, service, mock_llm_client):
        with pytest.raises(ValueError, match="at least 50"):
            await service.add_job_description("Dev", "Python dev wanted")
        mock_llm_client.generate_json.assert_not_called()


class TestTailor:
    async def test_tailor_persists_version(
        self, service, mock_llm_client, sample_resume_text, sample_jd_text
    ):
        resume, job = await _seed(service, mock_llm_client, sample_resume_text, sample_jd_text)
        mock_llm_client.generate_json.return_value = {
            "optimized_content": sample_resume_text,
            "improvements": [],
            "keyword_matches": ["Python", "AWS"],
        }
        version = await service.tailor(resume.id, job.id, version_name="Acme v1")

        assert version.version_name == "Acme v1"
        assert version.resume_id == resume.id
        assert version.job_description_id == job.id
        assert isinstance(version.ats_score, Decimal)
        assert service.store.get_version(version.id) == version

    async def test_stored_matches_are_found_in_content(self, service, mock_llm_client):
        resume = service.add_resume("cv.txt", "Python developer")
        job = service.store.create_job_description(
            "Backend Engineer", "x" * 60, extracted_keywords=["python", "kubernetes"]
        )
        mock_llm_client.generate_json.return_value = {
            "optimized_content": "SUMMARY\nPython engineer",
            "keyword_matches": ["python", "kubernetes", "rust"],
        }
        version = await service.tailor(resume.id, job.id)

        stored = service.store.get_version(version.id)
        assert stored.keyword_matches == ["python"]
        assert all(k in stored.tailored_content.lower() for k in stored.keyword_matches)

    async def test_default_version_name(
        self, service, mock_llm_client, sample_resume_text, sample_jd_text
    ):
        resume, job = await _seed(service, mock_llm_client, sample_resume_text, sample_jd_text)
        mock_llm_client.generate_json.return_value = {"optimized_content": "x"}
        version = await service.tailor(resume.id, job.id)
        assert version.version_name == f"Backend Engineer - {date.today().isoformat()}"

    async def test_degraded_tailoring(self, offline_service, sample_resume_text, sample_jd_text):
        resume = offline_service.add_resume("cv.txt", sample_resume_text)
        job = await offline_service.add_job_description("Backend Engineer", sample_jd_text)
        version = await offline_service.tailor(resume.id, job.id)
        assert 75 <= version.ats_score <= 89
        assert "Enhanced with ATS-optimized keywords" in version.tailored_content
        content = version.tailored_content.lower()
        assert all(k.lower() in content for k in version.keyword_matches)

    async def test_unknown_ids(self, service):
        with pytest.raises(NotFoundError, match="Resume not found"):
            await service.tailor("missing", "also-missing")

    def test_default_version_name_format(self):
        assert default_version_name("SRE", date(2026, 3, 9)) == "SRE - 2026-03-09"


class TestGeneration:
    async def _version(self, service, mock_llm_client, resume_text, jd_text):
        resume, job = await _seed(service, mock_llm_client, resume_text, jd_text)
        mock_llm_client.generate_json.return_value = {"optimized_content": resume_text}
        return await service.tailor(resume.id, job.id)

    async def test_cover_letter_is_stored(
        self, service, mock_llm_client, sample_resume_text, sample_jd_text
    ):
        version = await self._version(service, mock_llm_client, sample_resume_text, sample_jd_text)
        mock_llm_client.generate_json.return_value = {"content": "Dear Acme,", "tone": "casual"}

        letter = await service.generate_cover_letter(version.id, tone="casual")

        assert letter.content == "Dear Acme,"
        assert service.store.list_cover_letters(version.id) == [letter]

    async def test_interview_questions_are_stored(
        self, service, mock_llm_client, sample_resume_text, sample_jd_text
    ):
        version = await self._version(service, mock_llm_client, sample_resume_text, sample_jd_text)
        mock_llm_client.generate_json.return_value = {
            "questions": [
                {"question": "Q1", "suggested_answer": "A1", "category": "technical"},
            ]
        }
        questions = await service.prepare_interview(version.id)

        assert [q.question for q in questions] == ["Q1"]
        assert len(service.store.list_interview_questions(version.id)) == 1

    async def test_generation_without_llm_raises(
        self, offline_service, sample_resume_text, sample_jd_text
    ):
        resume = offline_service.add_resume("cv.txt", sample_resume_text)
        job = await offline_service.add_job_description("Backend Engineer", sample_jd_text)
        version = await offline_service.tailor(resume.id, job.id)
        with pytest.raises(GenerationError):
            await offline_service.generate_cover_letter(version.id)

    async def test_unknown_version(self, service):
        with pytest.raises(NotFoundError, match="Resume version not found: nope"):
            await service.prepare_interview("nope")


class TestMultiJobAndExport:
    async def test_unknown_jobs_are_skipped(
        self, offline_service, sample_resume_text, sample_jd_text
    ):
        resume = offline_service.add_resume("cv.txt", sample_resume_text)
        job = await offline_service.add_job_description("Backend Engineer", sample_jd_text)
        analysis = await offline_service.analyze_multiple_jobs(resume.id, [job.id, "missing"])
        assert [i.title for i in analysis.job_specific_insights] == ["Backend Engineer"]

    async def test_export_docx(
        self, offline_service, sample_resume_text, sample_jd_text, tmp_path
    ):
        resume = offline_service.add_resume("cv.txt", sample_resume_text)
        job = await offline_service.add_job_description("Backend Engineer", sample_jd_text)
        version = await offline_service.tailor(resume.id, job.id)

        path = offline_service.export_docx(version.id, tmp_path / "tailored.docx")
        assert path.exists()

    def test_export_unknown_version(self, offline_service, tmp_path):
        with pytest.raises(NotFoundError):
            offline_service.export_docx("missing", tmp_path / "x.docx")
