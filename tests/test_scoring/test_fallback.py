"""Tests for degraded mode."""

from ats_tailor.models.job import JobPosting
from ats_tailor.models.scoring import ScoringMethod
from ats_tailor.scoring.fallback import DegradedMode
from ats_tailor.scoring.vocabulary import FALLBACK_DEFAULT_KEYWORDS


class TestExtractKeywords:
    def test_vocabulary_scan(self, degraded, sample_jd_text):
        result = degraded.extract_keywords(sample_jd_text)
        assert "python" in result.extracted_keywords
        assert "docker" in result.extracted_keywords
        assert result.required_skills == result.extracted_keywords[:5]
        assert result.degraded is True
        assert 70 <= result.ats_score <= 99

    def test_defaults_when_nothing_matches(self, degraded):
        result = degraded.extract_keywords("Barista wanted for a busy cafe")
        assert result.extracted_keywords == list(FALLBACK_DEFAULT_KEYWORDS)

    def test_method_is_carried(self, degraded):
        result = degraded.extract_keywords("python", ScoringMethod.RESUMEWORDED)
        assert result.scoring_method is ScoringMethod.RESUMEWORDED


class TestOptimize:
    RESUME = "SUMMARY\nExperienced developer.\n\nEXPERIENCE\nResponsible for the billing system."

    def test_rewrites_summary_and_filler(self, degraded):
        result = degraded.optimize(self.RESUME, ["python", "aws", "sql"])
        content = result.optimized_content
        assert "Impact-driven software engineer with expertise in python, aws, sql." in content
        assert "Responsible for" not in content
        assert "Improved system performance by 25%" in content
        assert content.endswith("Enhanced with ATS-optimized keywords: python, aws, sql")

    def test_result_is_marked_degraded(self, degraded):
        result = degraded.optimize(self.RESUME, ["python"], ScoringMethod.JOBSCAN)
        assert result.degraded is True
        assert result.score is None
        assert 75 <= result.ats_score <= 89
        assert len(result.improvements) == 3

    def test_resumeworded_range(self, degraded):
        result = degraded.optimize(self.RESUME, ["python"], ScoringMethod.RESUMEWORDED)
        assert 70 <= result.ats_score <= 89

    def test_seeded_runs_repeat(self):
        first = DegradedMode(seed=7).optimize(self.RESUME, ["python"])
        second = DegradedMode(seed=7).optimize(self.RESUME, ["python"])
        assert first.ats_score == second.ats_score


class TestAnalyzeMultipleJobs:
    def test_one_insight_per_job(self, degraded):
        jobs = [
            JobPosting(title="Frontend Engineer", description="React"),
            JobPosting(title="Cloud Full Stack Developer", description="AWS"),
        ]
        result = degraded.analyze_multiple_jobs("resume", jobs)
        assert [i.title for i in result.job_specific_insights] == [j.title for j in jobs]
        assert result.job_specific_insights[0].unique_keywords == ["React", "Backend", "Docker"]
        assert result.job_specific_insights[1].unique_keywords == ["Node.js", "Full Stack", "AWS"]
        assert len(result.common_keywords) == 5
        assert all(75 <= i.match_score <= 94 for i in result.job_specific_insights)
        assert result.degraded is True
