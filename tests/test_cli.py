"""Tests for the typer CLI, run offline in degraded mode."""

from decimal import Decimal

import pytest
from typer.testing import CliRunner

from ats_tailor.cli import _format_score, app
from ats_tailor.storage.resume_store import ResumeStore

runner = CliRunner()


@pytest.fixture
def workspace(tmp_path, monkeypatch, sample_resume_text, sample_jd_text):
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.yaml").write_text(
        "storage:\n"
        f"  db_path: {tmp_path / 'cli.db'}\n"
        f"  output_dir: {tmp_path / 'output'}\n",
        encoding="utf-8",
    )
    (tmp_path / "resume.txt").write_text(sample_resume_text, encoding="utf-8")
    (tmp_path / "jd.txt").write_text(sample_jd_text, encoding="utf-8")
    return tmp_path


def test_score_with_keywords(workspace):
    result = runner.invoke(
        app,
        ["score", "resume.txt", "--jd", "jd.txt", "--keywords", "python,aws,teamwork"],
    )
    assert result.exit_code == 0, result.output
    assert "Overall:" in result.output
    assert "Missing:" in result.output


def test_score_extracts_keywords_offline(workspace):
    result = runner.invoke(
        app, ["score", "resume.txt", "--jd", "jd.txt", "--method", "resumeworded"]
    )
    assert result.exit_code == 0, result.output
    assert "degraded mode" in result.output
    assert "Overall:" in result.output


def test_score_rejects_unknown_method(workspace):
    result = runner.invoke(
        app, ["score", "resume.txt", "--jd", "jd.txt", "--keywords", "python", "-m", "lever"]
    )
    assert result.exit_code == 1


def test_missing_file(workspace):
    result = runner.invoke(app, ["score", "nope.txt", "--jd", "jd.txt", "-k", "python"])
    assert result.exit_code == 1
    assert "not found" in result.output


def test_tailor_and_export(workspace):
    result = runner.invoke(
        app,
        ["tailor", "--resume", "resume.txt", "--jd", "jd.txt", "--title", "Backend Engineer",
         "--name", "Acme v1", "--output", "out/acme.docx"],
    )
    assert result.exit_code == 0, result.output
    assert "Acme v1" in result.output
    assert (workspace / "out" / "acme.docx").exists()

    store = ResumeStore(workspace / "cli.db")
    [version] = store.list_versions()
    export = runner.invoke(app, ["export", version.id])
    assert export.exit_code == 0, export.output
    assert (workspace / "output" / "Acme_v1.docx").exists()


def test_tailor_requires_job(workspace):
    result = runner.invoke(app, ["tailor", "--resume", "resume.txt"])
    assert result.exit_code == 1


def test_cover_letter_needs_llm(workspace):
    runner.invoke(app, ["tailor", "--resume", "resume.txt", "--jd", "jd.txt"])
    [version] = ResumeStore(workspace / "cli.db").list_versions()

    result = runner.invoke(app, ["cover-letter", version.id])
    assert result.exit_code == 1
    assert "ANTHROPIC_API_KEY" in result.output


def test_versions_and_stats(workspace):
    empty = runner.invoke(app, ["versions"])
    assert "No versions yet." in empty.output

    runner.invoke(app, ["tailor", "--resume", "resume.txt", "--jd", "jd.txt"])
    result = runner.invoke(app, ["stats"])
    assert result.exit_code == 0, result.output
    assert "Résumés: 1" in result.output
    assert "Versions: 1" in result.output


def test_tailor_prints_resume_and_job_ids(workspace):
    result = runner.invoke(app, ["tailor", "--resume", "resume.txt", "--jd", "jd.txt"])
    store = ResumeStore(workspace / "cli.db")
    [resume] = store.list_resumes()
    [job] = store.list_job_descriptions()
    assert resume.id in result.output
    assert job.id in result.output


def test_resumes_lists_ids(workspace):
    assert "Nothing stored yet." in runner.invoke(app, ["resumes"]).output

    runner.invoke(app, ["tailor", "--resume", "resume.txt", "--jd", "jd.txt", "-t", "SRE"])
    [resume] = ResumeStore(workspace / "cli.db").list_resumes()

    result = runner.invoke(app, ["resumes"])
    assert result.exit_code == 0, result.output
    assert resume.id in result.output
    assert "resume.txt" in result.output


def test_multi_job(workspace):
    runner.invoke(app, ["tailor", "--resume", "resume.txt", "--jd", "jd.txt", "-t", "Backend"])
    store = ResumeStore(workspace / "cli.db")
    [resume] = store.list_resumes()
    [job] = store.list_job_descriptions()

    result = runner.invoke(
        app,
        ["multi-job", "--resume-id", resume.id, "--job-id", job.id, "--job-id", "missing"],
    )
    assert result.exit_code == 0, result.output
    assert "Master résumé strategy (degraded)" in result.output
    assert "Backend" in result.output


def test_zero_score_is_shown():
    assert _format_score(Decimal("0")) == "0"
    assert _format_score(None) == "-"


def test_cover_letter_rejects_unknown_tone(workspace):
    runner.invoke(app, ["tailor", "--resume", "resume.txt", "--jd", "jd.txt"])
    [version] = ResumeStore(workspace / "cli.db").list_versions()

    result = runner.invoke(app, ["cover-letter", version.id, "--tone", "sarcastic"])
    assert result.exit_code == 1
    assert "Unknown tone" in result.output
