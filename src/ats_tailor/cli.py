"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import logging
import os
from decimal import Decimal
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ats_tailor.clients.llm_client import LLMClient
from ats_tailor.config import AppConfig, load_config
from ats_tailor.errors import AtsTailorError
from ats_tailor.models.scoring import ScoreResult
from ats_tailor.parsers.resume_parser import load_text_file
from ats_tailor.pipeline.keyword_extractor import KeywordExtractor
from ats_tailor.pipeline.orchestrator import TailoringService
from ats_tailor.scoring import calculate_ats_score, resolve_method
from ats_tailor.storage.resume_store import ResumeStore

app = typer.Typer(
    name="ats-tailor",
    help="ATS résumé scoring and AI-assisted tailoring",
    no_args_is_help=True,
)
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _build_llm(config: AppConfig) -> LLMClient | None:
    if not os.environ.get("ANTHROPIC_API_KEY"):
        console.print("[yellow]ANTHROPIC_API_KEY not set, running in degraded mode[/yellow]")
        return None
    return LLMClient(timeout=config.llm.timeout, max_retries=config.llm.max_retries)


def _build_service(config: AppConfig) -> TailoringService:
    return TailoringService(
        _build_llm(config),
        ResumeStore(config.storage.resolved_db_path),
        fast_model=config.llm.fast_model,
        writer_model=config.llm.writer_model,
        analysis_temperature=config.llm.analysis_temperature,
        writer_temperature=config.llm.writer_temperature,
    )


def _read(path: Path, label: str) -> str:
    if not path.exists():
        console.print(f"[red]{label} file not found: {path}[/red]")
        raise typer.Exit(1)
    try:
        return load_text_file(path)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


def _run(coro):
    """Run a coroutine, turning domain errors into a clean exit."""
    try:
        return asyncio.run(coro)
    except (AtsTailorError, ValueError) as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


def _print_score(result: ScoreResult) -> None:
    table = Table(title=f"ATS score ({result.method.value})")
    table.add_column("Component")
    table.add_column("Score", justify="right")
    for name, value in result.breakdown.model_dump().items():
        table.add_row(name.replace("_", " "), str(value))
    console.print(table)

    color = "green" if result.overall >= 80 else "yellow" if result.overall >= 60 else "red"
    console.print(f"[bold {color}]Overall: {result.overall}[/bold {color}]")
    if result.matched_keywords:
        console.print(f"[green]Matched:[/green] {', '.join(result.matched_keywords)}")
    if result.missing_keywords:
        console.print(f"[red]Missing:[/red] {', '.join(result.missing_keywords)}")


@app.command()
def score(
    resume: Path = typer.Argument(help="Résumé text file (.txt/.md)"),
    jd: Path = typer.Option(..., "--jd", help="Job description text file"),
    method: str = typer.Option(None, "--method", "-m", help="jobscan or resumeworded"),
    keywords: str = typer.Option(
        None, "--keywords", "-k", help="Comma-separated keywords (extracted from the JD if omitted)"
    ),
) -> None:
    """Score a résumé against a job description."""
    config = load_config()
    resume_text = _read(resume, "Résumé")
    jd_text = _read(jd, "Job description")
    try:
        scoring_method = resolve_method(method or config.scoring.default_method)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if keywords:
        keyword_list = [k for k in keywords.split(",") if k.strip()]
    else:
        extractor = KeywordExtractor(
            _build_llm(config),
            model=config.llm.fast_model,
            temperature=config.llm.analysis_temperature,
        )
        with console.status("Extracting keywords..."):
            analysis = _run(extractor.extract(jd_text, scoring_method))
        keyword_list = analysis.extracted_keywords

    _print_score(calculate_ats_score(resume_text, jd_text, keyword_list, scoring_method))


@app.command()
def keywords(
    jd: Path = typer.Argument(help="Job description text file"),
    title: str = typer.Option(..., "--title", "-t", help="Job title"),
    company: str = typer.Option(None, "--company", "-c", help="Company name"),
    url: str = typer.Option(None, "--url", help="Posting URL"),
) -> None:
    """Extract keywords from a job description and store it."""
    config = load_config()
    service = _build_service(config)
    jd_text = _read(jd, "Job description")

    with console.status("Analyzing job description..."):
        job = _run(
            service.add_job_description(
                title, jd_text, company=company, url=url, method=config.scoring.method,
            )
        )

    console.print(Panel(
        f"[bold]{job.title}[/bold]" + (f" @ {job.company}" if job.company else "") + "\n\n"
        f"Keywords: {', '.join(job.extracted_keywords) or '-'}\n"
        f"Required skills: {', '.join(job.required_skills) or '-'}",
        title=f"Job {job.id}",
    ))


@app.command()
def tailor(
    resume: Path = typer.Option(..., "--resume", help="Résumé text file (.txt/.md)"),
    job_id: str = typer.Option(None, "--job-id", help="Stored job description id"),
    jd: Path = typer.Option(None, "--jd", help="Job description file (stored on the fly)"),
    title: str = typer.Option("Untitled Position", "--title", "-t", help="Job title for --jd"),
    name: str = typer.Option(None, "--name", "-n", help="Version name"),
    method: str = typer.Option(None, "--method", "-m", help="jobscan or resumeworded"),
    output: Path = typer.Option(None, "--output", "-o", help="Also export the version to .docx"),
) -> None:
    """Tailor a résumé to a job and store the result as a new version."""
    if job_id is None and jd is None:
        console.print("[red]Pass either --job-id or --jd[/red]")
        raise typer.Exit(1)

    config = load_config()
    service = _build_service(config)
    try:
        scoring_method = resolve_method(method or config.scoring.default_method)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    stored = service.add_resume(resume.name, _read(resume, "Résumé"))
    jd_text = _read(jd, "Job description") if jd is not None else None

    async def _tailor():
        target = job_id
        if target is None:
            job = await service.add_job_description(title, jd_text, method=scoring_method)
            target = job.id
        return await service.tailor(stored.id, target, name, scoring_method)

    with console.status("Tailoring résumé..."):
        version = _run(_tailor())

    console.print(Panel(
        f"[bold]{version.version_name}[/bold]\n"
        f"ATS score: {_format_score(version.ats_score)}\n"
        f"Résumé: {version.resume_id}\n"
        f"Job: {version.job_description_id}\n"
        f"Keywords matched: {', '.join(version.keyword_matches) or '-'}\n"
        f"Improvements: {len(version.improvements)}",
        title=f"Version {version.id}",
    ))
    for imp in version.improvements:
        console.print(f"  [cyan]{imp.section}[/cyan]: {imp.reasoning}")

    if output is not None:
        path = service.export_docx(version.id, output)
        console.print(f"[green]DOCX saved: {path}[/green]")


def _format_score(score: Decimal | None) -> str:
    return "-" if score is None else str(score)


@app.command()
def versions(
    resume_id: str = typer.Option(None, "--resume-id", help="Only versions of this résumé"),
) -> None:
    """List tailored versions, newest first."""
    config = load_config()
    store = ResumeStore(config.storage.resolved_db_path)
    rows = store.list_versions(resume_id)
    if not rows:
        console.print("[yellow]No versions yet.[/yellow]")
        return

    table = Table(title="Résumé versions")
    table.add_column("ID", overflow="fold")
    table.add_column("Name")
    table.add_column("ATS", justify="right")
    table.add_column("Created")
    for v in rows:
        table.add_row(
            v.id, v.version_name, _format_score(v.ats_score), v.created_at.strftime("%Y-%m-%d %H:%M")
        )
    console.print(table)


@app.command()
def resumes() -> None:
    """List stored résumés and job descriptions with their ids."""
    config = load_config()
    store = ResumeStore(config.storage.resolved_db_path)
    stored_resumes = store.list_resumes()
    jobs = store.list_job_descriptions()
    if not stored_resumes and not jobs:
        console.print("[yellow]Nothing stored yet.[/yellow]")
        return

    table = Table(title="Résumés")
    table.add_column("ID", overflow="fold")
    table.add_column("File")
    table.add_column("Created")
    for r in stored_resumes:
        table.add_row(r.id, r.file_name, r.created_at.strftime("%Y-%m-%d %H:%M"))
    console.print(table)

    table = Table(title="Job descriptions")
    table.add_column("ID", overflow="fold")
    table.add_column("Title")
    table.add_column("Company")
    for j in jobs:
        table.add_row(j.id, j.title, j.company or "-")
    console.print(table)


@app.command()
def export(
    version_id: str = typer.Argument(help="Version id"),
    output: Path = typer.Option(None, "--output", "-o", help="Output .docx path"),
) -> None:
    """Export a tailored version as an ATS-friendly .docx."""
    config = load_config()
    store = ResumeStore(config.storage.resolved_db_path)
    service = TailoringService(None, store)
    version = store.get_version(version_id)
    if version is None:
        console.print(f"[red]Resume version not found: {version_id}[/red]")
        raise typer.Exit(1)

    if output is None:
        safe_name = version.version_name.replace(" ", "_").replace("/", "_")
        output = Path(config.storage.output_dir) / f"{safe_name}.docx"
    path = service.export_docx(version_id, output)
    console.print(f"[green]DOCX saved: {path}[/green]")


@app.command("cover-letter")
def cover_letter(
    version_id: str = typer.Argument(help="Version id"),
    tone: str = typer.Option("professional", "--tone", help="professional, casual or enthusiastic"),
    output: Path = typer.Option(None, "--output", "-o", help="Save the letter to a text file"),
) -> None:
    """Generate a cover letter for a tailored version."""
    service = _build_service(load_config())
    with console.status("Writing cover letter..."):
        letter = _run(service.generate_cover_letter(version_id, tone))

    console.print(Panel(letter.content, title=f"Cover letter ({letter.tone})"))
    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(letter.content, encoding="utf-8")
        console.print(f"[green]Saved: {output}[/green]")


@app.command()
def interview(
    version_id: str = typer.Argument(help="Version id"),
) -> None:
    """Generate interview questions with suggested answers."""
    service = _build_service(load_config())
    with console.status("Preparing interview questions..."):
        questions = _run(service.prepare_interview(version_id))

    for i, q in enumerate(questions, 1):
        console.print(Panel(
            q.suggested_answer,
            title=f"{i}. {q.question}",
            subtitle=f"{q.category} / {q.difficulty}",
        ))


@app.command("multi-job")
def multi_job(
    resume_id: str = typer.Option(..., "--resume-id", help="Stored résumé id"),
    job_ids: list[str] = typer.Option(..., "--job-id", help="Stored job description id (repeatable)"),
) -> None:
    """Find common keywords across several postings for a master résumé."""
    service = _build_service(load_config())
    with console.status("Analyzing postings..."):
        analysis = _run(service.analyze_multiple_jobs(resume_id, job_ids))

    console.print(Panel(
        f"Common keywords: {', '.join(analysis.common_keywords) or '-'}\n\n"
        f"{analysis.master_optimization}",
        title="Master résumé strategy" + (" (degraded)" if analysis.degraded else ""),
    ))
    table = Table()
    table.add_column("Job")
    table.add_column("Match", justify="right")
    table.add_column("Unique keywords")
    for insight in analysis.job_specific_insights:
        table.add_row(insight.title, str(insight.match_score), ", ".join(insight.unique_keywords))
    console.print(table)


@app.command()
def stats() -> None:
    """Show totals across stored résumés and versions."""
    config = load_config()
    summary = ResumeStore(config.storage.resolved_db_path).get_stats()
    console.print(Panel(
        f"Résumés: {summary.total_resumes}\n"
        f"Versions: {summary.total_versions}\n"
        f"Average ATS score: {summary.average_ats_score}\n"
        f"Applications: {summary.total_applications}",
        title="Statistics",
    ))


if __name__ == "__main__":
    app()
