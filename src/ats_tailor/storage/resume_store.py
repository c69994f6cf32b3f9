"""SQLite-backed storage for résumés, job descriptions and tailored versions."""

from __future__ import annotations

import json
import logging
import sqlite3
import uuid
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from ats_tailor.models.interview import CoverLetter, InterviewQuestion, InterviewQuestionDraft
from ats_tailor.models.job import JobDescription
from ats_tailor.models.resume import Improvement, Resume, ResumeVersion, StoreStats
from ats_tailor.scoring.text import round_half_up

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".ats-tailor" / "ats_tailor.db"

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS resumes (
        id TEXT PRIMARY KEY,
        file_name TEXT NOT NULL,
        original_content TEXT NOT NULL,
        file_type TEXT NOT NULL,
        file_size INTEGER NOT NULL,
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS job_descriptions (
        id TEXT PRIMARY KEY,
        title TEXT NOT NULL,
        company TEXT,
        description TEXT NOT NULL,
        url TEXT,
        extracted_keywords TEXT NOT NULL DEFAULT '[]',
        required_skills TEXT NOT NULL DEFAULT '[]',
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS resume_versions (
        id TEXT PRIMARY KEY,
        resume_id TEXT NOT NULL REFERENCES resumes(id) ON DELETE CASCADE,
        job_description_id TEXT NOT NULL REFERENCES job_descriptions(id),
        version_name TEXT NOT NULL,
        tailored_content TEXT NOT NULL,
        ats_score TEXT,
        keyword_matches TEXT NOT NULL DEFAULT '[]',
        improvements TEXT NOT NULL DEFAULT '[]',
        is_active INTEGER NOT NULL DEFAULT 1,
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS cover_letters (
        id TEXT PRIMARY KEY,
        resume_version_id TEXT NOT NULL REFERENCES resume_versions(id) ON DELETE CASCADE,
        content TEXT NOT NULL,
        tone TEXT NOT NULL DEFAULT 'professional',
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS interview_questions (
        id TEXT PRIMARY KEY,
        resume_version_id TEXT NOT NULL REFERENCES resume_versions(id) ON DELETE CASCADE,
        question TEXT NOT NULL,
        suggested_answer TEXT NOT NULL,
        category TEXT NOT NULL,
        difficulty TEXT NOT NULL DEFAULT 'medium',
        created_at TEXT NOT NULL
    )
    """,
)

_VERSION_COLUMNS = (
    "id, resume_id, job_description_id, version_name, tailored_content, "
    "ats_score, keyword_matches, improvements, is_active, created_at"
)


def _new_id() -> str:
    return str(uuid.uuid4())


class ResumeStore:
    """Single-user SQLite store. Listings are newest first.

    A version's ``ats_score`` is written once on insert; there is no update path.
    Deleting a résumé deletes its versions and everything generated from them.
    """

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self.db_path))
        conn.execute("PRAGMA foreign_keys=ON")
        return conn

    def _init_db(self) -> None:
        with self._connect() as conn:
            for statement in _SCHEMA:
                conn.execute(statement)

    # -- résumés -----------------------------------------------------------

    def create_resume(
        self,
        file_name: str,
        original_content: str,
        file_type: str = "text/plain",
        file_size: int | None = None,
    ) -> Resume:
        resume = Resume(
            id=_new_id(),
            file_name=file_name,
            original_content=original_content,
            file_type=file_type,
            file_size=file_size if file_size is not None else len(original_content.encode("utf-8")),
            created_at=datetime.now(),
        )
        with self._connect() as conn:
            conn.execute(
                """INSERT INTO resumes
                   (id, file_name, original_content, file_type, file_size, created_at)
                   VALUES (?, ?, ?, ?, ?, ?)""",
                (
                    resume.id,
                    resume.file_name,
                    resume.original_content,
                    resume.file_type,
                    resume.file_size,
                    resume.created_at.isoformat(),
                ),
            )
        logger.debug("Stored résumé %s (%s)", resume.id, file_name)
        return resume

    def get_resume(self, resume_id: str) -> Resume | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT id, file_name, original_content, file_type, file_size, created_at "
                "FROM resumes WHERE id = ?",
                (resume_id,),
            ).fetchone()
        return self._row_to_resume(row) if row else None

    def list_resumes(self) -> list[Resume]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT id, file_name, original_content, file_type, file_size, created_at "
                "FROM resumes ORDER BY created_at DESC, rowid DESC"
            ).fetchall()
        return [self._row_to_resume(row) for row in rows]

    def delete_resume(self, resume_id: str) -> bool:
        """Delete a résumé. Returns True if a row was removed."""
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM resumes WHERE id = ?", (resume_id,))
        return cursor.rowcount > 0

    # -- job descriptions --------------------------------------------------

    def create_job_description(
        self,
        title: str,
        description: str,
        company: str | None = None,
        url: str | None = None,
        extracted_keywords: list[str] | None = None,
        required_skills: list[str] | None = None,
    ) -> JobDescription:
        job = JobDescription(
            id=_new_id(),
            title=title,
            company=company,
            description=description,
            url=url,
            extracted_keywords=extracted_keywords or [],
            required_skills=required_skills or [],
            created_at=datetime.now(),
        )
        with self._connect() as conn:
            conn.execute(
                """INSERT INTO job_descriptions
                   (id, title, company, description, url,
                    extracted_keywords, required_skills, created_at)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
                (
                    job.id,
                    job.title,
                    job.company,
                    job.description,
                    job.url,
                    json.dumps(job.extracted_keywords, ensure_ascii=False),
                    json.dumps(job.required_skills, ensure_ascii=False),
                    job.created_at.isoformat(),
                ),
            )
        return job

    def get_job_description(self, job_id: str) -> JobDescription | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT id, title, company, description, url, extracted_keywords, "
                "required_skills, created_at FROM job_descriptions WHERE id = ?",
                (job_id,),
            ).fetchone()
        return self._row_to_job(row) if row else None

    def list_job_descriptions(self) -> list[JobDescription]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT id, title, company, description, url, extracted_keywords, "
                "required_skills, created_at FROM job_descriptions "
                "ORDER BY created_at DESC, rowid DESC"
            ).fetchall()
        return [self._row_to_job(row) for row in rows]

    # -- versions ----------------------------------------------------------

    def create_version(
        self,
        resume_id: str,
        job_description_id: str,
        version_name: str,
        tailored_content: str,
        ats_score: Decimal | None = None,
        keyword_matches: list[str] | None = None,
        improvements: list[Improvement] | None = None,
    ) -> ResumeVersion:
        version = ResumeVersion(
            id=_new_id(),
            resume_id=resume_id,
            job_description_id=job_description_id,
            version_name=version_name,
            tailored_content=tailored_content,
            ats_score=ats_score,
            keyword_matches=keyword_matches or [],
            improvements=improvements or [],
            created_at=datetime.now(),
        )
        with self._connect() as conn:
            conn.execute(
                f"INSERT INTO resume_versions ({_VERSION_COLUMNS}) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    version.id,
                    version.resume_id,
                    version.job_description_id,
                    version.version_name,
                    version.tailored_content,
                    str(version.ats_score) if version.ats_score is not None else None,
                    json.dumps(version.keyword_matches, ensure_ascii=False),
                    json.dumps(
                        [i.model_dump() for i in version.improvements], ensure_ascii=False
                    ),
                    1 if version.is_active else 0,
                    version.created_at.isoformat(),
                ),
            )
        logger.debug("Stored version %s for résumé %s", version.id, resume_id)
        return version

    def get_version(self, version_id: str) -> ResumeVersion | None:
        with self._connect() as conn:
            row = conn.execute(
                f"SELECT {_VERSION_COLUMNS} FROM resume_versions WHERE id = ?",
                (version_id,),
            ).fetchone()
        return self._row_to_version(row) if row else None

    def list_versions(self, resume_id: str | None = None) -> list[ResumeVersion]:
        """List versions of one résumé, or of all résumés when ``resume_id`` is None."""
        with self._connect() as conn:
            if resume_id is not None:
                rows = conn.execute(
                    f"SELECT {_VERSION_COLUMNS} FROM resume_versions "
                    "WHERE resume_id = ? ORDER BY created_at DESC, rowid DESC",
                    (resume_id,),
                ).fetchall()
            else:
                rows = conn.execute(
                    f"SELECT {_VERSION_COLUMNS} FROM resume_versions "
                    "ORDER BY created_at DESC, rowid DESC"
                ).fetchall()
        return [self._row_to_version(row) for row in rows]

    def delete_version(self, version_id: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM resume_versions WHERE id = ?", (version_id,))
        return cursor.rowcount > 0

    # -- cover letters & interview questions -------------------------------

    def create_cover_letter(
        self,
        resume_version_id: str,
        content: str,
        tone: str = "professional",
    ) -> CoverLetter:
        letter = CoverLetter(
            id=_new_id(),
            resume_version_id=resume_version_id,
            content=content,
            tone=tone,
            created_at=datetime.now(),
        )
        with self._connect() as conn:
            conn.execute(
                """INSERT INTO cover_letters (id, resume_version_id, content, tone, created_at)
                   VALUES (?, ?, ?, ?, ?)""",
                (letter.id, letter.resume_version_id, letter.content, letter.tone,
                 letter.created_at.isoformat()),
            )
        return letter

    def list_cover_letters(self, resume_version_id: str) -> list[CoverLetter]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT id, resume_version_id, content, tone, created_at FROM cover_letters "
                "WHERE resume_version_id = ? ORDER BY created_at DESC, rowid DESC",
                (resume_version_id,),
            ).fetchall()
        return [
            CoverLetter(
                id=row[0],
                resume_version_id=row[1],
                content=row[2],
                tone=row[3],
                created_at=datetime.fromisoformat(row[4]),
            )
            for row in rows
        ]

    def create_interview_questions(
        self,
        resume_version_id: str,
        drafts: list[InterviewQuestionDraft],
    ) -> list[InterviewQuestion]:
        if not drafts:
            return []
        created_at = datetime.now()
        questions = [
            InterviewQuestion(
                id=_new_id(),
                resume_version_id=resume_version_id,
                question=d.question,
                suggested_answer=d.suggested_answer,
                category=d.category,
                difficulty=d.difficulty,
                created_at=created_at,
            )
            for d in drafts
        ]
        with self._connect() as conn:
            conn.executemany(
                """INSERT INTO interview_questions
                   (id, resume_version_id, question, suggested_answer,
                    category, difficulty, created_at)
                   VALUES (?, ?, ?, ?, ?, ?, ?)""",
                [
                    (q.id, q.resume_version_id, q.question, q.suggested_answer,
                     q.category, q.difficulty, q.created_at.isoformat())
                    for q in questions
                ],
            )
        return questions

    def list_interview_questions(self, resume_version_id: str) -> list[InterviewQuestion]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT id, resume_version_id, question, suggested_answer, category, "
                "difficulty, created_at FROM interview_questions "
                "WHERE resume_version_id = ? ORDER BY created_at DESC, rowid DESC",
                (resume_version_id,),
            ).fetchall()
        return [
            InterviewQuestion(
                id=row[0],
                resume_version_id=row[1],
                question=row[2],
                suggested_answer=row[3],
                category=row[4],
                difficulty=row[5],
                created_at=datetime.fromisoformat(row[6]),
            )
            for row in rows
        ]

    # -- statistics --------------------------------------------------------

    def get_stats(self) -> StoreStats:
        """Totals plus the mean version score. Every version counts as an application."""
        with self._connect() as conn:
            total_resumes = conn.execute("SELECT COUNT(*) FROM resumes").fetchone()[0]
            scores = [
                row[0]
                for row in conn.execute("SELECT ats_score FROM resume_versions").fetchall()
            ]

        total_versions = len(scores)
        if total_versions:
            average = sum(float(s or 0) for s in scores) / total_versions
        else:
            average = 0.0
        return StoreStats(
            total_resumes=total_resumes,
            total_versions=total_versions,
            average_ats_score=round_half_up(average),
            total_applications=total_versions,
        )

    @staticmethod
    def _row_to_resume(row: tuple) -> Resume:
        return Resume(
            id=row[0],
            file_name=row[1],
            original_content=row[2],
            file_type=row[3],
            file_size=row[4],
            created_at=datetime.fromisoformat(row[5]),
        )

    @staticmethod
    def _row_to_job(row: tuple) -> JobDescription:
        return JobDescription(
            id=row[0],
            title=row[1],
            company=row[2],
            description=row[3],
            url=row[4],
            extracted_keywords=json.loads(row[5]),
            required_skills=json.loads(row[6]),
            created_at=datetime.fromisoformat(row[7]),
        )

    @staticmethod
    def _row_to_version(row: tuple) -> ResumeVersion:
        return ResumeVersion(
            id=row[0],
            resume_id=row[1],
            job_description_id=row[2],
            version_name=row[3],
            tailored_content=row[4],
            ats_score=Decimal(row[5]) if row[5] is not None else None,
            keyword_matches=json.loads(row[6]),
            improvements=[Improvement(**item) for item in json.loads(row[7])],
            is_active=bool(row[8]),
            created_at=datetime.fromisoformat(row[9]),
        )
