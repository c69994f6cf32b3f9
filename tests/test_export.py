"""Tests for skill categorization and DOCX export."""

from datetime import datetime
from decimal import Decimal

from docx import Document

from ats_tailor.export import SECTION_ORDER, export_version_docx, generate_ats_resume, order_sections
from ats_tailor.export.docx_exporter import (
    CONTACT_PLACEHOLDER,
    format_certification,
    format_education_line,
    split_combined_section,
)
from ats_tailor.export.skills import (
    extract_skills_from_content,
    format_category_line,
    organize_skills_into_categories,
    standardize_skill_name,
)
from ats_tailor.models.resume import ResumeSection, ResumeVersion


def _texts(path) -> list[str]:
    return [p.text for p in Document(str(path)).paragraphs]


class TestSkills:
    def test_standard_names(self):
        assert standardize_skill_name("postgres") == "PostgreSQL"
        assert standardize_skill_name("NodeJS") == "Node.js"
        assert standardize_skill_name("postgres 14") == "PostgreSQL"

    def test_unknown_skill_is_title_cased(self):
        assert standardize_skill_name("machine learning") == "Machine Learning"

    def test_extract_strips_category_prefix(self):
        assert extract_skills_from_content("Languages: python, java.") == ["Python", "Java"]

    def test_organize_into_categories(self):
        buckets = organize_skills_into_categories([
            "Languages: Python, Java",
            "React, Redis, Docker",
            "Jira, Agile",
            "Eligible to work in the U.S.",
            "",
        ])
        assert buckets == {
            "Languages": ["Python", "Java"],
            "Frameworks/Libraries": ["React"],
            "Databases": ["Redis"],
            "Cloud/DevOps": ["Docker"],
            "Tools": ["Jira"],
            "Practices": ["Agile"],
        }

    def test_duplicates_collapse(self):
        buckets = organize_skills_into_categories(["Python, python", "PYTHON"])
        assert buckets["Languages"] == ["Python"]

    def test_category_line(self):
        assert format_category_line("Tools", ["Jira", "Git", "Jira"]) == "Tools:" + " " * 15 + "Git, Jira"


class TestSectionOrdering:
    def test_canonical_order_and_split(self):
        sections = [
            ResumeSection(title="EXPERIENCE", content=["Built APIs"]),
            ResumeSection(
                title="SKILLS & CERTIFICATIONS",
                content=["Python, Docker", "AWS Certified Developer (2023)"],
            ),
            ResumeSection(title="PROFESSIONAL SUMMARY", content=["Engineer."]),
            ResumeSection(title="AWARDS", content=["Hackathon winner"]),
        ]
        ordered = order_sections(sections)
        assert [s.title for s in ordered] == [
            "PROFESSIONAL SUMMARY", "SKILLS", "EXPERIENCE", "CERTIFICATIONS",
        ]
        assert ordered[1].content == ["Python, Docker"]
        assert ordered[3].content == ["AWS Certified Developer (2023)"]

    def test_split_without_certifications(self):
        parts = split_combined_section(
            ResumeSection(title="SKILLS AND CERTIFICATIONS", content=["Python"])
        )
        assert parts == [ResumeSection(title="SKILLS", content=["Python"])]

    def test_section_order_constant(self):
        assert SECTION_ORDER[0] == "SUMMARY"
        assert SECTION_ORDER[-1] == "CERTIFICATIONS"


class TestFormatting:
    def test_education_line(self):
        assert (
            format_education_line("Bachelor of Science, State University, 2016-2020")
            == "Bachelor – University (2016-2020)"
        )

    def test_education_line_without_institution(self):
        assert format_education_line("Online coursework") == "Online coursework"

    def test_certification_year(self):
        assert format_certification("AWS Certified Developer (2023)") == "AWS Certified Developer (2023)"
        assert format_certification("CKA") == "CKA"


class TestGenerateAtsResume:
    def test_renders_header_and_sections(self, tmp_path):
        sections = [
            ResumeSection(title="EXPERIENCE", content=[
                "SUBSECTION: Acme Corp - Engineer",
                "CONTENT: Built APIs",
            ]),
            ResumeSection(title="SUMMARY", content=["Backend engineer."]),
            ResumeSection(title="SKILLS", content=["Python, Docker"]),
        ]
        path = generate_ats_resume(
            sections, tmp_path / "out" / "resume.docx", user_name="Jane Doe",
        )

        assert path.exists()
        texts = _texts(path)
        assert texts[0] == "Jane Doe"
        assert texts[1] == CONTACT_PLACEHOLDER
        headings = [t for t in texts if t in ("SUMMARY", "SKILLS", "EXPERIENCE")]
        assert headings == ["SUMMARY", "SKILLS", "EXPERIENCE"]
        assert "• Built APIs" in texts
        assert "Acme Corp - Engineer" in texts
        assert any(t.startswith("Languages:") and "Python" in t for t in texts)
        # empty categories fall back to defaults
        assert any(t.startswith("Tools:") for t in texts)

    def test_export_version_uses_original_header(self, tmp_path, sample_resume_text):
        version = ResumeVersion(
            id="v1",
            resume_id="r1",
            job_description_id="j1",
            version_name="Backend - 2026-01-01",
            tailored_content="SUMMARY\nBackend engineer for payments.\nSKILLS\nPython",
            ats_score=Decimal("82"),
            created_at=datetime(2026, 1, 1),
        )
        path = export_version_docx(version, sample_resume_text, tmp_path / "v1.docx")
        texts = _texts(path)
        assert texts[0] == "Jane Doe"
        assert texts[1] == "+15551234567 | jane@example.com | linkedin.com/in/janedoe"
        assert "Backend engineer for payments." in texts
