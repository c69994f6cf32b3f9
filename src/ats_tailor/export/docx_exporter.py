"""ATS-friendly DOCX rendering of parsed résumé sections."""

from __future__ import annotations

import re
from pathlib import Path

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Inches, Pt

from ats_tailor.export.skills import (
    CATEGORY_ORDER,
    DEFAULT_SKILLS,
    format_category_line,
    organize_skills_into_categories,
)
from ats_tailor.models.resume import ResumeSection, ResumeVersion
from ats_tailor.parsers.section_parser import (
    CONTENT_PREFIX,
    SUBSECTION_PREFIX,
    extract_contact_info,
    extract_user_name,
    parse_resume_sections,
)

SECTION_ORDER = ("SUMMARY", "EDUCATION", "SKILLS", "EXPERIENCE", "PROJECTS", "CERTIFICATIONS")
CONTACT_PLACEHOLDER = "Phone | Email | LinkedIn | GitHub | Location"
CERTIFICATION_MARKERS = ("CERTIFICATION", "CERTIFIED", "AWS", "MICROSOFT", "SCRUM")


# ---------------------------------------------------------------------------
# Section ordering (pure)
# ---------------------------------------------------------------------------

def _is_combined(section: ResumeSection) -> bool:
    title = section.title.upper()
    return "SKILLS" in title and "CERTIFICATIONS" in title


def split_combined_section(section: ResumeSection) -> list[ResumeSection]:
    """Split a "SKILLS & CERTIFICATIONS" section into its two halves."""
    certs = [
        item for item in section.content
        if any(marker in item.upper() for marker in CERTIFICATION_MARKERS)
    ]
    skills = [item for item in section.content if item not in certs]
    parts = []
    if skills:
        parts.append(ResumeSection(title="SKILLS", content=skills))
    if certs:
        parts.append(ResumeSection(title="CERTIFICATIONS", content=certs))
    return parts


def order_sections(sections: list[ResumeSection]) -> list[ResumeSection]:
    """Return at most one section per ``SECTION_ORDER`` slot, in that order.

    Sections whose titles match no slot (AWARDS, LANGUAGES, ...) are left out.
    """
    clean = [s for s in sections if not _is_combined(s)]
    combined = next((s for s in sections if _is_combined(s)), None)
    if combined is not None:
        clean.extend(split_combined_section(combined))

    ordered = []
    for name in SECTION_ORDER:
        match = next((s for s in clean if name in s.title.upper()), None)
        if match is not None:
            ordered.append(match)
    return ordered


def format_education_line(content: str) -> str:
    """Condense to "Degree – Institution (dates)" when both are detectable."""
    degree = re.search(r"[A-Z][a-z]+(?:\s+[A-Z][a-z]+)*", content)
    institution = re.search(r"University|College|Institute|School", content, re.IGNORECASE)
    dates = re.search(r"\d{4}[-–]\d{4}|\d{4}", content)
    if degree and institution:
        suffix = f"({dates.group(0)})" if dates else ""
        return f"{degree.group(0)} – {institution.group(0)} {suffix}".strip()
    return content


def format_certification(name: str) -> str:
    year = re.search(r"\((\d{4})\)", name)
    base = re.sub(r"\(\d{4}\)", "", name, count=1).strip()
    return f"{base} ({year.group(1)})" if year else base


# ---------------------------------------------------------------------------
# DOCX rendering
# ---------------------------------------------------------------------------

def _spaced(paragraph, before: int = 120, after: int = 120):
    # Values are in twentieths of a point, as Word stores them.
    paragraph.paragraph_format.space_before = Pt(before / 20)
    paragraph.paragraph_format.space_after = Pt(after / 20)
    return paragraph


def _add_bottom_border(paragraph) -> None:
    p_pr = paragraph._p.get_or_add_pPr()
    borders = OxmlElement("w:pBdr")
    bottom = OxmlElement("w:bottom")
    bottom.set(qn("w:val"), "single")
    bottom.set(qn("w:sz"), "4")
    bottom.set(qn("w:space"), "1")
    bottom.set(qn("w:color"), "000000")
    borders.append(bottom)
    p_pr.append(borders)


def _add_centered(doc, text: str, after: int) -> None:
    p = doc.add_paragraph(text)
    p.alignment = WD_ALIGN_PARAGRAPH.CENTER
    _spaced(p, before=0, after=after)


def _add_subsection(doc, text: str) -> None:
    p = _spaced(doc.add_paragraph(), before=240)
    run = p.add_run(text)
    run.bold = True
    run.font.size = Pt(12)


def _add_bullet(doc, text: str) -> None:
    p = _spaced(doc.add_paragraph())
    p.paragraph_format.left_indent = Inches(0.5)
    p.add_run("• ").bold = True
    p.add_run(text)


def _render_marked_items(doc, items: list[str], subsection_format=None) -> None:
    for item in items:
        if not item.strip():
            continue
        if item.startswith(SUBSECTION_PREFIX):
            name = item[len(SUBSECTION_PREFIX):]
            _add_subsection(doc, subsection_format(name) if subsection_format else name)
        elif item.startswith(CONTENT_PREFIX):
            _add_bullet(doc, item[len(CONTENT_PREFIX):])
        else:
            _add_bullet(doc, item)


def _render_education(doc, items: list[str]) -> None:
    for item in items:
        if not item.strip():
            continue
        if item.startswith(SUBSECTION_PREFIX):
            _spaced(doc.add_paragraph(item[len(SUBSECTION_PREFIX):]), before=240)
        elif item.startswith(CONTENT_PREFIX):
            _spaced(doc.add_paragraph(format_education_line(item[len(CONTENT_PREFIX):])))
        else:
            _spaced(doc.add_paragraph(format_education_line(item)))


def _render_skills(doc, items: list[str]) -> None:
    buckets = organize_skills_into_categories(items)
    for category in CATEGORY_ORDER:
        skills = buckets.get(category) or list(DEFAULT_SKILLS.get(category, ()))
        if skills:
            _spaced(doc.add_paragraph(format_category_line(category, skills)))


def _render_section(doc, section: ResumeSection) -> None:
    title = section.title.upper()
    heading = doc.add_heading(title, level=2)
    _spaced(heading, before=400, after=200)
    _add_bottom_border(heading)

    if "SUMMARY" in title:
        for item in section.content:
            if item.strip():
                _spaced(doc.add_paragraph(item))
    elif "EDUCATION" in title:
        _render_education(doc, section.content)
    elif "SKILLS" in title:
        _render_skills(doc, section.content)
    elif "CERTIFICATIONS" in title:
        _render_marked_items(doc, section.content, subsection_format=format_certification)
    else:
        _render_marked_items(doc, section.content)


def generate_ats_resume(
    sections: list[ResumeSection],
    output_path: str | Path,
    *,
    user_name: str | None = None,
    user_details: str | None = None,
) -> Path:
    """Render sections into a single-column, 1-inch-margin .docx file."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    doc = Document()
    for page in doc.sections:
        page.top_margin = page.bottom_margin = Inches(1)
        page.left_margin = page.right_margin = Inches(1)

    if user_name:
        heading = doc.add_heading(user_name, level=1)
        heading.alignment = WD_ALIGN_PARAGRAPH.CENTER
        _spaced(heading, before=0, after=200)

    title_section = next(
        (
            s for s in sections
            if "TITLE" in s.title.upper() or "POSITION" in s.title.upper()
        ),
        None,
    )
    if title_section is not None and title_section.content:
        _add_centered(doc, title_section.content[0], after=200)

    _add_centered(doc, user_details or CONTACT_PLACEHOLDER, after=400)

    for section in order_sections(sections):
        _render_section(doc, section)

    doc.save(str(output_path))
    return output_path


def export_version_docx(
    version: ResumeVersion,
    original_resume_text: str,
    output_path: str | Path,
) -> Path:
    """Parse a tailored version and render it with the candidate's header."""
    return generate_ats_resume(
        parse_resume_sections(version.tailored_content),
        output_path,
        user_name=extract_user_name(original_resume_text),
        user_details=extract_contact_info(original_resume_text),
    )
