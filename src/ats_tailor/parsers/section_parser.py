"""Split flat tailored résumé text into ordered sections.

A line-by-line heuristic: header lines open sections, short dash/paren lines
become subsection markers, everything else is content. Misclassifications
are expected with free-form text; the rules below are the contract.
"""

from __future__ import annotations

import re

from ats_tailor.models.resume import ResumeSection
from ats_tailor.scoring.vocabulary import SECTION_HEADERS

SUBSECTION_PREFIX = "SUBSECTION: "
CONTENT_PREFIX = "CONTENT: "

MAX_HEADER_LENGTH = 50
MAX_SUBSECTION_LENGTH = 100
HEADER_FORBIDDEN = ("•", "-", "–")
SUBSECTION_HINTS = ("–", "-", "(", "Tech Stack:", "Stack:")
BULLET_PREFIXES = ("•", "-", "*")

_LEADING_BULLET = re.compile(r"^[•\-*]\s*")

# Words that mark a line as a section heading in the name/contact scan.
_HEADING_WORDS = ("SUMMARY", "EXPERIENCE", "PROJECTS", "SKILLS", "EDUCATION", "CERTIFICATIONS")


def is_section_header(line: str, *, forbidden: tuple[str, ...] = HEADER_FORBIDDEN) -> bool:
    upper = line.upper()
    return (
        len(line) < MAX_HEADER_LENGTH
        and any(header in upper for header in SECTION_HEADERS)
        and not any(ch in line for ch in forbidden)
    )


def is_subsection_header(line: str) -> bool:
    return (
        0 < len(line) < MAX_SUBSECTION_LENGTH
        and not line.startswith(BULLET_PREFIXES)
        and any(hint in line for hint in SUBSECTION_HINTS)
    )


def strip_bullet(line: str) -> str:
    return _LEADING_BULLET.sub("", line).strip()


def _lines(content: str) -> list[str]:
    return [line.strip() for line in content.split("\n") if line.strip()]


def parse_resume_sections(content: str) -> list[ResumeSection]:
    """Parse text into sections, detecting company/project subsections."""
    sections: list[ResumeSection] = []
    current: ResumeSection | None = None
    in_subsection = False

    for line in _lines(content):
        if is_section_header(line):
            if current is not None:
                sections.append(current)
            current = ResumeSection(title=line, content=[])
            in_subsection = False
        elif current is None:
            # Nothing before the first header is kept.
            continue
        elif is_subsection_header(line):
            in_subsection = True
            current.content.append(f"{SUBSECTION_PREFIX}{line}")
        else:
            cleaned = strip_bullet(line)
            if cleaned:
                current.content.append(f"{CONTENT_PREFIX}{cleaned}" if in_subsection else cleaned)

    if current is not None:
        sections.append(current)
    return sections


def parse_resume_sections_simple(content: str) -> list[ResumeSection]:
    """Header/content split without subsection detection."""
    sections: list[ResumeSection] = []
    current: ResumeSection | None = None

    for line in _lines(content):
        if is_section_header(line, forbidden=("•", "-")):
            if current is not None:
                sections.append(current)
            current = ResumeSection(title=line, content=[])
        elif current is not None:
            cleaned = strip_bullet(line)
            if cleaned:
                current.content.append(cleaned)

    if current is not None:
        sections.append(current)
    return sections


def sections_to_text(sections: list[ResumeSection]) -> str:
    """Rebuild plain text from parsed sections.

    Content lines are re-emitted as "- " bullets so a second parse classifies
    them as content again.
    """
    lines: list[str] = []
    for section in sections:
        lines.append(section.title)
        for item in section.content:
            if item.startswith(SUBSECTION_PREFIX):
                lines.append(item[len(SUBSECTION_PREFIX):])
            elif item.startswith(CONTENT_PREFIX):
                lines.append(f"- {item[len(CONTENT_PREFIX):]}")
            else:
                lines.append(f"- {item}")
        lines.append("")
    return "\n".join(lines).strip()


def _is_plain_header_line(line: str) -> bool:
    return (
        bool(line)
        and not any(word in line for word in _HEADING_WORDS)
        and "•" not in line
        and "-" not in line
    )


def extract_user_name(content: str) -> str | None:
    """Guess the candidate's name: the first plain line of the résumé."""
    for line in content.split("\n"):
        trimmed = line.strip()
        if _is_plain_header_line(trimmed):
            return trimmed
    return None


_EMAIL = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
_PHONE = re.compile(r"[+]?[1-9]\d{0,15}")
_LINKEDIN = re.compile(r"linkedin\.com/in/[a-zA-Z0-9-]+", re.IGNORECASE)
_GITHUB = re.compile(r"github\.com/[a-zA-Z0-9-]+", re.IGNORECASE)
_LOCATION = re.compile(r"[A-Z][a-z]+(?:[\s,]+[A-Z][a-z]+)*")


def extract_contact_info(content: str) -> str | None:
    """Build a "phone | email | linkedin | github | location" line.

    Scans the plain lines after the name line; later lines overwrite earlier
    matches of the same kind.
    """
    found_name = False
    contact: dict[str, str] = {}

    for line in content.split("\n"):
        trimmed = line.strip()
        plain = _is_plain_header_line(trimmed)
        if found_name and plain:
            email = _EMAIL.search(trimmed)
            phone = _PHONE.search(trimmed)
            linkedin = _LINKEDIN.search(trimmed)
            github = _GITHUB.search(trimmed)
            location = _LOCATION.search(trimmed)
            if email:
                contact["email"] = email.group(0)
            if phone:
                contact["phone"] = phone.group(0)
            if linkedin:
                contact["linkedin"] = f"linkedin.com/in/{linkedin.group(0).split('/')[-1]}"
            if github:
                contact["github"] = f"github.com/{github.group(0).split('/')[-1]}"
            if location and not any(k in contact for k in ("email", "phone", "linkedin", "github")):
                contact["location"] = location.group(0)
        if plain:
            found_name = True

    parts = [contact[k] for k in ("phone", "email", "linkedin", "github", "location") if k in contact]
    return " | ".join(parts) if parts else None
