"""Plain-text résumé and job description intake."""

from __future__ import annotations

import re
from pathlib import Path

TEXT_SUFFIXES = (".txt", ".md")

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_INVISIBLE = re.compile(r"[\u200b\u200c\u200d\u00ad\u2060\ufeff]")


def load_text_file(file_path: str | Path) -> str:
    """Read a .txt/.md résumé or job description with control characters removed.

    Spacing is kept as written: the scorers count words with ``split(" ")``
    and measure raw length. PDF and DOCX extraction happen upstream.
    """
    path = Path(file_path)
    if path.suffix.lower() not in TEXT_SUFFIXES:
        raise ValueError(
            f"Unsupported file format: {path.suffix or '(none)'} "
            f"(expected one of {', '.join(TEXT_SUFFIXES)})"
        )
    return sanitize_content(path.read_text(encoding="utf-8"))


def sanitize_content(text: str) -> str:
    """Drop NUL and other control characters that break storage."""
    return _CONTROL_CHARS.sub("", text)


def clean_resume_text(text: str) -> str:
    """Normalize invisible characters, runs of spaces and blank lines.

    Bullet glyphs are left alone: the scorers and the section parser read them.
    """
    text = _INVISIBLE.sub("", text)
    text = text.replace("\r\n", "\n").replace("\r", "\n")

    lines = []
    for line in text.split("\n"):
        stripped = line.lstrip()
        indent = line[: len(line) - len(stripped)].replace("\t", "    ")
        stripped = re.sub(r"[ \t]{2,}", " ", stripped).rstrip()
        lines.append(f"{indent}{stripped}" if stripped else "")
    text = "\n".join(lines)

    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()
