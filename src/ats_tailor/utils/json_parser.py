"""Pull a JSON object out of an LLM reply."""

from __future__ import annotations

import json
import re

_FENCE = re.compile(r"^```[a-zA-Z]*\s*\n?(.*?)\n?```\s*$", re.DOTALL)


def extract_json(text: str) -> dict | list:
    """Parse JSON from a model reply.

    Accepts a bare document, a fenced ```json block, or prose wrapped around
    a single ``{...}`` object or ``[...]`` array. Raises ValueError when none
    of these parse.
    """
    text = (text or "").strip()
    candidates = [text]

    fenced = _FENCE.match(text)
    if fenced:
        candidates.append(fenced.group(1).strip())

    for opener, closer in (("{", "}"), ("[", "]")):
        start, end = text.find(opener), text.rfind(closer)
        if start != -1 and end > start:
            candidates.append(text[start : end + 1])

    for candidate in candidates:
        try:
            return json.loads(candidate)
        except json.JSONDecodeError:
            continue

    raise ValueError(f"Could not extract JSON from text: {text[:200]}...")
