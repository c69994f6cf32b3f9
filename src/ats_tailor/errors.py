"""Exception hierarchy for ats-tailor."""

from __future__ import annotations


class AtsTailorError(Exception):
    """Base class for all ats-tailor errors."""


class GenerationError(AtsTailorError):
    """An AI collaborator failed and has no degraded-mode substitute."""


class NotFoundError(AtsTailorError):
    """A stored record was requested by an id that does not exist."""

    def __init__(self, kind: str, record_id: str):
        super().__init__(f"{kind} not found: {record_id}")
        self.kind = kind
        self.record_id = record_id
