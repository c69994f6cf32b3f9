"""Application configuration loaded from config.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from ats_tailor.models.scoring import ScoringMethod


@dataclass(frozen=True)
class LLMConfig:
    fast_model: str = "claude-haiku-4-5-20251001"
    writer_model: str = "claude-sonnet-4-5-20250929"
    max_retries: int = 3
    timeout: int = 120
    analysis_temperature: float = 0.1
    writer_temperature: float = 0.3

    def __post_init__(self) -> None:
        if not 1 <= self.timeout <= 600:
            raise ValueError(f"llm.timeout must be between 1 and 600, got {self.timeout}")
        if not 1 <= self.max_retries <= 10:
            raise ValueError(f"llm.max_retries must be between 1 and 10, got {self.max_retries}")
        for name in ("analysis_temperature", "writer_temperature"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"llm.{name} must be between 0.0 and 1.0, got {value}")


@dataclass(frozen=True)
class ScoringConfig:
    default_method: str = ScoringMethod.JOBSCAN.value

    def __post_init__(self) -> None:
        valid = [m.value for m in ScoringMethod]
        if self.default_method not in valid:
            raise ValueError(
                f"scoring.default_method must be one of {valid}, got {self.default_method!r}"
            )

    @property
    def method(self) -> ScoringMethod:
        return ScoringMethod(self.default_method)


@dataclass(frozen=True)
class StorageConfig:
    db_path: str = "~/.ats-tailor/ats_tailor.db"
    output_dir: str = "./output"

    @property
    def resolved_db_path(self) -> Path:
        return Path(self.db_path).expanduser()


@dataclass(frozen=True)
class AppConfig:
    llm: LLMConfig = field(default_factory=LLMConfig)
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        candidates = [
            Path.cwd() / "config.yaml",
            Path(__file__).resolve().parent.parent.parent / "config.yaml",
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text()) or {}

    return AppConfig(
        llm=LLMConfig(**raw.get("llm", {})),
        scoring=ScoringConfig(**raw.get("scoring", {})),
        storage=StorageConfig(**raw.get("storage", {})),
    )
