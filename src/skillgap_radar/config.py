"""Application configuration loaded from config.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

ANALYSIS_MODES = ("standard", "deep")


@dataclass(frozen=True)
class LLMConfig:
    model: str = "claude-sonnet-4-5-20250929"
    mode: str = "standard"
    max_tokens: int = 8192
    deep_max_tokens: int = 16384
    thinking_budget: int = 8192
    temperature: float = 0.0
    timeout: int = 120
    max_retries: int = 0

    def __post_init__(self) -> None:
        if self.mode not in ANALYSIS_MODES:
            raise ValueError(f"mode must be one of {ANALYSIS_MODES}, got {self.mode!r}")
        if self.timeout < 1:
            raise ValueError(f"timeout must be >= 1, got {self.timeout}")
        if self.max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {self.max_retries}")
        if self.max_tokens < 1:
            raise ValueError(f"max_tokens must be >= 1, got {self.max_tokens}")
        # Anthropic requires the thinking budget to fit inside max_tokens
        if not 1024 <= self.thinking_budget < self.deep_max_tokens:
            raise ValueError(
                f"thinking_budget must be in [1024, deep_max_tokens), got {self.thinking_budget}"
            )


@dataclass(frozen=True)
class StorageConfig:
    db_path: str = "~/.skillgap-radar/state.db"

    @property
    def resolved_db_path(self) -> Path:
        return Path(self.db_path).expanduser()


@dataclass(frozen=True)
class UploadConfig:
    max_size_mb: int = 10
    max_jd_chars: int = 10000

    def __post_init__(self) -> None:
        if self.max_size_mb < 1:
            raise ValueError(f"max_size_mb must be >= 1, got {self.max_size_mb}")
        if self.max_jd_chars < 1:
            raise ValueError(f"max_jd_chars must be >= 1, got {self.max_jd_chars}")

    @property
    def max_size_bytes(self) -> int:
        return self.max_size_mb * 1024 * 1024


@dataclass(frozen=True)
class AppConfig:
    llm: LLMConfig = field(default_factory=LLMConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    upload: UploadConfig = field(default_factory=UploadConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        # Look for config.yaml relative to the project root
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
        storage=StorageConfig(**raw.get("storage", {})),
        upload=UploadConfig(**raw.get("upload", {})),
    )
