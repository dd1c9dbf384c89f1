"""Application configuration loaded from config.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from text_refiner.models.options import ChartPreference, RefineOptions


@dataclass(frozen=True)
class LLMConfig:
    model: str = "claude-sonnet-4-5-20250929"
    max_retries: int = 3
    timeout: int = 120
    max_tokens: int = 8192
    temperature: float = 0.2

    def __post_init__(self) -> None:
        if not 1 <= self.max_retries <= 10:
            raise ValueError(f"max_retries must be between 1 and 10, got {self.max_retries}")
        if self.timeout < 1:
            raise ValueError(f"timeout must be at least 1 second, got {self.timeout}")
        if self.max_tokens < 1:
            raise ValueError(f"max_tokens must be positive, got {self.max_tokens}")
        if not 0.0 <= self.temperature <= 1.0:
            raise ValueError(f"temperature must be between 0 and 1, got {self.temperature}")


@dataclass(frozen=True)
class RefineConfig:
    """Default preferences used when the caller does not override them."""

    academic_style: bool = False
    maintain_tone: bool = True
    expand: bool = True
    verify_accuracy: bool = False
    add_charts: bool = False
    chart_preference: str = "automatic"

    def __post_init__(self) -> None:
        allowed = {p.value for p in ChartPreference}
        if self.chart_preference not in allowed:
            raise ValueError(
                f"chart_preference must be one of {sorted(allowed)}, got {self.chart_preference!r}"
            )

    def to_options(self) -> RefineOptions:
        return RefineOptions(
            academic_style=self.academic_style,
            maintain_tone=self.maintain_tone,
            expand=self.expand,
            verify_accuracy=self.verify_accuracy,
            add_charts=self.add_charts,
            chart_preference=ChartPreference(self.chart_preference),
        )


@dataclass(frozen=True)
class ExportConfig:
    output_dir: str = "."
    basename: str = "refined-text"
    pdf_font_size: int = 12

    def __post_init__(self) -> None:
        if not self.basename.strip():
            raise ValueError("basename must not be empty")
        if not 6 <= self.pdf_font_size <= 32:
            raise ValueError(f"pdf_font_size must be between 6 and 32, got {self.pdf_font_size}")

    @property
    def resolved_output_dir(self) -> Path:
        return Path(self.output_dir).expanduser()


@dataclass(frozen=True)
class AppConfig:
    llm: LLMConfig = field(default_factory=LLMConfig)
    refine: RefineConfig = field(default_factory=RefineConfig)
    export: ExportConfig = field(default_factory=ExportConfig)


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
        refine=RefineConfig(**raw.get("refine", {})),
        export=ExportConfig(**raw.get("export", {})),
    )
