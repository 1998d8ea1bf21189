"""Pydantic models for planner configuration."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ModelSpec(BaseModel):
    provider: str = Field(default="openai-compatible")
    base_url: str = Field(default="https://api.openai.com/v1")
    api_key_env: str = Field(default="OPENAI_API_KEY")
    model_name: str = Field(default="gpt-4o")
    temperature: float = 0.2
    max_tokens: int = 4096


class PlannerConfig(BaseModel):
    model: ModelSpec = Field(default_factory=ModelSpec)
    output_dir: str = "code-review-plans"
    review_dir: str = "file-reviews"
    diagnostics_dir: str | None = None  # defaults to output_dir
    save_diagnostics: bool = True

    def resolved_diagnostics_dir(self) -> str:
        return self.diagnostics_dir or self.output_dir
