"""Pydantic models for the review plan."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class FileEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str
    reason: str = ""


class Category(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    priority: int = 0  # conventionally 1-3, 1 reviewed first
    description: str = ""
    files: list[FileEntry] = Field(default_factory=list)


class Plan(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str
    description: str
    tech_stack: list[str] = Field(default_factory=list, alias="techStack")
    categories: list[Category] = Field(default_factory=list)
    # Pointers to saved raw/extracted responses when the plan was salvaged.
    diagnostics: list[str] = Field(default_factory=list)
