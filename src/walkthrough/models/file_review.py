"""Pydantic models for a per-file method review."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class MethodEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    source: str = ""  # owning class or interface


class FileReview(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    file_path: str = Field(alias="filePath")
    methods: list[MethodEntry] = Field(default_factory=list)
    review_date: datetime = Field(alias="reviewDate")
