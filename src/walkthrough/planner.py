"""Review planning: ask the model, recover its answer, persist the result."""

from __future__ import annotations

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Callable

from pydantic_ai import Agent
from pydantic_ai.models import Model
from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.providers.openai import OpenAIProvider
from pydantic_ai.settings import ModelSettings

from walkthrough.diagnostics import DiagnosticSink
from walkthrough.io_utils import dump_json, read_input, timestamp, write_output
from walkthrough.models.file_review import FileReview
from walkthrough.models.plan import Plan
from walkthrough.models.settings import ModelSpec, PlannerConfig
from walkthrough.pipeline import recover_file_review, recover_plan
from walkthrough.prompting import load_prompt_template, make_file_review_prompt, make_plan_prompt
from walkthrough.report import render_file_review_markdown, render_plan_markdown

logger = logging.getLogger(__name__)


class ReviewPlanner:
    def __init__(
        self,
        config: PlannerConfig,
        *,
        model: Model | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.config: PlannerConfig = config
        self.model: Model = model or build_model(config.model)
        self.model_settings: ModelSettings = build_model_settings(config.model)
        self._clock = clock
        self.output_dir: Path = Path(config.output_dir)
        self.review_dir: Path = Path(config.review_dir)
        self.sink: DiagnosticSink | None = None
        if config.save_diagnostics:
            self.sink = DiagnosticSink(Path(config.resolved_diagnostics_dir()), clock=clock)
        self.plan_template = load_prompt_template("review_plan")
        self.review_template = load_prompt_template("file_review")

    async def _complete(self, prompt: str) -> str:
        agent = Agent(self.model, output_type=str, model_settings=self.model_settings)
        result = await agent.run(prompt)
        return result.output

    async def create_plan(self, tree_markdown: str, project_description: str = "") -> Plan:
        prompt = make_plan_prompt(tree_markdown, project_description, self.plan_template)
        response = await self._complete(prompt)
        logger.info("Processing model response (%d chars).", len(response))
        recovery = recover_plan(response, sink=self.sink)
        logger.info("Plan %r recovered at stage %s.", recovery.value.title, recovery.stage.value)
        self.save_plan(recovery.value)
        return recovery.value

    async def review_file(self, file_path: Path, tree_markdown: str) -> FileReview:
        resolved = file_path.expanduser().resolve(strict=False)
        if not resolved.exists():
            logger.warning("File not found: %s", resolved)
            return FileReview(file_path=str(resolved), methods=[], review_date=self._clock())

        prompt = make_file_review_prompt(str(file_path), read_input(resolved), tree_markdown, self.review_template)
        response = await self._complete(prompt)
        recovery = recover_file_review(response, str(resolved), sink=self.sink, reviewed_at=self._clock())
        self.save_review(recovery.value)
        return recovery.value

    def save_plan(self, plan: Plan) -> Path:
        path = write_output(self.output_dir / f"code-review-plan-{timestamp(self._clock())}.json", dump_json(plan))
        logger.info("Code review plan saved to %s", path)
        return path

    def save_plan_report(self, plan: Plan) -> Path:
        return write_output(
            self.output_dir / f"code-review-plan-{timestamp(self._clock())}.md",
            render_plan_markdown(plan),
        )

    def save_review(self, review: FileReview) -> Path:
        path = write_output(self.review_dir / f"{Path(review.file_path).stem}-review.json", dump_json(review))
        logger.info("File review saved to %s", path)
        return path

    def save_review_report(self, review: FileReview) -> Path:
        return write_output(
            self.review_dir / f"{Path(review.file_path).stem}-review.md",
            render_file_review_markdown(review),
        )


def build_model_settings(model_spec: ModelSpec) -> ModelSettings:
    return {"temperature": model_spec.temperature, "max_tokens": model_spec.max_tokens}


def build_model(model_spec: ModelSpec) -> OpenAIChatModel:
    if model_spec.provider != "openai-compatible":
        raise ValueError(f"Unsupported model provider: {model_spec.provider!r}")
    api_key = os.environ.get(model_spec.api_key_env, "noop")
    provider = OpenAIProvider(base_url=model_spec.base_url, api_key=api_key)
    return OpenAIChatModel(model_spec.model_name, provider=provider)
