"""Load planner configuration from YAML."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from walkthrough.models.settings import PlannerConfig

logger = logging.getLogger(__name__)


def load_config(path: Path | None = None) -> PlannerConfig:
    """
    Build the configuration value handed to the planner at startup.
    With no path the defaults are used; an explicit path must exist.
    """
    if path is None:
        return PlannerConfig()
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError(f"Config file {path} must contain a mapping, got {type(raw).__name__}.")
    config = PlannerConfig.model_validate(raw)
    logger.debug("Loaded config from %s (model %s).", path, config.model.model_name)
    return config
