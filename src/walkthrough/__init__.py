"""Public package exports."""

from walkthrough.config import load_config
from walkthrough.models import FileReview
from walkthrough.models import Plan
from walkthrough.models import PlannerConfig
from walkthrough.pipeline import RecoveryResult
from walkthrough.pipeline import RecoveryStage
from walkthrough.pipeline import recover_file_review
from walkthrough.pipeline import recover_plan
from walkthrough.planner import ReviewPlanner

__all__ = [
    "FileReview",
    "Plan",
    "PlannerConfig",
    "RecoveryResult",
    "RecoveryStage",
    "ReviewPlanner",
    "load_config",
    "recover_file_review",
    "recover_plan",
]
