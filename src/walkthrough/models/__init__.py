"""Model types for review plans, file reviews and configuration."""

from walkthrough.models.file_review import FileReview
from walkthrough.models.file_review import MethodEntry
from walkthrough.models.plan import Category
from walkthrough.models.plan import FileEntry
from walkthrough.models.plan import Plan
from walkthrough.models.settings import ModelSpec
from walkthrough.models.settings import PlannerConfig

__all__ = [
    "Category",
    "FileEntry",
    "FileReview",
    "MethodEntry",
    "ModelSpec",
    "Plan",
    "PlannerConfig",
]
