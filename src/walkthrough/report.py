"""Markdown rendering for plans and file reviews."""

from __future__ import annotations

from pathlib import PurePath

from walkthrough.models.file_review import FileReview
from walkthrough.models.plan import Plan


def _cell(text: str) -> str:
    return text.replace("|", "\\|").replace("\n", " ")


def recommended_entry_points(plan: Plan) -> list[str]:
    """
    Starting files from the highest-priority categories: walk priorities
    1..3 until at least three paths are collected, never more than five.
    """
    recommendations: list[str] = []
    for priority in (1, 2, 3):
        if len(recommendations) >= 3:
            break
        paths = [
            entry.path
            for category in plan.categories
            if category.priority == priority
            for entry in category.files
            if entry.path.strip()
        ]
        recommendations.extend(paths[: 5 - len(recommendations)])
    return list(dict.fromkeys(recommendations))


def render_plan_markdown(plan: Plan) -> str:
    lines: list[str] = [f"# {plan.title}", "", plan.description, ""]

    if plan.tech_stack:
        lines.extend(["## Tech Stack", ""])
        lines.extend(f"- {tech}" for tech in plan.tech_stack)
        lines.append("")

    entry_points = recommended_entry_points(plan)
    if entry_points:
        lines.extend(
            [
                "## Recommended Entry Points",
                "",
                "These are the recommended starting points for your code review:",
                "",
            ]
        )
        lines.extend(f"- `{path}`" for path in entry_points)
        lines.append("")

    lines.extend(["## Review Summary", ""])
    if plan.categories:
        total_files = sum(len(category.files) for category in plan.categories)
        lines.append(f"- **Categories:** {len(plan.categories)}")
        lines.append(f"- **Files to review:** {total_files}")
    else:
        lines.append("- No review categories were identified.")
    lines.append("")

    if plan.categories:
        lines.extend(["## Categories", ""])
        # sorted() is stable, so equal priorities keep the model's order.
        for category in sorted(plan.categories, key=lambda c: c.priority):
            lines.extend([f"### {category.priority}. {category.name}", ""])
            lines.extend([category.description or "No description provided", ""])
            lines.extend(["#### Files", "", "| File | Reason |", "|------|--------|"])
            for entry in category.files:
                reason = entry.reason or "(No reason provided)"
                lines.append(f"| `{_cell(entry.path)}` | {_cell(reason)} |")
            lines.append("")

    if plan.diagnostics:
        lines.extend(["## Diagnostics", "", "The model response could not be parsed cleanly. See:", ""])
        lines.extend(f"- {pointer}" for pointer in plan.diagnostics)
        lines.append("")

    return "\n".join(lines)


def render_file_review_markdown(review: FileReview) -> str:
    lines: list[str] = [
        f"# Methods in {PurePath(review.file_path).name}",
        "",
        f"**File Path:** `{review.file_path}`",
        "",
    ]
    if review.methods:
        lines.extend(["## Methods List", "", "| Method | Source |", "|--------|--------|"])
        for method in review.methods:
            lines.append(f"| `{_cell(method.name)}` | `{_cell(method.source)}` |")
    else:
        lines.extend(["## Methods", "", "No user-defined methods were identified in this file."])
    lines.append("")
    return "\n".join(lines)
