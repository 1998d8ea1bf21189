"""Prompt templates and prompt composition."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

import frontmatter

TEMPLATES_DIR = Path(__file__).resolve().parent / "prompts"
SECTION_HEADER_RE = re.compile(r"^##\s+(.+?)\s*$", re.MULTILINE)


@dataclass(frozen=True)
class PromptTemplate:
    name: str
    description: str
    sections: dict[str, str]  # normalized header -> markdown chunk

    def section(self, key: str) -> str:
        return self.sections[normalize_header_text(key)]


def normalize_header_text(header_text: str) -> str:
    normalized = header_text.strip().lower().replace("_", " ")
    return re.sub(r"\s+", " ", normalized)


def split_sections(markdown_body: str) -> dict[str, str]:
    matches = list(SECTION_HEADER_RE.finditer(markdown_body))
    out: dict[str, str] = {}
    for i, match in enumerate(matches):
        key = normalize_header_text(match.group(1))
        end = matches[i + 1].start() if (i + 1) < len(matches) else len(markdown_body)
        if key not in out:
            out[key] = markdown_body[match.end() : end].strip()
    return out


def load_prompt_template(name: str, root: Path | None = None) -> PromptTemplate:
    path = (root or TEMPLATES_DIR) / f"{name}.md"
    if not path.exists():
        raise FileNotFoundError(f"Prompt template not found: {path}")
    post = frontmatter.load(str(path))
    sections = split_sections(post.content)
    required = [normalize_header_text(str(key)) for key in post.metadata.get("sections", [])]
    missing = [key for key in required if key not in sections]
    if missing:
        raise ValueError(f"Prompt template {path} is missing sections: {', '.join(missing)}")
    return PromptTemplate(
        name=str(post.metadata.get("name", name)),
        description=str(post.metadata.get("description", "")),
        sections=sections,
    )


def tech_stack_hints(tree_markdown: str) -> str:
    """
    Rough shape of the repository, passed along so the model does its own
    tech stack detection instead of relying on hard-coded rules.
    """
    lines = [line for line in tree_markdown.split("\n") if line.strip()]
    file_count = sum(1 for line in lines if not line.endswith("/"))
    dir_count = sum(1 for line in lines if line.endswith("/"))
    top_level_dirs = [line.strip() for line in lines if line.count("/") == 1 and line.endswith("/")]
    summary = f"Repository structure contains approximately {file_count} files and {dir_count} directories."
    if top_level_dirs:
        summary += f" Top-level directories: {', '.join(top_level_dirs)}"
    return summary


def make_plan_prompt(
    tree_markdown: str,
    project_description: str = "",
    template: PromptTemplate | None = None,
) -> str:
    template = template or load_prompt_template("review_plan")
    context = f"Potential tech stack indicators: {tech_stack_hints(tree_markdown)}"
    if project_description:
        context = f"{project_description}\n\n{context}"

    lines: list[str] = [template.section("instructions"), ""]
    lines.extend(["Project Context:", context, ""])
    lines.extend(["Repository Structure:", tree_markdown.rstrip(), ""])
    lines.extend([template.section("guidelines"), ""])
    lines.append(template.section("output format"))
    return "\n".join(lines).rstrip() + "\n"


def make_file_review_prompt(
    file_path: str,
    file_content: str,
    tree_markdown: str,
    template: PromptTemplate | None = None,
) -> str:
    template = template or load_prompt_template("file_review")
    lines: list[str] = [template.section("instructions"), ""]
    lines.extend(["File to review:", f"Path: {file_path}", ""])
    lines.extend(["File content:", file_content.rstrip(), ""])
    lines.extend(["Repository structure (for context):", tree_markdown.rstrip(), ""])
    lines.append(template.section("output format"))
    return "\n".join(lines).rstrip() + "\n"
