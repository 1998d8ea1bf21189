from pathlib import Path

import pytest

from walkthrough import prompting

TREE = "src/\nsrc/App/\nsrc/App/Program.cs\nREADME.md\ntests/\n"


def test_split_sections_normalizes_headers() -> None:
    body = """
# Title

## Output_Format

Return JSON.

##   Guidelines

Be brief.
"""
    sections = prompting.split_sections(body)
    assert sections == {"output format": "Return JSON.", "guidelines": "Be brief."}


def test_bundled_templates_load() -> None:
    plan_template = prompting.load_prompt_template("review_plan")
    assert plan_template.name == "review_plan"
    assert '"techStack"' in plan_template.section("Output Format")

    review_template = prompting.load_prompt_template("file_review")
    assert '"methods"' in review_template.section("output_format")


def test_load_prompt_template_errors(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        prompting.load_prompt_template("missing", root=tmp_path)

    (tmp_path / "partial.md").write_text(
        "---\nname: partial\nsections:\n  - instructions\n  - output format\n---\n\n## Instructions\n\nDo it.\n",
        encoding="utf-8",
    )
    with pytest.raises(ValueError, match="output format"):
        prompting.load_prompt_template("partial", root=tmp_path)


def test_tech_stack_hints_counts_entries() -> None:
    hints = prompting.tech_stack_hints(TREE)
    assert "approximately 2 files and 3 directories" in hints
    assert "Top-level directories: src/, tests/" in hints


def test_make_plan_prompt_includes_context_and_tree() -> None:
    prompt = prompting.make_plan_prompt(TREE, "A payments service.")
    assert "Project Context:\nA payments service.\n\nPotential tech stack indicators:" in prompt
    assert "Repository Structure:\n" + TREE.rstrip() in prompt
    assert prompt.index("Repository Structure:") < prompt.index("Return your response as a JSON object")


def test_make_file_review_prompt() -> None:
    prompt = prompting.make_file_review_prompt("src/App/Program.cs", "class Program {}", TREE)
    assert "Path: src/App/Program.cs" in prompt
    assert "File content:\nclass Program {}" in prompt
    assert prompt.rstrip().endswith("}")
