import json
from datetime import datetime
from pathlib import Path

import pytest

from walkthrough import cli
from walkthrough.models import FileReview
from walkthrough.models import Plan


class PlannerStub:
    def __init__(self, config: object) -> None:
        self.config = config
        self.calls: list[tuple[str, str]] = []

    async def create_plan(self, tree_markdown: str, project_description: str = "") -> Plan:
        self.calls.append((tree_markdown, project_description))
        return Plan(title="Stubbed", description=project_description or "none")


def test_recover_prints_plan_json(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    raw = tmp_path / "raw.txt"
    raw.write_text('Plan: {"title": "T", "description": "D", "techStack": ["Go",], "categories": []}', encoding="utf-8")

    cli.main(["--recover", str(raw)])

    out = json.loads(capsys.readouterr().out)
    assert out["title"] == "T"
    assert out["techStack"] == ["Go"]
    assert out["diagnostics"] == []


def test_recover_markdown_output(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    raw = tmp_path / "raw.txt"
    raw.write_text("no plan today", encoding="utf-8")

    cli.main(["--recover", str(raw), "--markdown"])

    out = capsys.readouterr().out
    assert out.startswith("# Code Review Plan\n")
    assert "## Diagnostics" in out


def test_tree_runs_planner(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    tree = tmp_path / "tree.md"
    tree.write_text("src/\nsrc/main.go\n", encoding="utf-8")
    stubs: list[PlannerStub] = []

    def make_stub(config: object) -> PlannerStub:
        stub = PlannerStub(config)
        stubs.append(stub)
        return stub

    monkeypatch.setattr(cli, "ReviewPlanner", make_stub)
    cli.main(["--tree", str(tree), "--description", "A Go service."])

    out = json.loads(capsys.readouterr().out)
    assert out["title"] == "Stubbed"
    assert stubs[0].calls == [("src/\nsrc/main.go\n", "A Go service.")]


def test_review_file_requires_tree(tmp_path: Path) -> None:
    raw = tmp_path / "raw.txt"
    raw.write_text("{}", encoding="utf-8")
    with pytest.raises(SystemExit):
        cli.main(["--recover", str(raw), "--review-file", "main.go"])


def test_render_file_review_markdown() -> None:
    review = FileReview(file_path="src/main.go", methods=[], review_date=datetime(2025, 1, 1))
    assert cli.render(review, markdown=True).startswith("# Methods in main.go\n")
    assert json.loads(cli.render(review, markdown=False))["filePath"] == "src/main.go"
