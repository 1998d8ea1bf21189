"""CLI entrypoint."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

import anyio

from walkthrough.config import load_config
from walkthrough.io_utils import dump_json, read_input
from walkthrough.models.file_review import FileReview
from walkthrough.models.plan import Plan
from walkthrough.pipeline import recover_plan
from walkthrough.planner import ReviewPlanner
from walkthrough.report import render_file_review_markdown, render_plan_markdown


async def run_plan(planner: ReviewPlanner, tree_markdown: str, description: str) -> Plan:
    return await planner.create_plan(tree_markdown, description)


async def run_review(planner: ReviewPlanner, file_path: Path, tree_markdown: str) -> FileReview:
    return await planner.review_file(file_path, tree_markdown)


def render(out: Plan | FileReview, markdown: bool) -> str:
    if not markdown:
        return dump_json(out)
    if isinstance(out, Plan):
        return render_plan_markdown(out)
    return render_file_review_markdown(out)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Plan code reviews from a repository tree.")
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument("--tree", type=str, help="Path to a markdown rendering of the repository tree")
    mode.add_argument("--recover", type=str, help="Recover a plan from a saved model response, offline")
    parser.add_argument("--review-file", type=str, help="Review one source file instead of planning (needs --tree)")
    parser.add_argument("--description", type=str, default="", help="Free-text project description")
    parser.add_argument("--config", type=str, default=None, help="Path to a YAML config file")
    parser.add_argument("--markdown", action="store_true", help="Print markdown instead of JSON")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    if args.review_file and not args.tree:
        parser.error("--review-file requires --tree")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    out: Plan | FileReview
    if args.recover is not None:
        out = recover_plan(read_input(Path(args.recover))).value
    else:
        config = load_config(Path(args.config) if args.config else None)
        planner = ReviewPlanner(config)
        tree_markdown = read_input(Path(args.tree))
        if args.review_file:
            review = anyio.run(run_review, planner, Path(args.review_file), tree_markdown)
            if args.markdown:
                planner.save_review_report(review)
            out = review
        else:
            plan = anyio.run(run_plan, planner, tree_markdown, args.description)
            if args.markdown:
                planner.save_plan_report(plan)
            out = plan

    print(render(out, args.markdown))
