import os
from typing import List, Optional

from lib.data_types import ReviewerSelectionResult, SelectionStep


class ActionLogger:
    """
    Prints log lines, using GitHub workflow commands where they exist
    (::warning::, ::error::, ::group::) so they render in the Actions UI.
    """

    def info(self, message: str) -> None:
        print(message)

    def debug(self, message: str) -> None:
        print(f"::debug::{message}")

    def warning(self, message: str) -> None:
        print(f"::warning::{message}")

    def error(self, message: str) -> None:
        print(f"::error::{message}")

    def start_group(self, title: str) -> None:
        print(f"::group::{title}")

    def end_group(self) -> None:
        print("::endgroup::")


class ActionOutputs:
    """
    Step outputs and job summary of the action.

    Args:
        output_file: File that receives "name=value" lines.
            If None, uses GITHUB_OUTPUT. When unset, outputs are printed.
        summary_file: Markdown summary file.
            If None, uses GITHUB_STEP_SUMMARY. When unset, no summary.
    """

    def __init__(
        self,
        logger: Optional[ActionLogger] = None,
        output_file: Optional[str] = None,
        summary_file: Optional[str] = None,
    ) -> None:
        self.logger = logger or ActionLogger()
        self.output_file = output_file or os.environ.get("GITHUB_OUTPUT")
        self.summary_file = summary_file or os.environ.get(
            "GITHUB_STEP_SUMMARY"
        )
        self.failed = False

    def set_output(self, name: str, value: str) -> None:
        if self.output_file:
            with open(self.output_file, "a", encoding="utf-8") as handle:
                handle.write(f"{name}={value}\n")
        else:
            print(f"Output {name}={value}")

    def add_summary(self, markdown: str) -> None:
        if not self.summary_file:
            return
        with open(self.summary_file, "a", encoding="utf-8") as handle:
            handle.write(markdown if markdown.endswith("\n") else markdown + "\n")

    def set_failed(self, message: str) -> None:
        self.failed = True
        self.logger.error(message)


def format_step(step: SelectionStep) -> str:
    """Single log line for a selection step"""
    picked = ", ".join(step.selected) or "-"
    return f"Step {step.step}: {step.description} → {picked}"


def build_summary(
    pr_number: int,
    result: ReviewerSelectionResult,
    existing_reviewers: List[str],
) -> str:
    """Markdown job summary of a lottery run."""
    rule = result.applied_rule
    if rule is None:
        rule_text = "none"
    elif rule.index is not None:
        rule_text = f"{rule.type.value} #{rule.index}"
    else:
        rule_text = rule.type.value

    lines = [
        f"## 🎯 Reviewer Lottery - PR #{pr_number}",
        "",
        f"- Applied rule: `{rule_text}`",
        f"- Existing reviewers: {', '.join(existing_reviewers) or '-'}",
        f"- Selected reviewers: {', '.join(result.selected_reviewers) or '-'}",
    ]

    if result.process:
        lines += [
            "",
            "| Step | Group | Required | Selected |",
            "| --- | --- | --- | --- |",
        ]
        lines += [
            f"| {step.step} | `{step.group_key}` | {step.required} | "
            f"{', '.join(step.selected) or '-'} |"
            for step in result.process
        ]

    return "\n".join(lines) + "\n"
