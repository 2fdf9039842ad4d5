"""
Reviewer Lottery

Runs the reviewer selection for one pull request:

1. Find the pull request (given directly, or looked up by head branch)
2. Read the reviewers already requested on it
   - On API failure, continue as if there were none
3. Select additional reviewers (lib/reviewer_selector.py)
4. Request them on the pull request
5. Set the step outputs and write the job summary

Outputs:
- reviewer-count: number of reviewers requested by this run
- assignment-successful: "true" unless finding the PR or requesting
  reviewers failed
"""
from typing import List, Optional

from lib.data_types import (
    Config,
    GitHubServiceError,
    LotteryEnv,
    Pull,
    ReviewerSelectionResult,
)
from lib.env_constants import ActionOutputNames, LogGroups
from lib.github_service import GitHubService
from lib.random_picker import RandomPicker
from lib.reviewer_selector import ReviewerSelector
from lib.utilities import (
    ActionLogger,
    ActionOutputs,
    build_summary,
    format_step,
)


class Lottery:
    def __init__(
        self,
        logger: ActionLogger,
        action_outputs: ActionOutputs,
        github_service: GitHubService,
        config: Config,
        env: LotteryEnv,
        pr_info: Optional[Pull] = None,
        picker: Optional[RandomPicker] = None,
        dry_run: bool = False,
    ) -> None:
        self.logger = logger
        self.action_outputs = action_outputs
        self.github_service = github_service
        self.env = env
        self.pr_info = pr_info
        self.dry_run = dry_run
        self.selector = ReviewerSelector(config, picker)

    def run(self) -> Optional[ReviewerSelectionResult]:
        self.logger.start_group(LogGroups.STARTING.value)
        self.logger.info(f"Repository: {self.env.repository}")
        self.logger.info(f"Ref: {self.env.ref}")

        pull = self._find_pull()
        if pull is None:
            self._set_outputs(0, successful=False)
            self.logger.end_group()
            return None

        self.logger.info(f"Pull request: #{pull.number}")
        self.logger.info(f"Author: {pull.author or '(unknown)'}")
        existing_reviewers = self._get_existing_reviewers(pull.number)
        self.logger.info(
            f"Existing reviewers: {', '.join(existing_reviewers) or '-'}"
        )
        self.logger.end_group()

        self.logger.start_group(LogGroups.SELECTION.value)
        result = self.selector.select_reviewers(pull.author, existing_reviewers)
        self._log_selection(pull.author, result)
        self.logger.end_group()

        self.logger.start_group(LogGroups.ASSIGNING.value)
        self._assign_reviewers(pull.number, result.selected_reviewers)
        self.action_outputs.add_summary(
            build_summary(pull.number, result, existing_reviewers)
        )
        self.logger.end_group()

        return result

    def _find_pull(self) -> Optional[Pull]:
        if self.pr_info is not None:
            return self.pr_info

        try:
            pull = self.github_service.find_pr_by_ref(self.env.ref)
        except GitHubServiceError as exc:
            self.action_outputs.set_failed(
                f"Could not look up the pull request: {exc}"
            )
            return None

        if pull is None:
            self.action_outputs.set_failed(
                f"No open pull request found for ref '{self.env.ref}'"
            )
        return pull

    def _get_existing_reviewers(self, pr_number: int) -> List[str]:
        try:
            return self.github_service.get_existing_reviewers(pr_number)
        except GitHubServiceError as exc:
            self.logger.warning(
                f"Could not fetch existing reviewers, assuming none: {exc}"
            )
            return []

    def _log_selection(
        self, author: Optional[str], result: ReviewerSelectionResult
    ) -> None:
        author_group = self.selector.author_group(author)
        self.logger.info(f"Author group: {author_group or '(none)'}")

        rule = result.applied_rule
        if rule is None:
            self.logger.info("No selection rule applies - nobody to select")
            return

        index = f" #{rule.index}" if rule.index is not None else ""
        self.logger.info(f"Applied rule: {rule.type.value}{index} {rule.rule}")
        for step in result.process:
            self.logger.info(format_step(step))
            self.logger.debug(
                f"Candidates for {step.group_key}: {', '.join(step.candidates)}"
            )

    def _assign_reviewers(self, pr_number: int, reviewers: List[str]) -> None:
        if not reviewers:
            self.logger.info("No additional reviewers needed")
            self._set_outputs(0, successful=True)
            return

        if self.dry_run:
            self.logger.info(
                f"Dry run: would request {', '.join(reviewers)}"
            )
            self._set_outputs(len(reviewers), successful=True)
            return

        try:
            self.github_service.set_reviewers(pr_number, reviewers)
        except GitHubServiceError as exc:
            self.action_outputs.set_failed(
                f"Could not request reviewers {', '.join(reviewers)}: {exc}"
            )
            self._set_outputs(0, successful=False)
            return

        self.logger.info(f"✅ Requested reviewers: {', '.join(reviewers)}")
        self._set_outputs(len(reviewers), successful=True)

    def _set_outputs(self, reviewer_count: int, successful: bool) -> None:
        self.action_outputs.set_output(
            ActionOutputNames.REVIEWER_COUNT.value, str(reviewer_count)
        )
        self.action_outputs.set_output(
            ActionOutputNames.ASSIGNMENT_SUCCESSFUL.value,
            "true" if successful else "false",
        )
