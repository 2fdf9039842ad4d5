"""
Reviewer Lottery Runner

Requests reviewers on the pull request of the current workflow run.

Usage:
    python scripts/run_reviewer_lottery.py
    python scripts/run_reviewer_lottery.py --config .github/lottery.yml
    python scripts/run_reviewer_lottery.py --dry-run

Environment Variables:
    GITHUB_TOKEN: Token allowed to request reviewers (required)
    GITHUB_REPOSITORY: "owner/name" of the repository (required)
    GITHUB_HEAD_REF / GITHUB_REF: Branch of the pull request
    CONFIG_PATH: Config file (default: .github/reviewer-lottery.yml)
    PR_NUMBER, PR_AUTHOR: Skip the pull request lookup
    LOTTERY_SEED: Reproducible selection (integer seed)

Exit Codes:
    0: Success (reviewers requested or none needed)
    1: Failure (missing settings, PR not found, request failed)
"""

import sys
import argparse
import traceback
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

# pylint: next-line: disable=wrong-import-position
from lib.config_loader import load_config_from_file  # noqa: E402
from lib.data_types import LotteryEnv, Pull  # noqa: E402
from lib.env_constants import (  # noqa: E402
    get_config_path,
    get_env,
    get_head_ref,
    get_lottery_seed,
)
from lib.github_service import get_github_service  # noqa: E402
from lib.lottery import Lottery  # noqa: E402
from lib.random_picker import RandomPicker, SeededRandomSource  # noqa: E402
from lib.utilities import ActionLogger, ActionOutputs  # noqa: E402


def get_pr_info() -> Pull | None:
    """
    Pull request given through PR_NUMBER / PR_AUTHOR, if any.
    Returns None when PR_NUMBER is unset, so the PR is looked up by ref.
    """
    pr_number = get_env("PR_NUMBER")
    if not pr_number:
        return None
    try:
        number = int(pr_number)
    except ValueError:
        print(f"⚠️  Warning: Ignoring invalid PR_NUMBER '{pr_number}'")
        return None
    return Pull(number=number, author=get_env("PR_AUTHOR") or None)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run the reviewer lottery")
    parser.add_argument(
        "--config",
        default=None,
        help="Path to the YAML config (default: CONFIG_PATH or "
        ".github/reviewer-lottery.yml)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Select reviewers without requesting them",
    )
    args = parser.parse_args(argv)

    token = get_env("GITHUB_TOKEN")
    repository = get_env("GITHUB_REPOSITORY")
    if not token or not repository:
        print(
            "❌ Error: GITHUB_TOKEN and GITHUB_REPOSITORY environment "
            "variables are required"
        )
        return 1

    config = load_config_from_file(args.config or get_config_path())

    seed = get_lottery_seed()
    picker = RandomPicker(SeededRandomSource(seed)) if seed is not None else None

    logger = ActionLogger()
    action_outputs = ActionOutputs(logger)

    with get_github_service(token, repository) as github_service:
        lottery = Lottery(
            logger=logger,
            action_outputs=action_outputs,
            github_service=github_service,
            config=config,
            env=LotteryEnv(repository=repository, ref=get_head_ref()),
            pr_info=get_pr_info(),
            picker=picker,
            dry_run=args.dry_run,
        )
        lottery.run()

    return 1 if action_outputs.failed else 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except Exception as exc:
        print(f"\n❌ Error during reviewer lottery: {exc}")
        traceback.print_exc()
        raise  # Re-raise to ensure workflow fails
