import os
from enum import Enum

from dotenv import find_dotenv, load_dotenv

load_dotenv(find_dotenv())

GITHUB_API_URL = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"
GITHUB_REQUEST_TIMEOUT = 30  # seconds

DEFAULT_CONFIG_PATH = ".github/reviewer-lottery.yml"

# Group key syntax used in "from" clauses
ALL_GROUPS_KEY = "*"
EXCLUDE_GROUPS_PREFIX = "!"

# Linear-congruential generator used for reproducible picks
LCG_MULTIPLIER = 9301
LCG_INCREMENT = 49297
LCG_MODULUS = 233280


def get_env(name: str, default: str = "") -> str:
    return os.environ.get(name, default).strip()


def get_config_path() -> str:
    return get_env("CONFIG_PATH") or DEFAULT_CONFIG_PATH


def get_api_url() -> str:
    return (get_env("GITHUB_API_URL") or GITHUB_API_URL).rstrip("/")


def get_head_ref() -> str:
    """
    Head branch of the pull request.

    GITHUB_HEAD_REF is only set on pull_request events; on other events the
    branch is taken from GITHUB_REF ("refs/heads/feature" → "feature").
    """
    head_ref = get_env("GITHUB_HEAD_REF")
    if head_ref:
        return head_ref
    ref = get_env("GITHUB_REF")
    if ref.startswith("refs/heads/"):
        return ref[len("refs/heads/"):]
    return ref


def get_lottery_seed() -> int | None:
    """
    Seed for reproducible runs, from LOTTERY_SEED.
    Returns None (production randomness) if unset or not an integer.
    """
    seed = get_env("LOTTERY_SEED")
    if not seed:
        return None
    try:
        return int(seed)
    except ValueError:
        print(f"⚠️  Warning: Ignoring invalid LOTTERY_SEED '{seed}'")
        return None


class ActionOutputNames(str, Enum):
    """Step outputs set by the lottery"""

    REVIEWER_COUNT = "reviewer-count"
    ASSIGNMENT_SUCCESSFUL = "assignment-successful"


class LogGroups(str, Enum):
    """Titles of the collapsible log groups"""

    STARTING = "🎯 Reviewer Lottery - Starting"
    SELECTION = "🔍 Selection process"
    ASSIGNING = "📝 Assigning reviewers"
