"""Heuristic classification of pull requests into release note buckets."""

from typing import Callable, Optional, Tuple

from ..models import Category, PullRequestMetadata


# Marker in the body of pull requests opened by dependency flow automation
GENERATED_PR_MARKER = "This is an automatically generated pull request from"

INFRA_PATH_PREFIXES = ("eng/",)
INFRA_PATH_FRAGMENTS = ("TestUtilities", "UnitTests")


def is_infra_path(path: str) -> bool:
    """Check if a changed file is build or test infrastructure.

    Args:
        path: Repository relative file path

    Returns:
        True for files under eng/ or in test utility and unit test projects
    """
    return path.startswith(INFRA_PATH_PREFIXES) or any(
        fragment in path for fragment in INFRA_PATH_FRAGMENTS
    )


def _is_generated(pr: PullRequestMetadata) -> bool:
    return GENERATED_PR_MARKER in pr.body


def _only_infra_files(pr: PullRequestMetadata) -> bool:
    # all() is True for a pull request without files
    return all(is_infra_path(f.path) for f in pr.files)


def _is_bugfix(pr: PullRequestMetadata) -> bool:
    return "fixes" in pr.body or "fix" in pr.title


def _is_feature(pr: PullRequestMetadata) -> bool:
    return "feature" in pr.body or "feature" in pr.title


# Evaluated in order, the first matching rule decides the category
RULES: Tuple[Tuple[str, Callable[[PullRequestMetadata], bool], Category], ...] = (
    ("generated-pr", _is_generated, Category.INFRASTRUCTURE),
    ("infra-files", _only_infra_files, Category.INFRASTRUCTURE),
    ("bugfix", _is_bugfix, Category.BUGFIX),
    ("feature", _is_feature, Category.FEATURE),
)


def matching_rule(pr: PullRequestMetadata) -> Optional[str]:
    """Return the name of the first rule matching ``pr``, or None."""
    for name, predicate, _ in RULES:
        if predicate(pr):
            return name
    return None


def classify_pull_request(pr: PullRequestMetadata) -> Category:
    """Assign a pull request to exactly one category.

    Args:
        pr: Pull request metadata

    Returns:
        Category of the first matching rule, Category.UNCLASSIFIED if none match
    """
    for _, predicate, category in RULES:
        if predicate(pr):
            return category
    return Category.UNCLASSIFIED
