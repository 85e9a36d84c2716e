"""Release note generation logic."""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import List, Optional

from ..exceptions import ReleaseNotesError
from ..git.client import pr_number_from_title
from ..models import Category, ClassifiedPullRequest, CommitRecord, PullRequestMetadata, ReleaseReport
from .classifier import classify_pull_request


# Constants
TITLE_INFRASTRUCTURE = "_Infrastructure:_"
TITLE_BUG_FIX = "**Bug Fix:**"
TITLE_NEW_FEATURE = "_New Features:_"

SORTED_KINDS = [
    (Category.BUGFIX, TITLE_BUG_FIX),
    (Category.FEATURE, TITLE_NEW_FEATURE),
    (Category.INFRASTRUCTURE, TITLE_INFRASTRUCTURE),
]

# Per pull request tag printed in the text report
TAGS = {
    Category.INFRASTRUCTURE: "infra",
    Category.BUGFIX: "bugfix",
    Category.FEATURE: "feature",
}

DEFAULT_WORKER_COUNT = 1


def pr_numbers_from_commits(commits: List[CommitRecord]) -> List[int]:
    """Extract pull request numbers from merge commits, keeping their order."""
    numbers = []
    for commit in commits:
        number = pr_number_from_title(commit.title)
        if number is not None:
            numbers.append(number)
    return numbers


def fetch_pull_requests(github_client, numbers: List[int],
                        workers: int = DEFAULT_WORKER_COUNT,
                        skip_failed: bool = False) -> List[Optional[PullRequestMetadata]]:
    """Fetch metadata for pull requests.

    With more than one worker the fetches run concurrently. Results are
    returned in the order of ``numbers`` whatever order they complete in.

    Args:
        github_client: Client providing ``get_pull_request(number)``
        numbers: Pull request numbers in history order
        workers: Number of concurrent fetches
        skip_failed: Log and skip failed fetches instead of raising

    Returns:
        Metadata per number, None where a fetch failed and was skipped

    Raises:
        ReleaseNotesError: For the earliest failed fetch in ``numbers`` unless
            ``skip_failed``
    """
    logger = logging.getLogger(__name__)
    results: List[Optional[PullRequestMetadata]] = [None] * len(numbers)

    def fetch(index):
        number = numbers[index]
        try:
            results[index] = github_client.get_pull_request(number)
        except ReleaseNotesError as e:
            if not skip_failed:
                raise
            logger.warning(f"Skipping PR #{number}: {e}")

    if workers <= 1 or len(numbers) <= 1:
        for index in range(len(numbers)):
            fetch(index)
        return results

    max_workers = min(workers, len(numbers))
    errors = {}
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {executor.submit(fetch, index): index for index in range(len(numbers))}
        for future in as_completed(futures):
            try:
                future.result()
            except ReleaseNotesError as e:
                errors[futures[future]] = e

    # Report the failure earliest in history, not the first to complete
    if errors:
        raise errors[min(errors)]

    return results


def build_release_report(git_client, github_client, previous: str, current: str,
                         workers: int = DEFAULT_WORKER_COUNT,
                         skip_failed: bool = False) -> ReleaseReport:
    """Classify the pull requests merged between two revisions.

    Args:
        git_client: Client providing ``list_merge_commits(previous, current)``
        github_client: Client providing ``get_pull_request(number)``
        previous: Revision excluded from the range
        current: Revision included in the range
        workers: Number of concurrent pull request fetches
        skip_failed: Skip pull requests whose metadata cannot be fetched

    Returns:
        Release report with pull requests grouped by category

    Raises:
        ReleaseNotesError: If git fails, or a fetch fails without ``skip_failed``
    """
    logger = logging.getLogger(__name__)

    commits = git_client.list_merge_commits(previous, current)
    numbers = pr_numbers_from_commits(commits)
    pull_requests = fetch_pull_requests(github_client, numbers, workers, skip_failed)

    report = ReleaseReport()
    for number, pr in zip(numbers, pull_requests):
        if pr is None:
            report.skipped.append(number)
            continue

        category = classify_pull_request(pr)
        report.classified.append(ClassifiedPullRequest(number=number, category=category))

        if category == Category.UNCLASSIFIED:
            logger.warning(f"PR #{number} matched no rule and is left out: {pr.title}")
            report.unclassified.append(pr)
            continue

        logger.info(f"{TAGS[category]} PR #{number}")
        report.bucket(category).append(pr)

    return report


def render_text(report: ReleaseReport) -> str:
    """Format a report as plain text.

    Lists the tag of each classified pull request, the bucket counts and
    the titles of all feature pull requests.
    """
    lines = []
    for entry in report.classified:
        if entry.category in TAGS:
            lines.append(f"{TAGS[entry.category]} PR #{entry.number}")

    lines.append(f"infrastructure PRs: {report.infrastructure_count}")
    lines.append(f"bugfix PRs: {report.bugfix_count}")
    lines.append(f"feature PRs: {report.feature_count}")

    for pr in report.features:
        lines.append(pr.title)

    return '\n'.join(lines) + '\n'


def render_markdown(report: ReleaseReport, title: Optional[str] = None) -> str:
    """Format a report as markdown sections, one per non-empty bucket.

    Args:
        report: Release report
        title: Optional heading for the document

    Returns:
        Markdown string
    """
    sections = []
    if title:
        sections.append(f"# {title}\n")

    for category, heading in SORTED_KINDS:
        prs = report.bucket(category)
        if not prs:
            continue
        items = '\n'.join(f"- {pr.title} (#{pr.number})" for pr in prs)
        sections.append(f"{heading}\n{items}\n")

    return '\n'.join(sections)
