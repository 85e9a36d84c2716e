"""Release note generation module."""

from .classifier import (
    classify_pull_request,
    matching_rule,
    is_infra_path,
)
from .generator import (
    build_release_report,
    fetch_pull_requests,
    pr_numbers_from_commits,
    render_text,
    render_markdown,
)

__all__ = [
    "classify_pull_request",
    "matching_rule",
    "is_infra_path",
    "build_release_report",
    "fetch_pull_requests",
    "pr_numbers_from_commits",
    "render_text",
    "render_markdown",
]
