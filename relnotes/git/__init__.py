"""Git history module."""

from .client import (
    GitClient,
    parse_log_line,
    pr_number_from_title,
    DEFAULT_BOT_NAMES,
    LOG_FORMAT,
)

__all__ = [
    "GitClient",
    "parse_log_line",
    "pr_number_from_title",
    "DEFAULT_BOT_NAMES",
    "LOG_FORMAT",
]
