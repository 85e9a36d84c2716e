"""Read merge commits from the local git history."""

import logging
import re
from typing import Iterable, List, Optional

from ..exceptions import CommandFailedError
from ..models import CommitRecord
from ..process import stream_command


# Pretty format consumed by parse_log_line
LOG_FORMAT = "sha:%h name:%an email:%ae title:'%s'"

LOG_LINE_RE = re.compile(r"sha:(.*) name:(.*) email:(.*) title:'(.*)'")

# GitHub titles merge commits "Merge pull request #123 from owner/branch"
MERGE_PR_RE = re.compile(r"^Merge pull request #(\d+) from")

DEFAULT_BOT_NAMES = ("dotnet-automerge-bot", "dotnet bot")


def pr_number_from_title(title: str) -> Optional[int]:
    """Extract the pull request number from a merge commit title.

    Args:
        title: Commit subject line

    Returns:
        Pull request number or None if the title is not a merge commit title
    """
    match = MERGE_PR_RE.match(title)
    if not match:
        return None
    return int(match.group(1))


def parse_log_line(line: str, bot_names: Iterable[str] = DEFAULT_BOT_NAMES) -> Optional[CommitRecord]:
    """Parse one ``git log`` line written with LOG_FORMAT.

    Lines that do not match the format, commits authored by a bot and
    commits that are not pull request merges produce no record.

    Args:
        line: Raw output line
        bot_names: Author names to ignore (exact match)

    Returns:
        CommitRecord for a pull request merge commit, otherwise None
    """
    match = LOG_LINE_RE.match(line)
    if not match:
        return None

    sha, name, email, title = (group.strip() for group in match.groups())
    if name in bot_names:
        return None
    if pr_number_from_title(title) is None:
        return None

    return CommitRecord(sha=sha, author_name=name, author_email=email, title=title)


class GitClient:
    """Runs ``git log`` against a local repository."""

    def __init__(self, repository: str, git_executable: str = "git",
                 bot_names: Iterable[str] = DEFAULT_BOT_NAMES,
                 timeout: Optional[float] = None,
                 logger: Optional[logging.Logger] = None):
        """Initialize git client.

        Args:
            repository: Working directory of the repository
            git_executable: Name or path of the git binary
            bot_names: Commit authors whose merges are ignored
            timeout: Seconds before a git invocation is killed
            logger: Logger instance
        """
        self.repository = repository
        self.git_executable = git_executable
        self.bot_names = frozenset(bot_names)
        self.timeout = timeout
        self.logger = logger or logging.getLogger(__name__)

    def list_merge_commits(self, previous: str, current: str) -> List[CommitRecord]:
        """List pull request merge commits in ``previous..current``.

        Output lines are parsed as git writes them; the call returns once
        git has exited.

        Args:
            previous: Revision excluded from the range
            current: Revision included in the range

        Returns:
            Merge commits in the order git emitted them

        Raises:
            CommandFailedError: If git exits non-zero, times out or prints nothing
        """
        args = [
            self.git_executable,
            "log",
            f"{previous}..{current}",
            f"--pretty=format:{LOG_FORMAT}",
        ]

        commits = []
        line_count = 0
        for line in stream_command(args, cwd=self.repository, timeout=self.timeout):
            line_count += 1
            commit = parse_log_line(line, self.bot_names)
            if commit is None:
                self.logger.debug(f"Skipping log line: {line}")
                continue
            commits.append(commit)

        if line_count == 0:
            raise CommandFailedError(args, 0, "no output")

        self.logger.info(f"Found {len(commits)} merge commits in {previous}..{current}")
        return commits
