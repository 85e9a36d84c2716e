"""GitHub pull request lookups through the ``gh`` CLI."""

import json
import logging
from typing import Optional

from pydantic import ValidationError

from ..exceptions import CommandFailedError, MalformedMetadataError
from ..models import PullRequestMetadata
from ..process import stream_command


PR_FIELDS = "title,body,files"


class GitHubClient:
    """Fetches pull request metadata with ``gh pr view``."""

    def __init__(self, repository: str, gh_executable: str = "gh",
                 timeout: Optional[float] = None,
                 logger: Optional[logging.Logger] = None):
        """Initialize GitHub client.

        Args:
            repository: Local checkout ``gh`` resolves the remote from
            gh_executable: Name or path of the gh binary
            timeout: Seconds before a gh invocation is killed
            logger: Logger instance
        """
        self.repository = repository
        self.gh_executable = gh_executable
        self.timeout = timeout
        self.logger = logger or logging.getLogger(__name__)

    def get_pull_request(self, number: int) -> PullRequestMetadata:
        """Get title, body and changed files of a pull request.

        Args:
            number: Pull request number

        Returns:
            Pull request metadata

        Raises:
            CommandFailedError: If gh fails, times out or prints nothing
            MalformedMetadataError: If the output is not the expected JSON
        """
        args = [self.gh_executable, "pr", "view", str(number), "--json", PR_FIELDS]
        lines = list(stream_command(args, cwd=self.repository, timeout=self.timeout))

        payload = "\n".join(lines).strip()
        if not payload:
            raise CommandFailedError(args, 0, "no output")

        try:
            data = json.loads(payload)
        except json.JSONDecodeError as e:
            raise MalformedMetadataError(number, f"invalid JSON: {e}") from e
        if not isinstance(data, dict):
            raise MalformedMetadataError(number, "expected a JSON object")

        try:
            pr = PullRequestMetadata(number=number, **data)
        except (ValidationError, TypeError) as e:
            raise MalformedMetadataError(number, str(e)) from e

        self.logger.debug(f"Fetched PR #{number} with {len(pr.files)} files")
        return pr
