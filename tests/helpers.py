"""Builders and stub collaborators for relnotes tests."""

from relnotes.exceptions import CommandFailedError
from relnotes.models import CommitRecord, FileChange, PullRequestMetadata


def make_pr(number=1, title="Update docs", body="", paths=("src/App.cs",)):
    return PullRequestMetadata(
        number=number,
        title=title,
        body=body,
        files=[FileChange(path=p, additions=1, deletions=0) for p in paths],
    )

def merge_commit(number, author="Jane Doe"):
    return CommitRecord(
        sha=f"abc{number:04d}",
        author_name=author,
        author_email="jane@example.com",
        title=f"Merge pull request #{number} from jane/branch-{number}",
    )

class FakeGitClient:
    def __init__(self, commits):
        self.commits = commits
        self.calls = []

    def list_merge_commits(self, previous, current):
        self.calls.append((previous, current))
        return list(self.commits)

class FakeGitHubClient:
    def __init__(self, pull_requests, failures=()):
        self.pull_requests = {pr.number: pr for pr in pull_requests}
        self.failures = set(failures)
        self.requested = []

    def get_pull_request(self, number):
        self.requested.append(number)
        if number in self.failures:
            raise CommandFailedError(["gh", "pr", "view", str(number)], 1, "not found")
        return self.pull_requests[number]
