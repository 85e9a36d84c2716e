"""
Unit tests for fetching pull request metadata through gh.
"""

import json
from unittest.mock import patch

import pytest

from relnotes.exceptions import CommandFailedError, MalformedMetadataError
from relnotes.github import GitHubClient


PR_JSON = {
    "title": "Add widgets feature",
    "body": "Adds widgets",
    "files": [
        {"path": "src/Widgets.cs", "additions": 120, "deletions": 4},
        {"path": "eng/Versions.props", "additions": 1, "deletions": 1},
    ],
}


def _fetch(output_lines, number=42):
    client = GitHubClient("/repo", gh_executable="gh", timeout=60)
    with patch("relnotes.github.client.stream_command", return_value=iter(output_lines)) as stream:
        pr = client.get_pull_request(number)
    return pr, stream


def test_get_pull_request_parses_metadata():
    pr, stream = _fetch([json.dumps(PR_JSON)])

    stream.assert_called_once_with(
        ["gh", "pr", "view", "42", "--json", "title,body,files"],
        cwd="/repo",
        timeout=60,
    )
    assert pr.number == 42
    assert pr.title == "Add widgets feature"
    assert pr.body == "Adds widgets"
    assert [(f.path, f.additions, f.deletions) for f in pr.files] == [
        ("src/Widgets.cs", 120, 4),
        ("eng/Versions.props", 1, 1),
    ]


def test_get_pull_request_accepts_pretty_printed_json():
    pr, _ = _fetch(json.dumps(PR_JSON, indent=2).splitlines())

    assert pr.title == "Add widgets feature"


def test_get_pull_request_treats_null_body_as_empty():
    pr, _ = _fetch([json.dumps(dict(PR_JSON, body=None))])

    assert pr.body == ""


def test_get_pull_request_without_output_fails():
    with pytest.raises(CommandFailedError):
        _fetch([])


@pytest.mark.parametrize("output", [
    ["not json"],
    ["[1, 2, 3]"],
    [json.dumps({"body": "no title"})],
    [json.dumps(dict(PR_JSON, files=[{"path": "a.cs", "additions": "many"}]))],
])
def test_get_pull_request_rejects_malformed_metadata(output):
    with pytest.raises(MalformedMetadataError) as exc_info:
        _fetch(output, number=7)

    assert exc_info.value.number == 7
    assert "PR #7" in str(exc_info.value)
