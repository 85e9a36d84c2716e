"""
Unit tests for pull request classification rules.
"""

import pytest

from relnotes.models import Category
from relnotes.releasenote import classify_pull_request, is_infra_path, matching_rule
from relnotes.releasenote.classifier import GENERATED_PR_MARKER

from helpers import make_pr


def test_generated_marker_wins_over_everything():
    pr = make_pr(
        title="New feature: fix widgets",
        body=f"{GENERATED_PR_MARKER} dotnet/runtime. This fixes the feature.",
        paths=["src/App.cs"],
    )

    assert classify_pull_request(pr) == Category.INFRASTRUCTURE
    assert matching_rule(pr) == "generated-pr"


def test_empty_file_list_is_infrastructure():
    pr = make_pr(title="Add a feature", body="fixes #1", paths=[])

    assert classify_pull_request(pr) == Category.INFRASTRUCTURE
    assert matching_rule(pr) == "infra-files"


@pytest.mark.parametrize("paths", [
    ["eng/Versions.props"],
    ["eng/common/build.ps1", "src/Foo.UnitTests/FooTests.cs"],
    ["src/Shared.TestUtilities/Helpers.cs", "eng/pipelines/ci.yml"],
])
def test_only_infra_files_is_infrastructure(paths):
    pr = make_pr(title="Add feature flag fix", paths=paths)

    assert classify_pull_request(pr) == Category.INFRASTRUCTURE


def test_one_product_file_disables_infra_rule():
    pr = make_pr(title="Bump feature", paths=["eng/Versions.props", "src/App.cs"])

    assert classify_pull_request(pr) == Category.FEATURE


def test_unmatched_pr_is_unclassified():
    pr = make_pr(title="Add widget", body="no markers", paths=["src/App.cs"])

    assert classify_pull_request(pr) == Category.UNCLASSIFIED
    assert matching_rule(pr) is None


def test_fixes_in_body_is_bugfix():
    pr = make_pr(title="Resolve crash", body="This fixes a crash")

    assert classify_pull_request(pr) == Category.BUGFIX


def test_fix_in_title_is_bugfix():
    pr = make_pr(title="fix null reference", body="")

    assert classify_pull_request(pr) == Category.BUGFIX


def test_bugfix_matching_is_case_sensitive_substring():
    assert classify_pull_request(make_pr(title="Add prefix option")) == Category.BUGFIX
    assert classify_pull_request(make_pr(title="Fix crash")) == Category.UNCLASSIFIED
    assert classify_pull_request(make_pr(body="Fixes #12")) == Category.UNCLASSIFIED


def test_fix_in_body_alone_is_not_bugfix():
    pr = make_pr(title="Tweak", body="a quick fix")

    assert classify_pull_request(pr) == Category.UNCLASSIFIED


def test_bugfix_wins_over_feature():
    pr = make_pr(title="fix feature toggle")

    assert classify_pull_request(pr) == Category.BUGFIX


def test_feature_in_title():
    pr = make_pr(title="New feature: widgets", body="")

    assert classify_pull_request(pr) == Category.FEATURE


def test_feature_in_body():
    pr = make_pr(title="Widgets", body="Adds the widgets feature")

    assert classify_pull_request(pr) == Category.FEATURE
    assert matching_rule(pr) == "feature"


def test_additions_and_deletions_do_not_affect_classification():
    pr = make_pr(title="Add widget", paths=["src/App.cs"])
    bigger = pr.copy(update={"files": [f.copy(update={"additions": 5000, "deletions": 20}) for f in pr.files]})

    assert classify_pull_request(pr) == classify_pull_request(bigger)


def test_is_infra_path():
    assert is_infra_path("eng/common/tools.sh")
    assert is_infra_path("test/Foo.UnitTests/BarTests.cs")
    assert is_infra_path("src/TestUtilities/Fake.cs")
    assert not is_infra_path("src/eng/Thing.cs")
    assert not is_infra_path("ENG/Versions.props")
