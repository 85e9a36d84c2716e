"""Data models shared by the release notes pipeline."""

from enum import Enum
from typing import List

from pydantic import BaseModel, Field, validator


class CommitRecord(BaseModel):
    """A single commit parsed from a formatted ``git log`` line."""

    sha: str
    author_name: str
    author_email: str
    title: str

    class Config:
        frozen = True


class FileChange(BaseModel):
    """A file touched by a pull request."""

    path: str
    additions: int = 0
    deletions: int = 0

    class Config:
        frozen = True


class PullRequestMetadata(BaseModel):
    """Snapshot of a pull request as returned by the hosting service."""

    number: int
    title: str
    body: str = ""
    files: List[FileChange] = Field(default_factory=list)

    @validator('body', pre=True)
    def empty_body_for_null(cls, v):
        """GitHub reports a missing description as null."""
        return "" if v is None else v

    class Config:
        frozen = True


class Category(str, Enum):
    INFRASTRUCTURE = "infrastructure"
    BUGFIX = "bugfix"
    FEATURE = "feature"
    UNCLASSIFIED = "unclassified"


class ClassifiedPullRequest(BaseModel):
    """Classification outcome for one pull request, in history order."""

    number: int
    category: Category

    class Config:
        frozen = True


class ReleaseReport(BaseModel):
    """Pull requests grouped into release note buckets.

    Buckets keep the order in which pull requests appear in the revision
    history. A pull request is in at most one bucket.
    """

    infrastructure: List[PullRequestMetadata] = Field(default_factory=list)
    bugfixes: List[PullRequestMetadata] = Field(default_factory=list)
    features: List[PullRequestMetadata] = Field(default_factory=list)
    classified: List[ClassifiedPullRequest] = Field(default_factory=list)
    unclassified: List[PullRequestMetadata] = Field(default_factory=list)
    skipped: List[int] = Field(default_factory=list)

    def bucket(self, category: Category) -> List[PullRequestMetadata]:
        """Return the bucket holding pull requests of ``category``.

        Raises:
            ValueError: For ``Category.UNCLASSIFIED``, which has no bucket
        """
        buckets = {
            Category.INFRASTRUCTURE: self.infrastructure,
            Category.BUGFIX: self.bugfixes,
            Category.FEATURE: self.features,
        }
        if category not in buckets:
            raise ValueError(f"No release note bucket for category: {category.value}")
        return buckets[category]

    @property
    def infrastructure_count(self) -> int:
        return len(self.infrastructure)

    @property
    def bugfix_count(self) -> int:
        return len(self.bugfixes)

    @property
    def feature_count(self) -> int:
        return len(self.features)
