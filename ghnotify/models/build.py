"""
Read-only view of the build context handed over by the automation engine.
"""

from dataclasses import dataclass
from typing import ClassVar


GITHUB_SOURCE_KIND = "github"

BRANCH = "branch"
PULL_REQUEST = "pull_request"
TAG = "tag"


@dataclass(frozen=True)
class ScmSource:
    """A source-control source configured on a multi-branch container."""

    kind: str
    repo_owner: str | None = None
    repository: str | None = None
    scan_credentials_id: str | None = None

    @property
    def full_name(self) -> str | None:
        """Repository as "owner/name", or None when either part is missing."""
        if not self.repo_owner or not self.repository:
            return None
        return f"{self.repo_owner}/{self.repository}"


@dataclass
class ItemGroup:
    """A container of jobs (folder, organization, multi-branch project).

    ``scm_sources`` is None when the container does not own any sources.
    """

    name: str
    scm_sources: list[ScmSource] | None = None
    parent: "ItemGroup | None" = None


@dataclass
class Job:
    """The item that owns builds."""

    name: str
    parent: ItemGroup | None = None

    @property
    def full_name(self) -> str:
        names = [self.name]
        group = self.parent
        while group is not None:
            names.append(group.name)
            group = group.parent
        return "/".join(reversed(names))


@dataclass(frozen=True)
class Revision:
    """Source-control state a build was made from."""

    kind: ClassVar[str] = "unknown"


@dataclass(frozen=True)
class BranchRevision(Revision):
    kind: ClassVar[str] = BRANCH

    branch: str
    hash: str


@dataclass(frozen=True)
class PullRequestRevision(Revision):
    kind: ClassVar[str] = PULL_REQUEST

    number: int
    pull_hash: str
    base_hash: str | None = None


@dataclass(frozen=True)
class TagRevision(Revision):
    kind: ClassVar[str] = TAG

    name: str
    hash: str


@dataclass
class Build:
    """A single run of a job."""

    job: Job
    number: int
    url: str
    revision: Revision | None = None

    @property
    def display_name(self) -> str:
        return f"{self.job.full_name} #{self.number}"
