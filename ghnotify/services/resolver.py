"""
Infer repository, commit and credentials from the build context.
"""

from ghnotify.core.exceptions import (
    CannotInferCommitError,
    CannotInferCredentialsError,
    CannotInferGitDataError,
    CannotInferRepositoryError,
)
from ghnotify.core.logging import get_logger
from ghnotify.models.build import (
    BRANCH,
    GITHUB_SOURCE_KIND,
    PULL_REQUEST,
    Build,
    ScmSource,
)

logger = get_logger(__name__)


def find_github_source(build: Build) -> ScmSource | None:
    """
    Locate the GitHub source that owns a build.

    Walks from the build to its job and then to the job's immediate parent
    container. Only that container is inspected.

    Returns:
        First source of the GitHub kind, or None
    """
    container = build.job.parent
    if container is None or container.scm_sources is None:
        return None

    for source in container.scm_sources:
        if source.kind == GITHUB_SOURCE_KIND:
            return source
    return None


class ContextResolver:
    """Fills the gaps of a notification request from the build that runs it."""

    def get_source(self, build: Build) -> ScmSource:
        source = find_github_source(build)
        if source is None:
            raise CannotInferGitDataError()
        return source

    def infer_credentials_id(self, build: Build) -> str:
        credentials_id = self.get_source(build).scan_credentials_id
        if not credentials_id:
            raise CannotInferCredentialsError()
        logger.debug(f"Inferred credentialsId {credentials_id} for {build.display_name}")
        return credentials_id

    def infer_repository(self, build: Build) -> str:
        repo = self.get_source(build).full_name
        if not repo:
            raise CannotInferRepositoryError()
        logger.debug(f"Inferred repo {repo} for {build.display_name}")
        return repo

    def infer_commit_sha(self, build: Build) -> str:
        """
        Read the commit hash from the build's revision record.

        Branch builds yield the branch head hash, pull request builds the
        pull request head hash.

        Raises:
            CannotInferCommitError: For no revision or any other revision kind
        """
        revision = build.revision
        if revision is None:
            raise CannotInferCommitError()

        if revision.kind == BRANCH:
            sha = revision.hash
        elif revision.kind == PULL_REQUEST:
            sha = revision.pull_hash
        else:
            raise CannotInferCommitError()

        if not sha:
            raise CannotInferCommitError()
        logger.debug(f"Inferred sha {sha} from {revision.kind} revision of {build.display_name}")
        return sha


# Stateless, safe to share
default_resolver = ContextResolver()
