# GitHub services - GitHub API integration
from .client import GitHubGateway
from .schemas import Commit, CommitStatus, GitHubSession, Repository

__all__ = ["GitHubGateway", "Commit", "CommitStatus", "GitHubSession", "Repository"]
