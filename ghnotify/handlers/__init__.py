# Handlers - pipeline step and configuration form probes
from .probes import FormValidation, check_repo, check_sha, test_connection
from .step import GitHubNotifyStep

__all__ = ["FormValidation", "check_repo", "check_sha", "test_connection", "GitHubNotifyStep"]
