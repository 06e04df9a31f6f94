"""
Custom application exceptions.

Every error carries a stable, user-facing default message so that a failed
build step or a validation probe can report it verbatim.
"""


class NotifyError(Exception):
    """Base exception for status notification errors."""

    message = "GitHub status notification failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class CredentialsError(NotifyError):
    """Credentials could not be turned into a GitHub session."""
    pass


class CredentialsNullError(CredentialsError):
    message = "Credentials were null or empty"


class CredentialsNotFoundError(CredentialsError):
    message = "The credentials were not found.  Please check them"


class CredentialsUnsupportedError(CredentialsError):
    message = "Sorry, the supplied type of credentials are not supported"


class CredentialsInvalidError(CredentialsError):
    message = "The supplied credentials are invalid to login"


class RepositoryNotFoundError(NotifyError):
    message = (
        "The specified repository does not exist.  "
        "Please ensure the supplied credentials have access to it"
    )


class CommitNotFoundError(NotifyError):
    message = "The specified commit does not exist in the specified repository"


class InferenceError(NotifyError):
    """A missing value could not be inferred from the build context."""
    pass


class CannotInferGitDataError(InferenceError):
    message = "Unable to infer git data, please specify repo, credentialsId and sha values"


class CannotInferCredentialsError(InferenceError):
    message = "Can not infer exact credentialsId to use, please specify one"


class CannotInferRepositoryError(InferenceError):
    message = "Can not infer exact repository to use, please specify one"


class CannotInferCommitError(InferenceError):
    message = "Could not infer exact commit to use, please specify one"


class APIError(NotifyError):
    """External API call failed."""
    pass


class GitHubAPIError(APIError):
    """GitHub API call failed."""
    message = "GitHub API call failed"


class DeliveryError(GitHubAPIError):
    """Commit status could not be posted."""
    message = "Failed to send commit status to GitHub"


class CredentialStoreError(NotifyError):
    """Credential store could not be read."""
    message = "Credential store is unreadable"
