# Models - build context, credentials and notification requests
from .build import (
    Build,
    BranchRevision,
    ItemGroup,
    Job,
    PullRequestRevision,
    Revision,
    ScmSource,
    TagRevision,
)
from .credentials import (
    Credential,
    SecretTextCredential,
    SSHKeyCredential,
    UsernamePasswordCredential,
)
from .notification import CommitState, NotificationRequest

__all__ = [
    "Build",
    "BranchRevision",
    "ItemGroup",
    "Job",
    "PullRequestRevision",
    "Revision",
    "ScmSource",
    "TagRevision",
    "Credential",
    "SecretTextCredential",
    "SSHKeyCredential",
    "UsernamePasswordCredential",
    "CommitState",
    "NotificationRequest",
]
