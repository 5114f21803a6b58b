"""Common types used across the codebase."""

from dataclasses import dataclass
from typing import List, NewType, Optional, Protocol, Sequence, Tuple, runtime_checkable

# Full 40-hex object name of a commit
CommitID = NewType('CommitID', str)


@dataclass(frozen=True)
class Commit:
    """A single commit as read from the repository."""
    commit_id: CommitID
    parent_ids: Tuple[CommitID, ...] = ()
    summary: str = ""


@dataclass(frozen=True)
class Branch:
    """A local branch. `tip` is None when the ref can't be peeled to a commit."""
    name: str
    tip: Optional[CommitID] = None


@runtime_checkable
class GitInterface(Protocol):
    """Read-only access to the commit graph of a repository."""

    def resolve_branch(self, name: str) -> Tuple[Branch, CommitID]:
        """Look up a local branch and its tip commit."""
        ...

    def merge_base(self, a: CommitID, b: CommitID) -> CommitID:
        """Best common ancestor of two commits."""
        ...

    def ancestor_range(self, tip: CommitID, excluding: CommitID) -> List[CommitID]:
        """Commits reachable from tip but not from excluding, oldest first."""
        ...

    def list_local_branches(self) -> Sequence[Branch]:
        """All local branches."""
        ...

    def get_commit(self, commit_id: CommitID) -> Commit:
        """Look up a single commit."""
        ...

    def log_graph(self, revisions: Sequence[str]) -> str:
        """Render a textual commit graph for the given revisions."""
        ...


class PrChainError(Exception):
    """Base class for every error prchain reports to the user."""


class RepositoryNotFound(PrChainError):
    """Raised when the working directory is not inside a git repository."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Couldn't find a repository at '{path}'")


class BranchNotFound(PrChainError):
    """Raised when a named branch doesn't exist locally."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Couldn't find branch '{name}'")


class DetachedOrUnbornBranch(PrChainError):
    """Raised when a branch ref exists but doesn't point at a commit."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Couldn't find a reference for {name}")


class NoCommonAncestor(PrChainError):
    """Raised when two commits have unrelated histories."""

    def __init__(self, a: str, b: str):
        self.a = a
        self.b = b
        super().__init__(f"Couldn't find a merge base of '{a}' and '{b}'")


class DegenerateStack(PrChainError):
    """Raised when the target branch isn't ahead of trunk at all."""

    def __init__(self, branch: str, trunk: str, commit_id: str):
        self.branch = branch
        self.trunk = trunk
        self.commit_id = commit_id
        super().__init__(
            f"Branch '{branch}' has no commits on top of '{trunk}' "
            f"(merge base is its own tip {commit_id[:7]})")


class RemoteFetchFailed(PrChainError):
    """Raised when fetching a remote fails."""

    def __init__(self, remote: str, cause: Exception):
        self.remote = remote
        self.cause = cause
        super().__init__(f"Couldn't fetch remote '{remote}': {cause}")


class RenderFailed(PrChainError):
    """Raised when the external graph rendering fails."""

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Couldn't render the commit graph: {cause}")

