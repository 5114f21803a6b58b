"""Git interfaces and implementation."""

import os
import logging
import concurrent.futures
from concurrent.futures import Future
from typing import List, Optional, Sequence, Tuple
import git
from git.exc import BadName, BadObject, GitCommandError, InvalidGitRepositoryError, NoSuchPathError
from ..typing import (
    Branch, Commit, CommitID, GitInterface, BranchNotFound, DetachedOrUnbornBranch,
    NoCommonAncestor, RemoteFetchFailed, RenderFailed, RepositoryNotFound,
)
from ..config.models import PrchainConfig

# Get module logger
logger = logging.getLogger(__name__)

__all__ = ['RealGit', 'GitInterface', 'Commit', 'CommitID', 'Branch', 'GRAPH_FORMAT']

# short hash, tab, decorations, subject
GRAPH_FORMAT = "--pretty=format:%C(red)%h%x09%C(green)%d%C(reset)%x20%s"

class RealGit:
    """Real Git implementation, backed by GitPython."""
    def __init__(self, config: PrchainConfig, directory: Optional[str] = None):
        """Open the repository containing directory (default: cwd)."""
        self.config: PrchainConfig = config
        path = directory or os.getcwd()
        try:
            self.repo = git.Repo(path, search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise RepositoryNotFound(path) from e

    @property
    def root(self) -> str:
        """Top level directory of the working tree."""
        return str(self.repo.working_tree_dir or self.repo.git_dir)

    def run_cmd(self, *args: str) -> str:
        """Run a git command and return its output."""
        logger.debug(f"> git {' '.join(args)}")
        method = getattr(self.repo.git, args[0].replace('-', '_'))
        result = method(*args[1:])
        return result if isinstance(result, str) else str(result)

    def resolve_branch(self, name: str) -> Tuple[Branch, CommitID]:
        """Look up a local branch by name and return it with its tip."""
        # Match on the full name, heads[...] would also hit list attributes
        head = next((h for h in self.repo.heads if h.name == name), None)
        if head is None:
            raise BranchNotFound(name)
        tip = self._peel(head)
        if tip is None:
            raise DetachedOrUnbornBranch(name)
        return Branch(name=name, tip=tip), tip

    def merge_base(self, a: CommitID, b: CommitID) -> CommitID:
        """Best common ancestor of a and b."""
        logger.debug(f"> git merge-base {a} {b}")
        try:
            bases = self.repo.merge_base(a, b)
        except GitCommandError as e:
            raise NoCommonAncestor(a, b) from e
        if not bases:
            raise NoCommonAncestor(a, b)
        return CommitID(bases[0].hexsha)

    def ancestor_range(self, tip: CommitID, excluding: CommitID) -> List[CommitID]:
        """All commits reachable from tip and not from excluding, oldest first."""
        if tip == excluding:
            return []
        output = self.run_cmd("rev-list", "--topo-order", tip, f"^{excluding}")
        ids = [CommitID(line.strip()) for line in output.splitlines() if line.strip()]
        ids.reverse()
        return ids

    def list_local_branches(self) -> List[Branch]:
        """All local branches in ref name order."""
        return [Branch(name=head.name, tip=self._peel(head)) for head in self.repo.heads]

    def get_commit(self, commit_id: CommitID) -> Commit:
        """Look up a commit by id."""
        commit = self.repo.commit(commit_id)
        return Commit(
            commit_id=CommitID(commit.hexsha),
            parent_ids=tuple(CommitID(p.hexsha) for p in commit.parents),
            summary=str(commit.summary),
        )

    def fetch_remotes(self) -> None:
        """Fetch every configured remote, stopping at the first failure."""
        remotes = list(self.repo.remotes)
        concurrency = self.config.tool.concurrency
        if concurrency > 0 and len(remotes) > 1:
            with concurrent.futures.ThreadPoolExecutor(max_workers=concurrency) as executor:
                futures: Sequence[Future[None]] = [
                    executor.submit(self._fetch_remote, remote) for remote in remotes
                ]
                concurrent.futures.wait(futures)
            for future in futures:
                future.result()  # Re-raise in remote order
            return
        for remote in remotes:
            self._fetch_remote(remote)

    def _fetch_remote(self, remote: git.Remote) -> None:
        logger.info(f"Fetching remote: {remote.name}")
        try:
            self.run_cmd("fetch", remote.name)
        except GitCommandError as e:
            raise RemoteFetchFailed(remote.name, e) from e

    def log_graph(self, revisions: Sequence[str]) -> str:
        """Render the commit graph leading up to revisions with `git log --graph`."""
        color = "--color" if self.config.user.color else "--no-color"
        try:
            return self.run_cmd("log", "--graph", "--full-history", "--all", "--date-order",
                                color, GRAPH_FORMAT, *revisions)
        except GitCommandError as e:
            raise RenderFailed(e) from e

    @staticmethod
    def _peel(head: git.Head) -> Optional[CommitID]:
        """Tip commit of a branch, or None if the ref doesn't resolve to one."""
        try:
            return CommitID(head.commit.hexsha)
        except (ValueError, TypeError, BadName, BadObject) as e:
            logger.debug(f"Couldn't resolve {head.path}: {e}")
            return None
