"""In-memory fake of GitInterface for testing the stack resolver without a repository."""

import hashlib
import logging
from typing import Dict, List, Optional, Sequence, Set, Tuple

from prchain.typing import (
    Branch, Commit, CommitID, BranchNotFound, DetachedOrUnbornBranch, NoCommonAncestor,
)

logger = logging.getLogger(__name__)

class FakeGit:
    """Commit DAG plus a branch table.

    Commits must be created parents first, which lets creation order stand in
    for topological order.
    """

    def __init__(self) -> None:
        self._commits: Dict[CommitID, Commit] = {}
        self._order: Dict[CommitID, int] = {}
        self._branches: Dict[str, Optional[CommitID]] = {}
        self._by_summary: Dict[str, CommitID] = {}
        self.graph_calls: List[List[str]] = []

    def commit(self, summary: str, *parents: str) -> CommitID:
        """Create a commit on top of parents (given by id or summary)."""
        parent_ids = tuple(self.id_of(p) for p in parents)
        digest = hashlib.sha1(f"{summary}:{','.join(parent_ids)}".encode()).hexdigest()
        commit_id = CommitID(digest)
        self._commits[commit_id] = Commit(commit_id=commit_id, parent_ids=parent_ids, summary=summary)
        self._order[commit_id] = len(self._order)
        self._by_summary[summary] = commit_id
        return commit_id

    def chain(self, base: str, *summaries: str) -> CommitID:
        """Create a line of commits on top of base, returning the last one."""
        tip = self.id_of(base)
        for summary in summaries:
            tip = self.commit(summary, tip)
        return tip

    def branch(self, name: str, target: Optional[str]) -> None:
        """Point a branch at a commit, or at nothing (unborn) if target is None."""
        self._branches[name] = self.id_of(target) if target is not None else None

    def id_of(self, ref: str) -> CommitID:
        """Resolve a commit id or summary to an id."""
        if ref in self._commits:
            return CommitID(ref)
        if ref in self._by_summary:
            return self._by_summary[ref]
        raise KeyError(f"Unknown commit {ref}")

    def ids(self, *summaries: str) -> List[CommitID]:
        """Ids for several commit summaries."""
        return [self.id_of(s) for s in summaries]

    def _ancestors(self, commit_id: CommitID) -> Set[CommitID]:
        seen: Set[CommitID] = set()
        stack = [commit_id]
        while stack:
            current = stack.pop()
            if current in seen:
                continue
            seen.add(current)
            stack.extend(self._commits[current].parent_ids)
        return seen

    # GitInterface

    def resolve_branch(self, name: str) -> Tuple[Branch, CommitID]:
        if name not in self._branches:
            raise BranchNotFound(name)
        tip = self._branches[name]
        if tip is None:
            raise DetachedOrUnbornBranch(name)
        return Branch(name=name, tip=tip), tip

    def merge_base(self, a: CommitID, b: CommitID) -> CommitID:
        common = self._ancestors(a) & self._ancestors(b)
        if not common:
            raise NoCommonAncestor(a, b)
        # Best common ancestor: one that no other common ancestor descends from
        best = [c for c in common
                if not any(c != other and c in self._ancestors(other) for other in common)]
        return max(best, key=lambda c: self._order[c])

    def ancestor_range(self, tip: CommitID, excluding: CommitID) -> List[CommitID]:
        ids = self._ancestors(tip) - self._ancestors(excluding)
        return sorted(ids, key=lambda c: self._order[c])

    def list_local_branches(self) -> List[Branch]:
        return [Branch(name=name, tip=tip) for name, tip in sorted(self._branches.items())]

    def get_commit(self, commit_id: CommitID) -> Commit:
        return self._commits[commit_id]

    def log_graph(self, revisions: Sequence[str]) -> str:
        self.graph_calls.append(list(revisions))
        return "* fake graph"
