"""Stack reconstruction.

Given a target branch and a trunk, find the other local branches that are
steps of the same stack and split the stack's commits into per-branch groups.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Tuple

from ..typing import (
    CommitID, GitInterface, Branch, DegenerateStack, DetachedOrUnbornBranch, NoCommonAncestor,
)

# Get module logger
logger = logging.getLogger(__name__)

@dataclass
class PrBranch:
    """One entry of the stack: a branch and the commits it owns."""
    name: str
    tip: CommitID
    commit_ids: List[CommitID] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"Pr({self.name}, {[c[:7] for c in self.commit_ids]})"

@dataclass
class PrChain:
    """The resolved stack, ordered from the branch closest to trunk upwards.

    No commit appears in more than one branch and every branch owns at least
    one commit.
    """
    branches: List[PrBranch] = field(default_factory=list)

    def __iter__(self) -> Iterator[PrBranch]:
        return iter(self.branches)

    def __len__(self) -> int:
        return len(self.branches)

    def names(self) -> List[str]:
        """Branch names in stack order."""
        return [pr.name for pr in self.branches]

    def commit_ids(self) -> List[CommitID]:
        """Every commit of the stack, base to tip."""
        return [commit_id for pr in self.branches for commit_id in pr.commit_ids]

class StackResolver:
    """Builds a PrChain from the branches of a repository."""

    def __init__(self, git_cmd: GitInterface):
        """Initialize with a repository accessor."""
        self.git_cmd = git_cmd

    def build_chain(self, trunk_name: str, branch_name: str) -> PrChain:
        """Resolve the stack ending at branch_name on top of trunk_name.

        Raises:
            BranchNotFound: trunk or branch doesn't exist
            DetachedOrUnbornBranch: trunk or branch doesn't point at a commit
            NoCommonAncestor: branch and trunk have unrelated histories
            DegenerateStack: branch has no commits on top of trunk
        """
        trunk, trunk_id = self.git_cmd.resolve_branch(trunk_name)
        branch, branch_id = self.git_cmd.resolve_branch(branch_name)

        base = self.git_cmd.merge_base(trunk_id, branch_id)
        if base == branch_id:
            raise DegenerateStack(branch_name, trunk_name, branch_id)

        main_pr = PrBranch(
            name=branch.name,
            tip=branch_id,
            commit_ids=self.git_cmd.ancestor_range(branch_id, trunk_id),
        )

        chain = [
            PrBranch(
                name=other.name,
                tip=other_id,
                commit_ids=self.git_cmd.ancestor_range(other_id, trunk_id),
            )
            for other, other_id in self.find_siblings(trunk, branch, trunk_id, base)
        ]
        chain.append(main_pr)

        if len(chain) > 1:
            # In a well formed stack each branch extends the one below it, so
            # the branch with the most commits is the top of the stack
            chain.sort(key=lambda pr: len(pr.commit_ids))
            deduplicate(chain)
            chain = prune(chain)

        logger.debug(f"Resolved chain: {chain}")
        return PrChain(chain)

    def find_siblings(self, trunk: Branch, branch: Branch, trunk_id: CommitID,
                      base: CommitID) -> List[Tuple[Branch, CommitID]]:
        """Local branches that leave trunk at the same commit as branch.

        Branches that don't resolve, or that diverge somewhere else, aren't part
        of the stack and are skipped.
        """
        siblings: List[Tuple[Branch, CommitID]] = []
        for other in self.git_cmd.list_local_branches():
            if other.name in (trunk.name, branch.name):
                continue
            if other.tip is None:
                logger.debug(f"Skipping '{other.name}': no tip commit")
                continue
            try:
                other_base = self.git_cmd.merge_base(trunk_id, other.tip)
            except (NoCommonAncestor, DetachedOrUnbornBranch) as e:
                logger.debug(f"Skipping '{other.name}': {e}")
                continue
            if other_base != base:
                logger.debug(f"Skipping '{other.name}': leaves {trunk.name} at {other_base[:7]}")
                continue
            logger.debug(f"Found stack branch '{other.name}'")
            siblings.append((other, other.tip))
        return siblings

def deduplicate(chain: List[PrBranch]) -> None:
    """Strip commits already owned by a lower branch, in place.

    For each branch, the commits of the branch just below it (as they were
    before this pass) are removed from the front of every higher branch while
    they match. Matching stops at the first difference, so a branch that isn't
    a clean extension of the one below keeps the rest of its commits.
    """
    for i in range(1, len(chain)):
        previous_commits = list(chain[i - 1].commit_ids)

        for pr in chain[i:]:
            for previous_commit in previous_commits:
                if not pr.commit_ids:
                    break
                if pr.commit_ids[0] != previous_commit:
                    break
                pr.commit_ids.pop(0)

def prune(chain: List[PrBranch]) -> List[PrBranch]:
    """Drop branches left without commits of their own."""
    result: List[PrBranch] = []
    for pr in chain:
        if pr.commit_ids:
            result.append(pr)
        else:
            logger.warning(f"Branch '{pr.name}' doesn't have any unique commits")
    return result

def build_chain(git_cmd: GitInterface, trunk_name: str, branch_name: str) -> PrChain:
    """Shortcut for StackResolver(git_cmd).build_chain(trunk_name, branch_name)."""
    return StackResolver(git_cmd).build_chain(trunk_name, branch_name)
